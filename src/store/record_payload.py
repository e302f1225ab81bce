"""Dashboard JSON serialization for migrated records.

This module owns the camelCase record shapes the dashboard reads.
The dashboard does no validation of its own, so these shapes are the
only contract for every document the migration writes.
"""

from __future__ import annotations

from core.types import A2PRegistration, BillingPeriod, ClientStub, Drop


def billing_period_to_payload(period: BillingPeriod) -> dict[str, object]:
    """Serialize a billing period into its document shape."""
    return {
        "id": period.id,
        "clientId": period.client_id,
        "clientName": period.client_name,
        "month": period.month,
        "year": period.year,
        "status": period.status,
        "paymentStatus": period.payment_status,
        "incomeTracked": period.income_tracked,
        "incomeRetainer": period.income_retainer,
        "incomeProject": period.income_project,
        "monthlyTotal": period.monthly_total,
        "invoiceNumber": period.invoice_number,
        "invoiceSentDate": period.invoice_sent_date,
        "paymentReceivedDate": period.payment_received_date,
        "notes": period.notes,
        "dueDate": period.due_date,
        "createdAt": period.created_at,
    }


def a2p_registration_to_payload(registration: A2PRegistration) -> dict[str, object]:
    """Serialize an A2P registration into its document shape."""
    return {
        "id": registration.id,
        "businessName": registration.business_name,
        "status": registration.status,
        "registrationType": registration.registration_type,
        "businessType": registration.business_type,
        "dateCreated": registration.date_created,
        "dateSubmitted": registration.date_submitted,
        "dateBrandApproved": registration.date_brand_approved,
        "dateFullyApproved": registration.date_fully_approved,
        "approvalDays": registration.approval_days,
        "notes": registration.notes,
        "clientId": registration.client_id,
    }


def drop_to_payload(drop: Drop) -> dict[str, object]:
    """Serialize a drop into its document shape.

    ``archivedAt`` and ``seenAt`` are omitted rather than null when unset.
    """
    payload: dict[str, object] = {
        "id": drop.id,
        "shortId": drop.short_id,
        "type": drop.type,
        "title": drop.title,
        "content": drop.content,
        "status": drop.status,
        "archived": drop.archived,
    }
    if drop.archived_at is not None:
        payload["archivedAt"] = drop.archived_at
    payload["seen"] = drop.seen
    if drop.seen_at is not None:
        payload["seenAt"] = drop.seen_at
    payload["replies"] = list(drop.replies)
    payload["createdAt"] = drop.created_at
    payload["updatedAt"] = drop.updated_at
    return payload


def client_stub_to_payload(stub: ClientStub) -> dict[str, object]:
    """Serialize a client stub into the clients document shape."""
    return {
        "id": stub.id,
        "name": stub.name,
        "contact": stub.contact,
        "business": stub.business,
        "status": stub.status,
        "rate": stub.rate,
        "revenueModel": stub.revenue_model,
        "hourlyRate": stub.hourly_rate,
        "monthlyRetainer": stub.monthly_retainer,
        "projectValue": stub.project_value,
        "monthlyTotal": stub.monthly_total,
        "paymentStatus": stub.payment_status,
        "since": stub.since,
        "lastActivity": stub.last_activity,
        "tags": list(stub.tags),
        "notes": stub.notes,
        "link": stub.link,
    }
