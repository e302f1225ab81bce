"""Shared typed models.

This module defines immutable data models passed between the parser,
transformers, store, and orchestration layers so interfaces stay explicit.
Field names are snake_case here; ``store.record_payload`` owns the camelCase
document shape the dashboard reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

RawRow = Mapping[str, str]


@dataclass(frozen=True)
class BillingPeriod:
    """One client's revenue for one calendar month.

    Attributes:
        id: Synthetic unique id, never part of identity.
        client_id: Resolved client id or an ``unknown-<slug>`` placeholder.
        client_name: Display name extracted from the task title.
        month: Calendar month, 1-12.
        year: Four-digit year.
        status: Period status (next, current, past, completed).
        payment_status: Payment status (pending, invoiceSent, received, completed).
        income_tracked: Tracked-hours income.
        income_retainer: Retainer income.
        income_project: Single-project income.
        monthly_total: Source total when nonzero, else the component sum.
        due_date: ISO instant or None.
        created_at: ISO instant.
        payment_received_date: ISO instant when already received.
        invoice_number: Invoice reference, blank at migration time.
        invoice_sent_date: ISO instant, unset at migration time.
        notes: Free text, blank at migration time.
    """

    id: str
    client_id: str
    client_name: str
    month: int
    year: int
    status: str
    payment_status: str
    income_tracked: float
    income_retainer: float
    income_project: float
    monthly_total: float
    due_date: str | None
    created_at: str
    payment_received_date: str | None = None
    invoice_number: str = ""
    invoice_sent_date: str | None = None
    notes: str = ""


@dataclass(frozen=True)
class A2PRegistration:
    """One business's A2P/toll-free compliance registration."""

    id: str
    business_name: str
    status: str
    registration_type: str
    business_type: str
    date_created: str
    date_brand_approved: str
    approval_days: float | None
    notes: str
    date_submitted: str = ""
    date_fully_approved: str = ""
    client_id: str = ""


@dataclass(frozen=True)
class Drop:
    """Lightweight inbox item imported from the task dump.

    Attributes:
        archived_at: Set exactly when ``archived`` is true.
        seen_at: Set exactly when ``seen`` is true.
    """

    id: str
    short_id: str
    title: str
    content: str
    status: str
    archived: bool
    archived_at: str | None
    seen: bool
    seen_at: str | None
    created_at: str
    updated_at: str
    type: str = "task"
    replies: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClientStub:
    """Placeholder client created for an unresolved billing client."""

    id: str
    name: str
    since: str
    last_activity: str
    tags: tuple[str, ...]
    notes: str
    revenue_model: str
    hourly_rate: int
    status: str = "active"
    payment_status: str = "pending"
    contact: str = ""
    business: str = ""
    rate: str = ""
    monthly_retainer: int = 0
    project_value: int = 0
    monthly_total: int = 0
    link: str = ""


@dataclass(frozen=True)
class SourceInspection:
    """Presence check result for one source export."""

    source_key: str
    path: Path
    exists: bool


@dataclass(frozen=True)
class MigrationOptions:
    """Migration command options.

    Attributes:
        dry_run: Perform every step but write nothing.
        verbose: Emit per-row decision trace events.
    """

    dry_run: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class CollectionSpec:
    """Location and collection key of one target JSON document."""

    file_name: str
    collection_key: str


@dataclass(frozen=True)
class CollectionDocument:
    """In-memory copy of one target JSON document.

    Attributes:
        spec: Document location and collection key.
        records: Records under the collection key, in file order.
        extra_fields: Other top-level keys, preserved on write.
        existed: Whether the file was present on disk.
    """

    spec: CollectionSpec
    records: tuple[Mapping[str, object], ...]
    extra_fields: Mapping[str, object] = field(default_factory=dict)
    existed: bool = False
