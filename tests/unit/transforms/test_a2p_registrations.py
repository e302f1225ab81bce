"""Unit tests for the A2P transformer."""

from __future__ import annotations

from datetime import datetime, timezone

from core.run_report import RunReport
from transforms.a2p_registrations import transform_a2p_rows

STARTED_AT = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _a2p_row(**overrides: str) -> dict[str, str]:
    row = {
        "Task Name": "Acme Plumbing - A2P",
        "Status": "Rejected-Resubmitted",
        "Registration Type (drop down)": "A2P 10DLC",
        "Business Type (drop down)": "Sole Proprietor",
        "Date Created": "",
        "Date Approved (date)": "",
        "Approval Time (formula)": "",
        "Task Content": "",
    }
    row.update(overrides)
    return row


def test_rejected_resubmitted_row_keeps_missing_approval_days_null() -> None:
    """An empty approval time should be None rather than zero."""
    registrations = transform_a2p_rows([_a2p_row()], RunReport(), STARTED_AT)

    registration = registrations[0]
    assert registration.status == "rejected_resubmitted"
    assert registration.approval_days is None
    assert registration.business_name == "Acme Plumbing"
    assert (registration.registration_type, registration.business_type) == ("a2p", "sole_prop")


def test_toll_free_row_maps_type_and_approval_fields() -> None:
    """Toll-free rows should strip their suffix and parse approval data."""
    registrations = transform_a2p_rows(
        [
            _a2p_row(**{
                "Task Name": "Bright Dental - Toll Free",
                "Status": "Fully Approved",
                "Registration Type (drop down)": "Toll Free",
                "Business Type (drop down)": "Business",
                "Date Approved (date)": "Friday, February 14th 2025",
                "Approval Time (formula)": "11",
            })
        ],
        RunReport(),
        STARTED_AT,
    )

    registration = registrations[0]
    assert registration.business_name == "Bright Dental"
    assert registration.registration_type == "toll_free"
    assert registration.date_brand_approved == "2025-02-14T00:00:00.000Z"
    assert registration.approval_days == 11.0


def test_notes_are_truncated_and_missing_dates_default() -> None:
    """Notes should be bounded and a missing creation date uses run time."""
    registrations = transform_a2p_rows(
        [_a2p_row(**{"Task Content": "x" * 900})], RunReport(), STARTED_AT
    )

    assert len(registrations[0].notes) == 500
    assert registrations[0].date_created == "2026-01-15T12:00:00.000Z"
    assert registrations[0].date_brand_approved == ""


def test_unknown_status_defaults_to_to_submit_with_warning() -> None:
    """Unknown A2P statuses should fall back to to_submit and be reported."""
    report = RunReport()

    registrations = transform_a2p_rows([_a2p_row(Status="Escalated")], report, STARTED_AT)

    assert registrations[0].status == "to_submit"
    assert report.warnings == ['Unknown A2P status "Escalated" mapped to "to_submit"']


def test_row_without_business_name_is_skipped() -> None:
    """Rows with an empty task name should be skipped with a warning."""
    report = RunReport()

    registrations = transform_a2p_rows([_a2p_row(**{"Task Name": " - A2P"})], report, STARTED_AT)

    assert registrations == [] and len(report.warnings) == 1
