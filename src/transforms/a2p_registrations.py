"""A2P export to registration records."""

from __future__ import annotations

from datetime import datetime
import re
from typing import Sequence
from uuid import uuid4

from core.constants import A2P_NOTES_MAX_LENGTH
from core.logging_config import get_logger
from core.run_report import RunReport
from core.types import A2PRegistration, RawRow
from ingest.field_normalizers import format_iso_instant, parse_clickup_date, parse_number
from transforms.status_mapping import map_status

_LOGGER = get_logger(__name__)

# Ordered pipeline: to_submit -> submitted -> {rejected | rejected_resubmitted}
# -> brand_approved -> fully_approved.
A2P_STATUS_MAP = {
    "to submit": "to_submit",
    "submitted": "submitted",
    "rejected": "rejected",
    "rejected-resubmitted": "rejected_resubmitted",
    "brand approved": "brand_approved",
    "fully approved": "fully_approved",
}
REGISTRATION_TYPE_MAP = {
    "a2p 10dlc": "a2p",
    "a2p": "a2p",
    "toll free": "toll_free",
    "toll-free": "toll_free",
    "tollfree": "toll_free",
}
BUSINESS_TYPE_MAP = {
    "business": "business",
    "sole proprietor": "sole_prop",
    "sole prop": "sole_prop",
}

_REGISTRATION_SUFFIX = re.compile(r"\s*-\s*(A2P|Toll Free|TF)$", re.IGNORECASE)


def transform_a2p_rows(
    rows: Sequence[RawRow],
    report: RunReport,
    started_at: datetime,
) -> list[A2PRegistration]:
    """Transform A2P export rows into registrations.

    Args:
        rows: Parsed A2P export rows.
        report: Run report receiving counts and warnings.
        started_at: Run start time used for missing creation dates.

    Returns:
        Registrations in source order, before deduplication.
    """
    report.set_count("a2pRows", len(rows))
    run_timestamp = format_iso_instant(started_at)
    registrations: list[A2PRegistration] = []
    for row in rows:
        task_name = row.get("Task Name", "").strip()
        business_name = _REGISTRATION_SUFFIX.sub("", task_name).strip()
        if not business_name:
            report.warn("A2P row without a business name skipped")
            continue
        registration = A2PRegistration(
            id=str(uuid4()),
            business_name=business_name,
            status=map_status(A2P_STATUS_MAP, row.get("Status", ""), "to_submit", report, "A2P status"),
            registration_type=map_status(
                REGISTRATION_TYPE_MAP,
                row.get("Registration Type (drop down)", ""),
                "a2p",
                report,
                "A2P registration type",
            ),
            business_type=map_status(
                BUSINESS_TYPE_MAP,
                row.get("Business Type (drop down)", ""),
                "business",
                report,
                "A2P business type",
            ),
            date_created=parse_clickup_date(row.get("Date Created")) or run_timestamp,
            date_brand_approved=parse_clickup_date(row.get("Date Approved (date)")) or "",
            approval_days=parse_number(row.get("Approval Time (formula)")),
            notes=row.get("Task Content", "")[:A2P_NOTES_MAX_LENGTH],
        )
        _LOGGER.debug(
            "a2p_registration_built",
            task_name=task_name,
            business_name=business_name,
            status=registration.status,
        )
        registrations.append(registration)
    report.set_count("a2pRegistrations", len(registrations))
    return registrations
