"""Tasks Dump export to drop records."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence
from uuid import uuid4

from core.constants import DROP_SHORT_ID_LENGTH, DROP_TYPE
from core.logging_config import get_logger
from core.run_report import RunReport
from core.types import Drop, RawRow
from ingest.field_normalizers import format_iso_instant, parse_clickup_date
from transforms.status_mapping import map_status

_LOGGER = get_logger(__name__)

DROP_STATUS_MAP = {
    "to do": "new",
    "ai created": "new",
    "in progress": "new",
    "hold/waiting": "new",
    "for later": "new",
    "complete": "archived",
}


def transform_task_rows(
    rows: Sequence[RawRow],
    report: RunReport,
    started_at: datetime,
) -> list[Drop]:
    """Transform task dump rows into drops.

    Args:
        rows: Parsed task dump rows.
        report: Run report receiving counts and warnings.
        started_at: Run start time for archival and missing timestamps.

    Returns:
        Drops in source order, before deduplication.
    """
    report.set_count("taskRows", len(rows))
    run_timestamp = format_iso_instant(started_at)
    drops: list[Drop] = []
    for row in rows:
        title = row.get("Task Name", "").strip()
        if not title:
            report.warn("Task row without a title skipped")
            continue
        status = map_status(DROP_STATUS_MAP, row.get("Status", ""), "new", report, "task status")
        archived = status == "archived"
        drops.append(
            Drop(
                id=str(uuid4()),
                short_id=uuid4().hex[:DROP_SHORT_ID_LENGTH],
                type=DROP_TYPE,
                title=title,
                content=title,
                status=status,
                archived=archived,
                archived_at=run_timestamp if archived else None,
                seen=archived,
                seen_at=run_timestamp if archived else None,
                created_at=parse_clickup_date(row.get("Date Created")) or run_timestamp,
                updated_at=parse_clickup_date(row.get("Date Updated")) or run_timestamp,
            )
        )
        _LOGGER.debug("drop_built", title=title, status=status)
    report.set_count("taskDrops", len(drops))
    return drops
