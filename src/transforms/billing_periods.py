"""Time Tracking / Income export to billing period records.

Each income row is one client-month. Rows without a month and year are
skipped; rows whose client cannot be resolved get a deterministic
``unknown-<slug>`` placeholder id so a stub client can be created.
"""

from __future__ import annotations

from datetime import datetime
import re
from typing import Sequence
from uuid import uuid4

from core.constants import (
    TOTAL_MISMATCH_TOLERANCE,
    UNKNOWN_CLIENT_FALLBACK_SLUG,
    UNKNOWN_CLIENT_PREFIX,
)
from core.logging_config import get_logger
from core.run_report import RunReport
from core.types import BillingPeriod, RawRow
from ingest.field_normalizers import format_iso_instant, parse_clickup_date, parse_currency
from resolve.client_resolver import ClientResolver, extract_client_phrase
from transforms.status_mapping import map_status

_LOGGER = get_logger(__name__)

MONTH_NUMBERS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}
PAYMENT_STATUS_MAP = {
    "pending": "pending",
    "sent for payment": "invoiceSent",
    "received": "received",
    "completed": "completed",
}
PERIOD_STATUS_MAP = {
    "next month": "next",
    "current month": "current",
    "past month": "past",
    "completed": "completed",
}
RECEIVED_PAYMENT_STATUSES = ("received", "completed")

_LEADING_DIGITS = re.compile(r"^\s*(\d+)")
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def transform_income_rows(
    rows: Sequence[RawRow],
    resolver: ClientResolver,
    report: RunReport,
    started_at: datetime,
) -> list[BillingPeriod]:
    """Transform income export rows into billing periods.

    Args:
        rows: Parsed income export rows.
        resolver: Client resolver.
        report: Run report receiving counts, totals, and warnings.
        started_at: Run start time used for missing timestamps.

    Returns:
        Billing periods in source order, before deduplication.
    """
    report.set_count("incomeRows", len(rows))
    run_timestamp = format_iso_instant(started_at)
    periods: list[BillingPeriod] = []
    for row in rows:
        period = _transform_income_row(row, resolver, report, run_timestamp)
        if period is not None:
            periods.append(period)
    report.set_count("billingPeriods", len(periods))
    report.add_total("totalRevenue", sum(period.monthly_total for period in periods))
    report.add_total(
        "receivedRevenue",
        sum(
            period.monthly_total
            for period in periods
            if period.payment_status in RECEIVED_PAYMENT_STATUSES
        ),
    )
    return periods


def compute_monthly_total(
    source_total: float,
    income_tracked: float,
    income_retainer: float,
    income_project: float,
) -> float:
    """Prefer the source-reported total; fall back to the component sum."""
    return source_total or (income_tracked + income_retainer + income_project)


def placeholder_client_id(client_phrase: str) -> str:
    """Build the deterministic placeholder id for an unresolved client."""
    slug = _NON_SLUG_CHARS.sub("-", client_phrase.lower()).strip("-")
    return f"{UNKNOWN_CLIENT_PREFIX}{slug or UNKNOWN_CLIENT_FALLBACK_SLUG}"


def _transform_income_row(
    row: RawRow,
    resolver: ClientResolver,
    report: RunReport,
    run_timestamp: str,
) -> BillingPeriod | None:
    """Build one billing period, or None when the row has no month or year.

    Args:
        row: Raw income row.
        resolver: Client resolver.
        report: Run report receiving warnings.
        run_timestamp: ISO run time for missing and received dates.

    Returns:
        The billing period, or None for a skipped row.
    """
    task_name = row.get("Task Name", "").strip()
    dropdown = row.get("Client (drop down)", "").strip()
    month = MONTH_NUMBERS.get(row.get("Month (drop down)", "").lower().strip())
    year = _parse_year(row.get("Year (drop down)", ""))
    if not month or not year:
        _LOGGER.debug("income_row_skipped", task_name=task_name, reason="missing_month_or_year")
        report.warn(f'No month/year for: "{task_name}"')
        return None

    resolution = resolver.resolve(task_name, dropdown)
    client_phrase = extract_client_phrase(task_name) or task_name
    if not resolution.resolved:
        report.warn(f'Unknown client: "{task_name}" (dropdown: "{dropdown}")')
    client_id = resolution.client_id or placeholder_client_id(client_phrase)

    income_tracked = parse_currency(row.get("$ (Tracked) (formula)"))
    income_retainer = parse_currency(row.get("Retainer (currency)"))
    income_project = parse_currency(row.get("Single Project (currency)"))
    source_total = parse_currency(row.get("Monthly Total (formula)"))
    component_sum = income_tracked + income_retainer + income_project
    if source_total and component_sum and abs(source_total - component_sum) > TOTAL_MISMATCH_TOLERANCE:
        report.warn(
            f'Total mismatch for "{task_name}": source ${source_total:.2f} vs '
            f"components ${component_sum:.2f}, kept source total"
        )
    monthly_total = compute_monthly_total(
        source_total, income_tracked, income_retainer, income_project
    )

    payment_status = map_status(
        PAYMENT_STATUS_MAP,
        row.get("Payment Status (drop down)", ""),
        "pending",
        report,
        "payment status",
    )
    period_status = map_status(
        PERIOD_STATUS_MAP, row.get("Status", ""), "past", report, "billing period status"
    )
    _LOGGER.debug(
        "billing_period_built",
        task_name=task_name,
        client_id=client_id,
        month=month,
        year=year,
        monthly_total=monthly_total,
        payment_status=payment_status,
    )
    return BillingPeriod(
        id=str(uuid4()),
        client_id=client_id,
        client_name=client_phrase,
        month=month,
        year=year,
        status=period_status,
        payment_status=payment_status,
        income_tracked=income_tracked,
        income_retainer=income_retainer,
        income_project=income_project,
        monthly_total=monthly_total,
        due_date=parse_clickup_date(row.get("Due Date")),
        created_at=parse_clickup_date(row.get("Date Created")) or run_timestamp,
        payment_received_date=run_timestamp if payment_status == "received" else None,
    )


def _parse_year(raw_value: str) -> int | None:
    """Read the leading digits of a year dropdown value.

    Args:
        raw_value: Raw year field, e.g. ``"2025"``.

    Returns:
        The year, or None when there are no leading digits or they are zero.
    """
    match = _LEADING_DIGITS.match(raw_value)
    if match is None:
        return None
    return int(match.group(1)) or None
