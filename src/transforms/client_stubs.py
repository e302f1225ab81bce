"""Placeholder clients for unresolved billing periods."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from core.constants import (
    STUB_CLIENT_NOTES,
    STUB_CLIENT_TAG,
    STUB_HOURLY_RATE,
    STUB_REVENUE_MODEL,
    UNKNOWN_CLIENT_PREFIX,
)
from core.types import BillingPeriod, ClientStub


def build_client_stubs(periods: Iterable[BillingPeriod], started_at: datetime) -> list[ClientStub]:
    """Build one stub per distinct placeholder client id.

    Args:
        periods: Transformed billing periods.
        started_at: Run start time; its date becomes ``since``.

    Returns:
        Stubs in first-seen order. Resolved clients produce none.
    """
    run_date = started_at.date().isoformat()
    stubs: list[ClientStub] = []
    seen_ids: set[str] = set()
    for period in periods:
        if not period.client_id.startswith(UNKNOWN_CLIENT_PREFIX) or period.client_id in seen_ids:
            continue
        seen_ids.add(period.client_id)
        stubs.append(
            ClientStub(
                id=period.client_id,
                name=period.client_name,
                since=run_date,
                last_activity=run_date,
                tags=(STUB_CLIENT_TAG,),
                notes=STUB_CLIENT_NOTES,
                revenue_model=STUB_REVENUE_MODEL,
                hourly_rate=STUB_HOURLY_RATE,
            )
        )
    return stubs
