"""Unit tests for client stub creation."""

from __future__ import annotations

from datetime import datetime, timezone

from core.types import BillingPeriod
from transforms.client_stubs import build_client_stubs


def _period(client_id: str, client_name: str, month: int) -> BillingPeriod:
    return BillingPeriod(
        id=f"id-{client_id}-{month}",
        client_id=client_id,
        client_name=client_name,
        month=month,
        year=2025,
        status="past",
        payment_status="pending",
        income_tracked=0.0,
        income_retainer=0.0,
        income_project=100.0,
        monthly_total=100.0,
        due_date=None,
        created_at="2025-01-01T00:00:00.000Z",
    )


def test_build_client_stubs_creates_one_stub_per_placeholder() -> None:
    """Repeated placeholder ids should produce a single stub."""
    periods = [
        _period("unknown-somerled", "Somerled", 4),
        _period("unknown-somerled", "Somerled", 5),
        _period("case-engine", "CaseEngine", 4),
    ]

    stubs = build_client_stubs(periods, datetime(2026, 1, 15, tzinfo=timezone.utc))

    assert [stub.id for stub in stubs] == ["unknown-somerled"]


def test_client_stub_carries_review_defaults() -> None:
    """Stubs should be hourly at 100 and tagged for review."""
    stub = build_client_stubs(
        [_period("unknown-agency-lab", "Agency Lab", 1)],
        datetime(2026, 1, 15, tzinfo=timezone.utc),
    )[0]

    assert (stub.revenue_model, stub.hourly_rate) == ("hourly", 100)
    assert stub.tags == ("migrated-from-clickup",) and stub.since == "2026-01-15"
