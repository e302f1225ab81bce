"""Unit tests for run report rendering."""

from __future__ import annotations

from pathlib import Path

from core.run_report import RunReport, render_run_report
from core.types import SourceInspection


def test_render_run_report_lists_counts_totals_and_warnings() -> None:
    """Rendered report should show every section in order."""
    report = RunReport(
        sources=[SourceInspection("income", Path("/inbox/income.csv"), True)],
        backup_path=Path("/data/backups/2026-01-15T12-00-00"),
    )
    report.set_count("billingPeriodsNew", 3)
    report.add_total("totalRevenue", 1000)
    report.add_total("totalRevenue", 500.5)
    report.mark_written("billing.json")
    report.warn('Unknown client: "X" (dropdown: "")')

    rendered = render_run_report(report)

    assert "  [ok] income: /inbox/income.csv" in rendered
    assert "Backup: /data/backups/2026-01-15T12-00-00" in rendered
    assert "  billingPeriodsNew: 3" in rendered
    assert "  totalRevenue: $1500.50" in rendered
    assert "Files written: billing.json" in rendered
    assert 'Warnings (1):\n  - Unknown client: "X" (dropdown: "")' in rendered
    assert rendered.endswith("Migration complete")


def test_dry_run_report_announces_no_changes() -> None:
    """Dry-run reports should say the backup was skipped."""
    rendered = render_run_report(RunReport(dry_run=True))

    assert "Backup: skipped (dry run)" in rendered
    assert rendered.endswith("Dry run complete: no files changed")
