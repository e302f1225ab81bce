"""Run report aggregation and rendering.

The report is built in memory during one run: per-source counts, money
totals, warnings in the order they were raised, and written files. It is
printed, never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from core.types import SourceInspection

_RULE = "=" * 50


@dataclass
class RunReport:
    """Mutable aggregate shared by all stages of one run."""

    dry_run: bool = False
    sources: list[SourceInspection] = field(default_factory=list)
    backup_path: Path | None = None
    counts: dict[str, int] = field(default_factory=dict)
    totals: dict[str, float] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    written: list[str] = field(default_factory=list)

    def set_count(self, name: str, value: int) -> None:
        """Record a named count, replacing any earlier value."""
        self.counts[name] = value

    def add_total(self, name: str, amount: float) -> None:
        """Accumulate a named money total."""
        self.totals[name] = self.totals.get(name, 0.0) + amount

    def warn(self, message: str) -> None:
        """Append a warning for operator review."""
        self.warnings.append(message)

    def mark_written(self, file_name: str) -> None:
        """Record a target document written in this run."""
        self.written.append(file_name)

    def count(self, name: str) -> int:
        """Return a named count, zero when never recorded."""
        return self.counts.get(name, 0)


def render_run_report(report: RunReport) -> str:
    """Render report into stable multi-line text for CLI output."""
    lines = ["", "ClickUp -> Forge Migration", _RULE]
    if report.dry_run:
        lines.append("DRY RUN: no files will be written")
    lines.extend(_render_sources(report.sources))
    lines.append("")
    if report.backup_path is not None:
        lines.append(f"Backup: {report.backup_path}")
    else:
        lines.append("Backup: skipped (dry run)")
    lines.extend(["", _RULE, "MIGRATION REPORT", _RULE])
    lines.append("")
    lines.append("Counts:")
    lines.extend(f"  {name}: {value}" for name, value in report.counts.items())
    if report.totals:
        lines.append("")
        lines.append("Totals:")
        lines.extend(f"  {name}: ${value:.2f}" for name, value in report.totals.items())
    if report.written:
        lines.append("")
        lines.append(f"Files written: {', '.join(report.written)}")
    if report.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(report.warnings)}):")
        lines.extend(f"  - {warning}" for warning in report.warnings)
    lines.append("")
    if report.dry_run:
        lines.append("Dry run complete: no files changed")
    else:
        lines.append("Migration complete")
    return "\n".join(lines)


def render_source_inspection(sources: list[SourceInspection]) -> str:
    """Render only the source presence section."""
    return "\n".join(_render_sources(sources)).lstrip("\n")


def _render_sources(sources: list[SourceInspection]) -> list[str]:
    """Render the source presence section as lines.

    Args:
        sources: Presence results in source order.

    Returns:
        Lines beginning with a blank separator line.
    """
    lines = ["", "CSV files:"]
    for source in sources:
        marker = "ok" if source.exists else "missing"
        lines.append(f"  [{marker}] {source.source_key}: {source.path}")
    return lines
