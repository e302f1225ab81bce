"""Closed status-vocabulary translation shared by the transformers."""

from __future__ import annotations

from typing import Mapping

from core.run_report import RunReport


def map_status(
    table: Mapping[str, str],
    raw_value: str,
    default: str,
    report: RunReport,
    field_label: str,
) -> str:
    """Translate a source status through a closed table.

    Lookup is case-insensitive on the trimmed value. An empty value maps
    to the default silently; an unknown non-empty value maps to the
    default and records a warning.

    Args:
        table: Lower-cased source value to target value.
        raw_value: Raw source field.
        default: Safe target value for empty or unknown input.
        report: Run report receiving unknown-value warnings.
        field_label: Human label for the warning, e.g. ``"A2P status"``.

    Returns:
        Target enum value.
    """
    key = raw_value.lower().strip()
    if not key:
        return default
    if key in table:
        return table[key]
    report.warn(f'Unknown {field_label} "{raw_value.strip()}" mapped to "{default}"')
    return default
