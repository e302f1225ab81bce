"""Total field normalizers for raw CSV strings.

Every function here accepts any string (or None) and returns a safe
default instead of raising.
"""

from __future__ import annotations

from datetime import datetime, timezone
import math
import re

import pandas as pd

_ORDINAL_SUFFIX = re.compile(r"(\d+)(st|nd|rd|th)")
_TRAILING_UTC_OFFSET = re.compile(r"\s+[+-]\d{2}:\d{2}$")
_LEADING_FLOAT = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_CURRENCY_NOISE = re.compile(r"[$,]")
_DIGIT = re.compile(r"\d")


def parse_clickup_date(value: str | None) -> str | None:
    """Parse a ClickUp date into an ISO-8601 UTC instant.

    Handles ``"Wednesday, July 2nd 2025"`` and
    ``"Sunday, June 1st 2025, 11:02:52 pm -07:00"``: the first ordinal
    suffix and a trailing offset are stripped before parsing. Wall-clock
    values are read as UTC. Values without any digit, such as ``"today"``,
    are rejected rather than resolved against the current clock.

    Args:
        value: Raw date field.

    Returns:
        ISO instant string, or None when empty or unparsable.
    """
    if not value or not _DIGIT.search(value):
        return None
    cleaned = _ORDINAL_SUFFIX.sub(r"\1", value.strip(), count=1)
    cleaned = _TRAILING_UTC_OFFSET.sub("", cleaned)
    try:
        parsed = pd.to_datetime(cleaned, errors="coerce", format="mixed")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return format_iso_instant(parsed.to_pydatetime())


def format_iso_instant(moment: datetime) -> str:
    """Format a datetime as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.

    Naive datetimes are taken to be UTC already.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc_moment = moment.astimezone(timezone.utc)
    return utc_moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_moment.microsecond // 1000:03d}Z"


def parse_currency(value: str | None) -> float:
    """Parse a currency amount such as ``"$1,500.00"``.

    Returns:
        The finite amount, or exactly ``0.0`` for empty or unparsable input.
    """
    if not value:
        return 0.0
    parsed = _parse_leading_float(_CURRENCY_NOISE.sub("", value))
    return 0.0 if parsed is None else parsed


def parse_number(value: str | None) -> float | None:
    """Parse a plain number, keeping "not recorded" distinct from zero.

    Returns:
        The finite number, or None for empty or unparsable input.
    """
    if not value:
        return None
    return _parse_leading_float(value)


def _parse_leading_float(value: str) -> float | None:
    """Parse the leading numeric prefix of a string.

    Args:
        value: Cleaned raw value.

    Returns:
        The finite number, or None when there is no numeric prefix.
    """
    match = _LEADING_FLOAT.match(value)
    if match is None:
        return None
    try:
        number = float(match.group(0))
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None
