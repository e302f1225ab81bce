"""Append-only, key-deduplicating collection merge.

Existing records are never modified or removed. A new record is appended
only when its identity key is absent from both the existing collection and
the records already added in this merge. There is no fuzzy matching and no
update in place: a drifted record with a matching key stays for human review.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Mapping, Sequence

Record = Mapping[str, object]
IdentityKey = Callable[[Record], Hashable]


@dataclass(frozen=True)
class MergeResult:
    """Merged collection plus the records actually appended."""

    records: tuple[Record, ...]
    added: tuple[Record, ...]

    @property
    def added_count(self) -> int:
        """Return the number of appended records."""
        return len(self.added)


def merge_records(
    existing: Sequence[Record],
    incoming: Iterable[Record],
    identity_key: IdentityKey,
) -> MergeResult:
    """Append incoming records whose identity key is new.

    Args:
        existing: Current persisted records, kept unchanged and first.
        incoming: Newly transformed records, in source order.
        identity_key: Function computing a record's identity key.

    Returns:
        Union of existing records and the non-colliding incoming records.
    """
    seen_keys = {identity_key(record) for record in existing}
    added: list[Record] = []
    for record in incoming:
        key = identity_key(record)
        if key in seen_keys:
            continue
        seen_keys.add(key)
        added.append(record)
    return MergeResult(records=tuple(existing) + tuple(added), added=tuple(added))


def billing_period_key(record: Record) -> Hashable:
    """Identity of a billing period: ``(clientId, month, year)``."""
    return (
        str(record.get("clientId", "")),
        _as_int(record.get("month")),
        _as_int(record.get("year")),
    )


def a2p_registration_key(record: Record) -> Hashable:
    """Identity of an A2P registration: case-insensitive business name."""
    return str(record.get("businessName", "")).strip().lower()


def drop_key(record: Record) -> Hashable:
    """Identity of a drop: case-insensitive trimmed content, else title."""
    content = record.get("content")
    if not isinstance(content, str):
        content = record.get("title", "")
    return str(content).strip().lower()


def client_key(record: Record) -> Hashable:
    """Identity of a client: its id."""
    return str(record.get("id", ""))


def _as_int(value: object) -> int | None:
    """Coerce a stored month or year to int for key comparison.

    Args:
        value: Raw JSON value.

    Returns:
        The integer, or None when the value is not a whole number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None
