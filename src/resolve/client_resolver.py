"""Layered client resolution for free-text legacy client names.

The legacy export carries no foreign key; the client signal lives in a
dropdown value and a task title typed by hand over years. Resolution is an
ordered chain of pure layers, each a case-insensitive exact lookup, tried
from most to least reliable:

1. direct name: the raw dropdown value, then the raw title, against the
   canonical name aliases;
2. dropdown alias: the exact dropdown value against the dropdown aliases;
3. dropdown first token: the dropdown text before ``" - "`` against the
   canonical name aliases;
4. title phrase: the title with trailing date/fraction/extra markers
   removed, against the historical aliases and then the canonical names.

The first layer yielding a client id decides. A deny entry (an alias mapped
to None) only blocks its own lookup family: a denied dropdown value is not
retried by its first token, and a denied historical phrase is not looked up
as a client name. Later layers still run, so a confident title match wins
over a denied dropdown. A row no layer resolves is left unresolved, which
tells the caller to create a stub for manual review rather than guess.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Callable, Mapping

from core.logging_config import get_logger
from resolve.client_aliases import (
    CLIENT_NAME_ALIASES,
    DROPDOWN_ALIASES,
    HISTORICAL_TITLE_ALIASES,
)

_LOGGER = get_logger(__name__)

_MONTHS = "January|February|March|April|May|June|July|August|September|October|November|December"
_MONTH_ABBREVIATIONS = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"
_TITLE_SUFFIX_PATTERNS = (
    re.compile(r"\s*-\s*\d{4}$"),
    re.compile(rf"\s*-\s*(?:{_MONTHS})\s*\d{{4}}$", re.IGNORECASE),
    re.compile(rf"\s*-\s*(?:{_MONTH_ABBREVIATIONS})\s*\d{{4}}$", re.IGNORECASE),
    re.compile(r"\s*-\s*(?:1/2|2/2)\s+\w+$", re.IGNORECASE),
    re.compile(r"\s*-\s*(?:1/2|2/2)\s+\w+\s*\d*$", re.IGNORECASE),
    re.compile(r"\s*-\s*(?:Extra\s+\w+|Tech\s+Work).*$", re.IGNORECASE),
)
_DROPDOWN_SEPARATOR = " - "


@dataclass(frozen=True)
class ClientSignals:
    """Free-text fields carrying the client signal for one row."""

    title: str
    dropdown: str = ""


@dataclass(frozen=True)
class AliasTables:
    """The three alias tables consulted by the resolver layers."""

    names: Mapping[str, str | None] = field(default_factory=lambda: CLIENT_NAME_ALIASES)
    dropdowns: Mapping[str, str | None] = field(default_factory=lambda: DROPDOWN_ALIASES)
    historical: Mapping[str, str | None] = field(
        default_factory=lambda: HISTORICAL_TITLE_ALIASES
    )


@dataclass(frozen=True)
class ClientResolution:
    """Outcome of resolving one row's client.

    Attributes:
        client_id: Canonical client id, or None when unresolved.
        layer: Name of the deciding layer, or None when no layer matched.
        phrase: The phrase the deciding layer looked up.
    """

    client_id: str | None
    layer: str | None
    phrase: str

    @property
    def resolved(self) -> bool:
        """Return whether a canonical client id was found."""
        return self.client_id is not None


ResolverLayer = Callable[[ClientSignals, AliasTables], "ClientResolution | None"]


def extract_client_phrase(title: str) -> str:
    """Strip trailing period markers from a task title.

    ``"CaseEngine - July 2024"`` becomes ``"CaseEngine"`` and
    ``"Matt M - 2/2 Jun 2025"`` becomes ``"Matt M"``.
    """
    phrase = title
    for pattern in _TITLE_SUFFIX_PATTERNS:
        phrase = pattern.sub("", phrase, count=1)
    return phrase.strip()


def match_direct_name(signals: ClientSignals, tables: AliasTables) -> ClientResolution | None:
    """Look up the raw dropdown value, then the raw title, as a client name."""
    for phrase in (signals.dropdown, signals.title):
        resolution = _lookup(tables.names, phrase, "direct_name")
        if resolution is not None:
            return resolution
    return None


def match_dropdown_alias(signals: ClientSignals, tables: AliasTables) -> ClientResolution | None:
    """Look up the exact dropdown value in the dropdown aliases."""
    return _lookup(tables.dropdowns, signals.dropdown, "dropdown_alias")


def match_dropdown_first_token(
    signals: ClientSignals, tables: AliasTables
) -> ClientResolution | None:
    """Look up the dropdown text before the first separator as a client name.

    A dropdown value denied in the dropdown aliases is not retried here.
    """
    denied = _lookup(tables.dropdowns, signals.dropdown, "dropdown_alias")
    if denied is not None and not denied.resolved:
        return None
    first_token = signals.dropdown.split(_DROPDOWN_SEPARATOR)[0]
    return _lookup(tables.names, first_token, "dropdown_first_token")


def match_title_phrase(signals: ClientSignals, tables: AliasTables) -> ClientResolution | None:
    """Look up the cleaned title phrase in historical aliases, then client names.

    A historical deny entry is returned as is; the phrase is then not
    looked up in the client names.
    """
    phrase = extract_client_phrase(signals.title)
    resolution = _lookup(tables.historical, phrase, "title_historical")
    if resolution is not None:
        return resolution
    return _lookup(tables.names, phrase, "title_name")


DEFAULT_LAYERS: tuple[ResolverLayer, ...] = (
    match_direct_name,
    match_dropdown_alias,
    match_dropdown_first_token,
    match_title_phrase,
)


class ClientResolver:
    """Ordered fallback chain over the resolver layers."""

    def __init__(
        self,
        tables: AliasTables | None = None,
        layers: tuple[ResolverLayer, ...] = DEFAULT_LAYERS,
    ) -> None:
        self._tables = tables or AliasTables()
        self._layers = layers

    def resolve(self, title: str, dropdown: str = "") -> ClientResolution:
        """Resolve a row's client from its title and dropdown value.

        Args:
            title: Task title, e.g. ``"CaseEngine - July 2024"``.
            dropdown: Client dropdown value, possibly empty.

        Returns:
            The first layer's client id. When no layer yields one, an
            unresolved result carrying the cleaned title phrase and the
            first layer that denied the row, if any.
        """
        signals = ClientSignals(title=title.strip(), dropdown=dropdown.strip())
        denied_layer: str | None = None
        for layer in self._layers:
            resolution = layer(signals, self._tables)
            if resolution is None:
                continue
            if resolution.resolved:
                _LOGGER.debug(
                    "client_resolved",
                    title=signals.title,
                    dropdown=signals.dropdown,
                    layer=resolution.layer,
                    phrase=resolution.phrase,
                    client_id=resolution.client_id,
                )
                return resolution
            _LOGGER.debug(
                "client_denied",
                title=signals.title,
                dropdown=signals.dropdown,
                layer=resolution.layer,
                phrase=resolution.phrase,
            )
            denied_layer = denied_layer or resolution.layer
        _LOGGER.debug(
            "client_unresolved",
            title=signals.title,
            dropdown=signals.dropdown,
            denied_by=denied_layer,
        )
        return ClientResolution(
            client_id=None, layer=denied_layer, phrase=extract_client_phrase(signals.title)
        )


def _lookup(
    table: Mapping[str, str | None],
    phrase: str,
    layer: str,
) -> ClientResolution | None:
    """Look up one phrase in an alias table.

    Args:
        table: Lower-cased phrase to client id, None marking a deny entry.
        phrase: Raw phrase; matched case-insensitively after trimming.
        layer: Layer name recorded on the result.

    Returns:
        A resolution, unresolved for a deny entry, or None when the phrase
        is empty or absent from the table.
    """
    key = phrase.lower().strip()
    if not key or key not in table:
        return None
    return ClientResolution(client_id=table[key], layer=layer, phrase=phrase)
