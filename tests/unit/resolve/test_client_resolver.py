"""Unit tests for layered client resolution."""

from __future__ import annotations

import pytest

from resolve.client_resolver import (
    AliasTables,
    ClientResolver,
    ClientSignals,
    extract_client_phrase,
    match_direct_name,
    match_dropdown_alias,
    match_dropdown_first_token,
    match_title_phrase,
)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("School of Mentors - 2026", "School of Mentors"),
        ("CaseEngine - July 2024", "CaseEngine"),
        ("CaseEngine - Feb 2025", "CaseEngine"),
        ("Matt M - 1/2 March", "Matt M"),
        ("Matt M - 2/2 Jun 2025", "Matt M"),
        ("BlueCollarKing - Extra Tasks", "BlueCollarKing"),
        ("Joel / Isaac - Tech Work - landing page", "Joel / Isaac"),
        ("Styled Survey", "Styled Survey"),
    ],
)
def test_extract_client_phrase_strips_trailing_period_markers(title: str, expected: str) -> None:
    """Trailing years, months, fractions, and extras should be removed."""
    assert extract_client_phrase(title) == expected


def test_title_heuristic_resolves_month_year_title() -> None:
    """A month-year title should resolve through its cleaned phrase."""
    resolution = ClientResolver().resolve("CaseEngine - July 2024")

    assert resolution.client_id == "case-engine" and resolution.layer == "title_name"


def test_dropdown_alias_resolves_exact_dropdown_value() -> None:
    """An exact dropdown value should resolve through the dropdown table."""
    resolution = ClientResolver().resolve("Matt M - March 2025", "BCK - Matt M")

    assert resolution.client_id == "bluecollarking" and resolution.layer == "dropdown_alias"


def test_dropdown_first_token_retries_name_lookup() -> None:
    """An unknown dropdown value should retry on its first segment."""
    resolution = ClientResolver().resolve("Landing page", "CaseEngine - New Contact")

    assert resolution.client_id == "case-engine"
    assert resolution.layer == "dropdown_first_token"


def test_historical_alias_resolves_person_name() -> None:
    """Person names from old titles should resolve through historical aliases."""
    resolution = ClientResolver().resolve("Matt M - 2/2 Jun 2025")

    assert resolution.client_id == "bluecollarking" and resolution.layer == "title_historical"


def test_direct_name_beats_conflicting_historical_alias() -> None:
    """An earlier layer's confident match must not be overridden by a later one."""
    tables = AliasTables(
        names={"matt m": "matt-m-direct"},
        dropdowns={},
        historical={"matt m": "bluecollarking"},
    )

    resolution = ClientResolver(tables).resolve("Matt M")

    assert resolution.client_id == "matt-m-direct" and resolution.layer == "direct_name"


def test_dropdown_deny_entry_does_not_block_title_match() -> None:
    """A denied dropdown value should still let the title resolve the client."""
    resolution = ClientResolver().resolve("CaseEngine - July 2024", "Somerled")

    assert resolution.client_id == "case-engine" and resolution.layer == "title_name"


@pytest.mark.parametrize(
    ("title", "dropdown", "expected"),
    [
        ("Matt M - March 2025", "Agency Lab", "bluecollarking"),
        ("Swati Course GHL - 2025", "One-off", "swati"),
    ],
)
def test_title_layers_run_after_dropdown_deny(title: str, dropdown: str, expected: str) -> None:
    """Historical and name lookups on the title should follow a dropdown deny."""
    assert ClientResolver().resolve(title, dropdown).client_id == expected


def test_dropdown_deny_skips_first_token_retry() -> None:
    """A denied dropdown value should not resolve through its first segment."""
    tables = AliasTables(
        names={"ems": "ems-direct"},
        dropdowns={"ems - mike r": None},
        historical={},
    )

    resolution = ClientResolver(tables).resolve("Landing page", "EMS - Mike R")

    assert resolution.resolved is False and resolution.layer == "dropdown_alias"


def test_historical_deny_skips_client_name_fallback() -> None:
    """A denied historical phrase should not resolve through the client names."""
    tables = AliasTables(
        names={"somerled": "somerled-direct"},
        dropdowns={},
        historical={"somerled": None},
    )

    resolution = ClientResolver(tables).resolve("Somerled - April 2025")

    assert resolution.resolved is False and resolution.layer == "title_historical"


def test_deny_on_dropdown_and_title_leaves_row_unresolved() -> None:
    """A row denied on every signal should stay unresolved for a stub."""
    resolution = ClientResolver().resolve("Somerled - April 2025", "Somerled")

    assert resolution.resolved is False and resolution.phrase == "Somerled"


def test_historical_deny_entry_leaves_row_unresolved() -> None:
    """A historical no-match entry should not fall through to client names."""
    resolution = ClientResolver().resolve("EMS - April 2025")

    assert resolution.resolved is False and resolution.layer == "title_historical"


def test_unknown_client_returns_unresolved_with_cleaned_phrase() -> None:
    """No layer matching should yield an explicit unresolved result."""
    resolution = ClientResolver().resolve("Totally New Co - March 2025", "")

    assert resolution.resolved is False
    assert resolution.layer is None and resolution.phrase == "Totally New Co"


def test_layers_without_opinion_return_none() -> None:
    """Each layer should abstain when its lookup misses."""
    signals = ClientSignals(title="Nobody - 2024", dropdown="Nobody - Person")
    tables = AliasTables()

    results = [
        match_direct_name(signals, tables),
        match_dropdown_alias(signals, tables),
        match_dropdown_first_token(signals, tables),
        match_title_phrase(signals, tables),
    ]

    assert results == [None, None, None, None]


def test_resolution_is_case_insensitive() -> None:
    """Lookups should ignore casing and surrounding whitespace."""
    resolution = ClientResolver().resolve("  SCHOOL OF MENTORS  ")

    assert resolution.client_id == "school-of-mentors" and resolution.layer == "direct_name"
