# tests/test_placement_hints.py

from __future__ import annotations

import copy

from villain_timeline.merge import (
    HintParseFailure,
    PlacementHint,
    apply_placement_hints,
    parse_placement_hint,
)

ASM = "Amazing Spider-Man Vol 1"
ANNUAL = "Amazing Spider-Man Annual Vol 1"
UNTOLD = "Untold Tales of Spider-Man Vol 1"


def entry(series, issue, hint=None):
    e = {"series": series, "issue": issue, "villains": [], "villainUrls": [], "villainIds": []}
    if hint:
        e["chronologicalPlacementHint"] = hint
    return e


def order(timeline):
    return [(e["series"], e["issue"]) for e in timeline]


# -----------------------------
# Parsing
# -----------------------------

def test_parse_between_hint():
    parsed = parse_placement_hint("Takes place between Amazing Spider-Man Vol 1 #6 and #7")
    assert isinstance(parsed, PlacementHint)
    assert parsed.series_descriptor == "Amazing Spider-Man Vol 1"
    assert (parsed.issue_a, parsed.issue_b) == (6, 7)


def test_parse_is_case_insensitive_and_second_hash_optional():
    parsed = parse_placement_hint("BETWEEN Amazing Spider-Man #12 AND 13")
    assert isinstance(parsed, PlacementHint)
    assert parsed.series_descriptor == "Amazing Spider-Man"
    assert (parsed.issue_a, parsed.issue_b) == (12, 13)


def test_unparsable_hint_is_a_failure_value():
    parsed = parse_placement_hint("Shortly after the events of #5")
    assert isinstance(parsed, HintParseFailure)
    assert parsed.raw == "Shortly after the events of #5"


def test_empty_hint_is_a_failure_value():
    assert isinstance(parse_placement_hint(None), HintParseFailure)
    assert isinstance(parse_placement_hint("  "), HintParseFailure)


# -----------------------------
# Reinsertion
# -----------------------------

def test_hinted_entry_lands_between_targets():
    timeline = [
        entry(ASM, 5),
        entry(ASM, 6),
        entry(ASM, 7),
        entry(ASM, 8),
        entry(UNTOLD, 1, f"between {ASM} #6 and #7"),
    ]

    result = apply_placement_hints(timeline)

    assert order(result) == [(ASM, 5), (ASM, 6), (UNTOLD, 1), (ASM, 7), (ASM, 8)]


def test_annual_does_not_match_flagship_descriptor():
    timeline = [
        entry(ANNUAL, 6),
        entry(ASM, 6),
        entry(ANNUAL, 7),
        entry(ASM, 7),
        entry(UNTOLD, 2, "between Amazing Spider-Man #6 and #7"),
    ]

    result = apply_placement_hints(timeline)

    assert order(result) == [(ANNUAL, 6), (ASM, 6), (ANNUAL, 7), (UNTOLD, 2), (ASM, 7)]


def test_only_first_target_found_inserts_after_it():
    timeline = [entry(ASM, 6), entry(ASM, 8), entry(UNTOLD, 1, f"between {ASM} #6 and #7")]

    result = apply_placement_hints(timeline)

    assert order(result) == [(ASM, 6), (UNTOLD, 1), (ASM, 8)]


def test_only_second_target_found_inserts_before_it():
    timeline = [entry(ASM, 7), entry(ASM, 8), entry(UNTOLD, 1, f"between {ASM} #6 and #7")]

    result = apply_placement_hints(timeline)

    assert order(result) == [(UNTOLD, 1), (ASM, 7), (ASM, 8)]


def test_missing_targets_append_with_warning():
    warnings = []
    timeline = [
        entry(UNTOLD, 1, f"between {ASM} #60 and #61"),
        entry(ASM, 6),
    ]

    result = apply_placement_hints(timeline, warnings)

    assert order(result) == [(ASM, 6), (UNTOLD, 1)]
    assert len(warnings) == 1
    assert "Appending at end" in warnings[0]


def test_unparsable_hint_appends_with_warning():
    warnings = []
    timeline = [entry(UNTOLD, 3, "sometime in the 1960s"), entry(ASM, 6)]

    result = apply_placement_hints(timeline, warnings)

    assert order(result) == [(ASM, 6), (UNTOLD, 3)]
    assert len(warnings) == 1
    assert "sometime in the 1960s" in warnings[0]


def test_no_entry_is_dropped():
    timeline = [
        entry(ASM, 6),
        entry(UNTOLD, 1, f"between {ASM} #6 and #7"),
        entry(UNTOLD, 2, "garbage"),
        entry(UNTOLD, 3, f"between {ASM} #99 and #100"),
        entry(ASM, 7),
    ]

    result = apply_placement_hints(timeline, [])

    assert sorted(order(result)) == sorted(order(timeline))


def test_input_list_is_not_modified():
    timeline = [entry(ASM, 6), entry(UNTOLD, 1, f"between {ASM} #6 and #7"), entry(ASM, 7)]
    snapshot = copy.deepcopy(timeline)

    apply_placement_hints(timeline)

    assert timeline == snapshot
