"""
Chronological placement hints.

Some issues carry a note like "between Amazing Spider-Man Vol 1 #6 and #7"
instead of (or in spite of) a usable release date. Those entries are taken
out of the date-sorted timeline and put back next to the issues they name.

Parsing never raises: ``parse_placement_hint`` returns either a
PlacementHint or a HintParseFailure, and the failure branch appends the entry
at the end of the timeline with a warning.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from villain_timeline.logging import get_logger
from villain_timeline.series.names import series_matches_descriptor

log = get_logger("merge.hints")

HINT_KEY = "chronologicalPlacementHint"

_BETWEEN_RE = re.compile(r"between\s+(.+?)\s*#(\d+)\s+and\s+#?(\d+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class PlacementHint:
    series_descriptor: str
    issue_a: int
    issue_b: int
    raw: str


@dataclass(frozen=True, slots=True)
class HintParseFailure:
    raw: str
    reason: str


HintParseResult = Union[PlacementHint, HintParseFailure]


def parse_placement_hint(text: Optional[str]) -> HintParseResult:
    """"between <series> #X and #Y" -> PlacementHint(series, X, Y)."""
    raw = "" if text is None else str(text)
    if not raw.strip():
        return HintParseFailure(raw=raw, reason="empty hint")

    m = _BETWEEN_RE.search(raw)
    if not m:
        return HintParseFailure(raw=raw, reason="expected 'between <series> #X and #Y'")

    descriptor = m.group(1).strip()
    if not descriptor:
        return HintParseFailure(raw=raw, reason="missing series descriptor")

    return PlacementHint(
        series_descriptor=descriptor,
        issue_a=int(m.group(2)),
        issue_b=int(m.group(3)),
        raw=raw,
    )


def locate_targets(
    timeline: List[Dict[str, Any]], hint: PlacementHint
) -> Tuple[int, int]:
    """
    Index of the first entry for issue_a and for issue_b among entries whose
    series matches the hint's descriptor; -1 when absent.
    """
    pos_a = pos_b = -1
    for i, entry in enumerate(timeline):
        if not series_matches_descriptor(entry.get("series"), hint.series_descriptor):
            continue
        issue = entry.get("issue")
        if pos_a < 0 and issue == hint.issue_a:
            pos_a = i
        if pos_b < 0 and issue == hint.issue_b:
            pos_b = i
    return pos_a, pos_b


def _describe(entry: Dict[str, Any]) -> str:
    return f"series: {entry.get('series')}, issue: {entry.get('issue')}"


def apply_placement_hints(
    timeline: List[Dict[str, Any]],
    warnings: Optional[List[str]] = None,
) -> List[Dict[str, Any]]:
    """
    Reinsert hinted entries relative to the issues their hint names.

    - both targets found: placed between them (directly before the later one)
    - only issue X found: directly after X
    - only issue Y found: directly before Y
    - neither found, or hint unparsable: appended at the end with a warning

    Returns a new list; the input list is not modified.
    """
    with_hints = [e for e in timeline if e.get(HINT_KEY)]
    if not with_hints:
        return list(timeline)

    result = [e for e in timeline if not e.get(HINT_KEY)]

    def _warn(message: str) -> None:
        log.warning(message)
        if warnings is not None:
            warnings.append(message)

    for entry in with_hints:
        parsed = parse_placement_hint(entry[HINT_KEY])

        if isinstance(parsed, HintParseFailure):
            _warn(
                f'Could not parse chronological placement hint: "{parsed.raw}" '
                f"({_describe(entry)}): {parsed.reason}"
            )
            result.append(entry)
            continue

        pos_a, pos_b = locate_targets(result, parsed)

        if pos_a >= 0 and pos_b >= 0:
            result.insert(max(pos_a, pos_b), entry)
        elif pos_a >= 0:
            result.insert(pos_a + 1, entry)
        elif pos_b >= 0:
            result.insert(pos_b, entry)
        else:
            _warn(
                f'Could not find placement targets for hint: "{parsed.raw}" '
                f"({_describe(entry)}). Appending at end."
            )
            result.append(entry)

    return result
