# src/villain_timeline/dates/normalizer.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Set, Tuple

from dateutil import parser as date_parser

from villain_timeline.logging import get_logger

log = get_logger("dates")

# Missing components default to the start of the period ("March 1963" -> 1963-03-01)
_DEFAULT = datetime(1900, 1, 1)


def parse_release_date(
    text: Optional[str], warned: Optional[Set[str]] = None
) -> Optional[datetime]:
    """
    Parse a release date as emitted by the source pages.

    Accepts ISO ("1963-03-10"), long form ("March 10, 1963"), month + year
    ("March 1963") and bare years. Timezone-aware values are converted to
    naive UTC so every result is comparable. Returns None when the value is
    empty or unparsable.

    Unparsable values are logged at WARNING. When the caller passes a
    ``warned`` set, each value is logged only the first time it is seen in
    that set.
    """
    if text is None:
        return None

    raw = str(text).strip()
    if not raw:
        return None

    try:
        parsed = date_parser.parse(raw, default=_DEFAULT)
    except (ValueError, OverflowError):
        if warned is None or raw not in warned:
            if warned is not None:
                warned.add(raw)
            log.warning("Unparsable release date %r; treating entry as undated", raw)
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def chronological_sort_key(
    release_date: Optional[str], warned: Optional[Set[str]] = None
) -> Tuple[int, datetime]:
    """
    Sort key: dated entries ascending, then every undated entry.

    Undated entries share one key, so a stable sort keeps their relative order.
    """
    parsed = parse_release_date(release_date, warned)
    if parsed is None:
        return (1, datetime.min)
    return (0, parsed)
