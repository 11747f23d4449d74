from __future__ import annotations

from typing import Dict, List, Tuple

from villain_timeline.core.exceptions import ValidationError
from villain_timeline.logging import get_logger
from villain_timeline.series.names import SeriesName

log = get_logger("series.ranges")

DEFAULT_FALLBACK_RANGE = 20

# Known volume lengths (display names)
VOLUME_RANGES: Dict[str, Tuple[int, int]] = {
    "Amazing Spider-Man Vol 1": (1, 441),
    "Amazing Spider-Man Vol 2": (1, 58),
    "Amazing Spider-Man Vol 3": (1, 20),
    "Amazing Spider-Man Vol 4": (1, 32),
    "Amazing Spider-Man Vol 5": (1, 93),
    "Untold Tales of Spider-Man Vol 1": (1, 25),
    "Amazing Spider-Man Annual Vol 1": (1, 28),
}


def parse_issue_spec(issue_spec: str) -> List[int]:
    """
    "1-20,50-60,100" -> sorted unique issue numbers.

    Raises ValidationError for non-numeric parts, ranges that start below 1
    or run backwards, and specs that name no issue at all.
    """
    issues = set()

    for part in (p.strip() for p in (issue_spec or "").split(",")):
        if not part:
            continue

        if "-" in part:
            start_str, _, end_str = part.partition("-")
            try:
                start, end = int(start_str.strip()), int(end_str.strip())
            except ValueError:
                raise ValidationError.invalid_format(part, "issue range like 1-20") from None
            if start < 1 or end < start:
                raise ValidationError(
                    f"Invalid range: {part} (start must be >= 1, end must be >= start)",
                    "VALIDATION_INVALID_FORMAT",
                    {"fieldName": part, "format": "start >= 1 and end >= start"},
                )
            issues.update(range(start, end + 1))
            continue

        try:
            number = int(part)
        except ValueError:
            raise ValidationError.invalid_format(part, "issue number") from None
        if number < 1:
            raise ValidationError.invalid_format(part, "issue number >= 1")
        issues.add(number)

    if not issues:
        raise ValidationError.missing_required("issues")

    return sorted(issues)


def default_issues_for_series(series: str) -> List[int]:
    """
    Full issue range of a known volume; unknown series fall back to
    1..DEFAULT_FALLBACK_RANGE with a warning.
    """
    name = SeriesName(series)
    for known, (start, end) in VOLUME_RANGES.items():
        if name.equals(known):
            return list(range(start, end + 1))

    log.warning(
        "Unknown series: %s, defaulting to issues 1-%d", series, DEFAULT_FALLBACK_RANGE
    )
    return list(range(1, DEFAULT_FALLBACK_RANGE + 1))
