from villain_timeline.series.names import (
    SeriesName,
    normalize_series_descriptor,
    series_matches_descriptor,
)
from villain_timeline.series.ranges import (
    DEFAULT_FALLBACK_RANGE,
    VOLUME_RANGES,
    default_issues_for_series,
    parse_issue_spec,
)

__all__ = [
    "DEFAULT_FALLBACK_RANGE",
    "SeriesName",
    "VOLUME_RANGES",
    "default_issues_for_series",
    "normalize_series_descriptor",
    "parse_issue_spec",
    "series_matches_descriptor",
]
