"""
Series processing entry point.

    raw series dict -> validate -> normalize + classify + resolve identities
                    -> per-issue timeline -> stats -> ProcessedSeries
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Union

from villain_timeline.core.exceptions import ValidationError
from villain_timeline.logging import get_logger
from villain_timeline.processing.resolver import IdentityResolver
from villain_timeline.processing.stats import generate_stats
from villain_timeline.processing.timeline import build_timeline
from villain_timeline.registry.entities import ProcessedSeries, RawSeries
from villain_timeline.taxonomy.classifier import GroupClassifier
from villain_timeline.taxonomy.registry import GroupRegistry
from villain_timeline.validation.schemas import validate_raw_series

log = get_logger("processing.processor")


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def process_villain_data(
    raw: Union[RawSeries, Any],
    registry: Optional[GroupRegistry] = None,
    *,
    now: Optional[datetime] = None,
) -> ProcessedSeries:
    """
    Turn one series' raw issue list into identities, timeline and stats.

    ``raw`` may be an already-validated RawSeries or the raw JSON mapping;
    the latter is validated first and a ValidationError aborts this dataset.
    """
    series = raw if isinstance(raw, RawSeries) else validate_raw_series(raw)

    classifier = GroupClassifier(registry)
    resolved = IdentityResolver(classifier).resolve(series.issues)

    villains = resolved.villain_list()
    groups = resolved.group_list()

    timeline = build_timeline(series.issues, villains, groups, series.series)
    stats = generate_stats(villains)

    log.info(
        "Processed %s: %d issues, %d villains, %d groups (%d mentions skipped)",
        series.series,
        len(series.issues),
        len(villains),
        len(groups),
        resolved.skipped_mentions,
    )

    return ProcessedSeries(
        series=series.series,
        processed_at=utc_timestamp(now),
        villains=villains,
        timeline=timeline,
        stats=stats,
        groups=groups,
    )


def check_processed(data: ProcessedSeries) -> None:
    """Sanity check run when processing.validate is on."""
    if not data.villains:
        raise ValidationError(
            f"No villains found in processed data for {data.series}",
            "VALIDATION_EMPTY_RESULT",
            {"series": data.series, "field": "villains"},
        )
    if not data.timeline:
        raise ValidationError(
            f"No timeline data found for {data.series}",
            "VALIDATION_EMPTY_RESULT",
            {"series": data.series, "field": "timeline"},
        )
    log.info(
        "Validation passed: %d villains, %d timeline entries",
        len(data.villains),
        len(data.timeline),
    )
