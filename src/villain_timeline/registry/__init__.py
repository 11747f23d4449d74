from __future__ import annotations

from .entities import (
    Antagonist,
    EntityKind,
    GroupAppearance,
    GroupEntity,
    IssueRecord,
    ProcessedSeries,
    RawSeries,
    TimelineEntry,
    VillainEntity,
    VillainStats,
)

__all__ = [
    "Antagonist",
    "EntityKind",
    "GroupAppearance",
    "GroupEntity",
    "IssueRecord",
    "ProcessedSeries",
    "RawSeries",
    "TimelineEntry",
    "VillainEntity",
    "VillainStats",
]
