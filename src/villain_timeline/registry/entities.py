from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

EntityKind = Literal["individual", "group"]


# -----------------------------
# Input records (small atoms)
# -----------------------------

@dataclass(slots=True)
class Antagonist:
    """One raw antagonist mention inside one issue."""
    name: str
    url: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(slots=True)
class IssueRecord:
    issue_number: int
    title: str = ""
    release_date: Optional[str] = None
    publication_date: Optional[str] = None
    chronological_placement_hint: Optional[str] = None
    antagonists: List[Antagonist] = field(default_factory=list)


@dataclass(slots=True)
class RawSeries:
    """Validated per-series input, in the series' original issue order."""
    series: str
    base_url: str = ""
    issues: List[IssueRecord] = field(default_factory=list)


# -----------------------------
# Resolved identities
# -----------------------------

@dataclass(slots=True)
class VillainEntity:
    """
    An individual antagonist identity.

    identity_source is fixed when the identity is created ('url' when keyed
    by a canonical URL, 'name' when keyed by normalized name).
    """
    id: str
    name: str
    identity_source: Literal["url", "name"]
    first_appearance: int
    names: List[str] = field(default_factory=list)
    url: Optional[str] = None
    image_url: Optional[str] = None
    appearances: List[int] = field(default_factory=list)
    frequency: int = 0
    kind: EntityKind = "individual"

    # Per-variant mention counts, insertion order = first-encountered order
    name_frequency: Dict[str, int] = field(default_factory=dict, repr=False)

    @property
    def aliases(self) -> List[str]:
        return [n for n in self.names if n != self.name]


@dataclass(slots=True)
class GroupEntity:
    id: str
    name: str
    url: Optional[str] = None
    appearances: List[int] = field(default_factory=list)
    frequency: int = 0


@dataclass(slots=True)
class GroupAppearance:
    """A group in one specific issue, with the individuals present in that issue."""
    id: str
    name: str
    issue: int
    members: List[str] = field(default_factory=list)
    url: Optional[str] = None


# -----------------------------
# Timeline + results
# -----------------------------

@dataclass(slots=True)
class TimelineEntry:
    issue: int
    villains: List[VillainEntity] = field(default_factory=list)
    villain_count: int = 0
    series: Optional[str] = None
    release_date: Optional[str] = None
    chronological_position: Optional[int] = None
    chronological_placement_hint: Optional[str] = None
    groups: Optional[List[GroupAppearance]] = None


@dataclass(slots=True)
class VillainStats:
    total_villains: int = 0
    most_frequent: Optional[VillainEntity] = None
    average_frequency: float = 0.0
    first_appearances: Dict[int, List[str]] = field(default_factory=dict)


@dataclass(slots=True)
class ProcessedSeries:
    series: str
    processed_at: str
    villains: List[VillainEntity] = field(default_factory=list)
    timeline: List[TimelineEntry] = field(default_factory=list)
    stats: VillainStats = field(default_factory=VillainStats)
    groups: List[GroupEntity] = field(default_factory=list)
