from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from villain_timeline.registry.entities import (
    GroupAppearance,
    GroupEntity,
    IssueRecord,
    TimelineEntry,
    VillainEntity,
)


def _index_by_issue(entities: Iterable) -> Dict[int, list]:
    index: Dict[int, list] = defaultdict(list)
    for entity in entities:
        for issue in entity.appearances:
            index[issue].append(entity)
    return index


def group_members(villains_in_issue: Sequence[VillainEntity]) -> List[str]:
    """
    Members of a group for ONE issue: every name variant of every individual
    present in that same issue. Nothing is carried over from other issues.
    """
    members: List[str] = []
    for v in villains_in_issue:
        if v.kind != "individual":
            continue
        members.extend(v.names or [v.name])
    return members


def build_timeline(
    issues: Sequence[IssueRecord],
    villains: Iterable[VillainEntity],
    groups: Iterable[GroupEntity],
    series_name: str = "",
) -> List[TimelineEntry]:
    """
    One entry per input issue, in the series' original issue order
    (chronological_position = index + 1 within this series).
    """
    villains_by_issue = _index_by_issue(villains)
    groups_by_issue = _index_by_issue(groups)

    timeline: List[TimelineEntry] = []
    for index, issue in enumerate(issues):
        number = issue.issue_number
        present = list(villains_by_issue.get(number, []))

        appearances = [
            GroupAppearance(
                id=g.id,
                name=g.name,
                url=g.url,
                issue=number,
                members=group_members(present),
            )
            for g in groups_by_issue.get(number, [])
        ]

        timeline.append(
            TimelineEntry(
                issue=number,
                release_date=issue.release_date,
                chronological_placement_hint=issue.chronological_placement_hint,
                series=series_name,
                chronological_position=index + 1,
                villains=present,
                villain_count=len(present),
                groups=appearances or None,
            )
        )

    return timeline
