"""
Per-series identity resolution.

Walks one series' issues in order and folds every antagonist mention into
either a group identity or an individual identity.

IDENTITY POLICY
- Individuals are keyed by canonical URL when the mention carries one,
  otherwise by normalized name. The key records which of the two it is
  (IdentityKey.source), so a name-keyed identity and a URL-keyed identity
  never collapse into one, even when they share a display name.
- No retroactive reconciliation: an early name-only "Green Goblin" stays a
  separate identity from a later URL-identified "Green Goblin".
- identity_source is fixed on creation and never changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from villain_timeline.identity.keys import IdentityKey, canonical_url, villain_id
from villain_timeline.logging import get_logger
from villain_timeline.normalization.name_normalization import (
    is_unnamed_or_invalid,
    normalize_villain_name,
)
from villain_timeline.registry.entities import (
    Antagonist,
    GroupEntity,
    IssueRecord,
    VillainEntity,
)
from villain_timeline.taxonomy.classifier import GroupClassifier

log = get_logger("processing.resolver")


def select_primary_name(name_frequency: Dict[str, int]) -> str:
    """
    Most frequently used name variant.

    Ties go to the variant encountered first (dict insertion order), which
    keeps the choice independent of locale and alphabet.
    """
    best_name = ""
    best_count = 0
    for name, count in name_frequency.items():
        if count > best_count:
            best_name, best_count = name, count
    return best_name


@dataclass
class ResolvedIdentities:
    """Resolver output: individuals (URL-keyed first) and groups, by key."""
    villains: Dict[IdentityKey, VillainEntity] = field(default_factory=dict)
    groups: Dict[str, GroupEntity] = field(default_factory=dict)
    skipped_mentions: int = 0

    def villain_list(self) -> List[VillainEntity]:
        return list(self.villains.values())

    def group_list(self) -> List[GroupEntity]:
        return list(self.groups.values())


class IdentityResolver:
    """
    Accumulates identities across the issues of one series.

    Each instance owns its accumulator; use a new resolver per series.
    """

    def __init__(self, classifier: Optional[GroupClassifier] = None):
        self.classifier = classifier if classifier is not None else GroupClassifier()
        self._villains: Dict[IdentityKey, VillainEntity] = {}
        self._groups: Dict[str, GroupEntity] = {}
        self._skipped = 0

    # ------------------------------------------------------------------
    # Mention handling
    # ------------------------------------------------------------------

    def observe(self, issue_number: int, mention: Antagonist) -> None:
        raw_name = mention.name
        if is_unnamed_or_invalid(raw_name):
            log.debug("Skipping placeholder mention %r in issue %s", raw_name, issue_number)
            self._skipped += 1
            return

        normalized = normalize_villain_name(raw_name)
        if not normalized or is_unnamed_or_invalid(normalized):
            log.debug("Skipping mention %r in issue %s: empty after normalization", raw_name, issue_number)
            self._skipped += 1
            return

        url = canonical_url(mention.url)

        if self.classifier.classify(normalized) == "group":
            self._observe_group(issue_number, normalized, url)
        else:
            self._observe_individual(issue_number, normalized, url, mention.image_url)

    def _observe_group(self, issue_number: int, name: str, url: Optional[str]) -> None:
        key = url or name
        group = self._groups.get(key)
        if group is None:
            self._groups[key] = GroupEntity(
                id=villain_id(key),
                name=name,
                url=url,
                appearances=[issue_number],
                frequency=1,
            )
            return

        if issue_number not in group.appearances:
            group.appearances.append(issue_number)
            group.frequency += 1

    def _observe_individual(
        self,
        issue_number: int,
        name: str,
        url: Optional[str],
        image_url: Optional[str],
    ) -> None:
        key = IdentityKey.for_mention(url, name)
        villain = self._villains.get(key)

        if villain is None:
            self._villains[key] = VillainEntity(
                id=key.make_id(),
                name=name,
                identity_source=key.source,
                first_appearance=issue_number,
                names=[name],
                url=url,
                image_url=image_url,
                appearances=[issue_number],
                frequency=1,
                name_frequency={name: 1},
            )
            return

        if image_url and not villain.image_url:
            villain.image_url = image_url

        villain.name_frequency[name] = villain.name_frequency.get(name, 0) + 1
        if name not in villain.names:
            villain.names.append(name)

        if issue_number not in villain.appearances:
            villain.appearances.append(issue_number)
            villain.frequency += 1

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def resolve(self, issues: Iterable[IssueRecord]) -> ResolvedIdentities:
        for issue in issues:
            for mention in issue.antagonists:
                self.observe(issue.issue_number, mention)
        return self.finalize()

    def finalize(self) -> ResolvedIdentities:
        """Pick primary names, order URL-keyed before name-keyed, sort appearances."""
        ordered: Dict[IdentityKey, VillainEntity] = {}
        for wanted in ("url", "name"):
            for key, villain in self._villains.items():
                if key.source == wanted:
                    ordered[key] = villain

        for villain in ordered.values():
            villain.name = select_primary_name(villain.name_frequency)
            villain.appearances.sort()

        for group in self._groups.values():
            group.appearances.sort()

        log.debug(
            "Resolved %d individuals (%d url-keyed), %d groups, skipped %d mentions",
            len(ordered),
            sum(1 for k in ordered if k.is_url),
            len(self._groups),
            self._skipped,
        )

        return ResolvedIdentities(
            villains=ordered,
            groups=dict(self._groups),
            skipped_mentions=self._skipped,
        )


def resolve_identities(
    issues: Iterable[IssueRecord],
    classifier: Optional[GroupClassifier] = None,
) -> ResolvedIdentities:
    return IdentityResolver(classifier).resolve(issues)
