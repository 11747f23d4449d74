"""
Group / individual classification.

Order of rules:
  1. placeholder names ("Unknown", "Unnamed Thug", "?") -> individual
  2. registry hit on canonical name or alias             -> group
  3. any fallback keyword pattern ("Gang", "Six", ...)   -> group
  4. otherwise                                           -> individual

The outcome depends only on the name and the registry contents. The audit
trail is written on lookup but never read back here.
"""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Sequence

from villain_timeline.normalization.name_normalization import clean_ws, is_unnamed_or_invalid
from villain_timeline.registry.entities import EntityKind
from villain_timeline.taxonomy.registry import GroupRegistry, GroupRegistryEntry, default_registry

FALLBACK_TERMS = (
    "Henchmen",
    "Gang",
    "Crew",
    "Squad",
    "Syndicate",
    "Enforcers",
    "Six",
    "Team",
    "Brigade",
    "Guard",
    "Force",
    "Thieves",
    "Association",
    "Society",
    "League",
    "Alliance",
    "Thugs",
    "Mercenaries",
    "Soldiers",
    "Minions",
)

FALLBACK_PATTERNS: List[Pattern[str]] = [
    re.compile(rf"\b{term}\b", re.IGNORECASE) for term in FALLBACK_TERMS
]


class GroupClassifier:
    """Classifier bound to one registry instance."""

    def __init__(
        self,
        registry: Optional[GroupRegistry] = None,
        patterns: Optional[Sequence[Pattern[str]]] = None,
    ):
        self.registry = registry if registry is not None else default_registry()
        self.patterns = list(patterns) if patterns is not None else FALLBACK_PATTERNS

    def is_group_name(self, name: str) -> bool:
        n = clean_ws(name)

        # Unnamed entities are filtered upstream, never taxonomized as groups
        if is_unnamed_or_invalid(n):
            return False

        if self.registry.is_known_group(n):
            return True

        return any(p.search(n) for p in self.patterns)

    def classify(self, name: str) -> EntityKind:
        return "group" if self.is_group_name(name) else "individual"


def is_group_name(name: str, registry: Optional[GroupRegistry] = None) -> bool:
    return GroupClassifier(registry).is_group_name(name)


def classify_kind(name: str, registry: Optional[GroupRegistry] = None) -> EntityKind:
    """'group' when the name is a known or pattern-matched group, else 'individual'."""
    return GroupClassifier(registry).classify(name)


def resolve_group_canonical(name: str, registry: Optional[GroupRegistry] = None):
    """{"id", "canonical_name"} for a registered group, None otherwise."""
    reg = registry if registry is not None else default_registry()
    return reg.resolve_group(name)


def registered_groups(registry: Optional[GroupRegistry] = None) -> List[GroupRegistryEntry]:
    reg = registry if registry is not None else default_registry()
    return reg.all_groups()
