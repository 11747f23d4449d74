"""
Group registry.

Curated list of known antagonist groups and their aliases. Every alias (and
the canonical name) maps to the same entry in one lookup table keyed by the
lowercase, whitespace-collapsed name, so alias resolution and canonical-name
resolution are the same O(1) lookup.

Registries are plain objects: build one with ``GroupRegistry()`` (defaults
loaded from ``data/known_groups.json``) or ``GroupRegistry(load_defaults=False)``
and pass it to the classifier. ``default_registry()`` lazily builds the one
process-wide instance used when no registry is injected.
"""

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Deque, Dict, Iterable, List, Literal, Optional

from villain_timeline.config import get_config
from villain_timeline.logging import get_logger
from villain_timeline.normalization.name_normalization import lookup_key

log = get_logger("taxonomy.registry")

AuditEventType = Literal["lookup", "register", "resolve"]

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "known_groups.json"
DEFAULT_AUDIT_MAX_ENTRIES = 10_000
NOT_FOUND = "not_found"

_KNOWN_GROUPS_CACHE: Optional[List[Dict[str, Any]]] = None


def load_known_groups() -> List[Dict[str, Any]]:
    """
    Load the curated group list from data/known_groups.json.
    Uses a simple in-memory cache so it only hits disk once.
    """
    global _KNOWN_GROUPS_CACHE
    if _KNOWN_GROUPS_CACHE is not None:
        return _KNOWN_GROUPS_CACHE

    if not DATA_PATH.exists():
        raise FileNotFoundError(f"Known group list not found: {DATA_PATH}")

    with open(DATA_PATH, "r", encoding="utf-8") as f:
        _KNOWN_GROUPS_CACHE = json.load(f)

    return _KNOWN_GROUPS_CACHE


# -----------------------------
# Records
# -----------------------------

@dataclass(slots=True)
class GroupRegistryEntry:
    id: str
    canonical_name: str
    aliases: List[str] = field(default_factory=list)
    url: Optional[str] = None
    description: Optional[str] = None
    registered_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class AuditEntry:
    timestamp: datetime
    event_type: AuditEventType
    input_name: str
    result: str
    context: Optional[str] = None


class AuditLog:
    """
    Bounded, explicitly-cleared event sink for registry lookups and
    registrations. Recording never affects classification results.
    """

    def __init__(self, max_entries: int = DEFAULT_AUDIT_MAX_ENTRIES, enabled: bool = True):
        self._entries: Deque[AuditEntry] = deque(maxlen=max_entries)
        self.enabled = enabled

    def record(
        self,
        event_type: AuditEventType,
        input_name: str,
        result: str,
        context: Optional[str] = None,
    ) -> None:
        if not self.enabled:
            return
        self._entries.append(
            AuditEntry(
                timestamp=datetime.now(timezone.utc),
                event_type=event_type,
                input_name=input_name,
                result=result,
                context=context,
            )
        )

    def entries(self, event_type: Optional[AuditEventType] = None) -> List[AuditEntry]:
        if event_type is None:
            return list(self._entries)
        return [e for e in self._entries if e.event_type == event_type]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# -----------------------------
# Registry
# -----------------------------

class GroupRegistry:
    def __init__(
        self,
        groups: Optional[Iterable[Dict[str, Any]]] = None,
        *,
        audit: Optional[AuditLog] = None,
        load_defaults: bool = True,
    ):
        self._group_map: Dict[str, GroupRegistryEntry] = {}
        self.audit = audit if audit is not None else AuditLog()
        self._load_defaults = load_defaults
        self._extra_groups = list(groups or [])
        self._initialize()

    def _initialize(self) -> None:
        seed: List[Dict[str, Any]] = []
        if self._load_defaults:
            seed.extend(load_known_groups())
        seed.extend(self._extra_groups)

        for g in seed:
            self.register_group(
                g["canonical_name"],
                g["id"],
                g.get("aliases") or [],
                url=g.get("url"),
                description=g.get("description"),
            )

        # Seeding is not an auditable event
        self.audit.clear()
        log.debug("Group registry initialized with %d groups", len(self.all_groups()))

    # ---- mutation -------------------------------------------------------

    def register_group(
        self,
        canonical_name: str,
        group_id: str,
        aliases: Iterable[str],
        url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> GroupRegistryEntry:
        alias_list = list(aliases)
        entry = GroupRegistryEntry(
            id=group_id,
            canonical_name=canonical_name,
            aliases=alias_list,
            url=url,
            description=description,
        )

        self._group_map[lookup_key(canonical_name)] = entry
        for alias in alias_list:
            self._group_map[lookup_key(alias)] = entry

        self.audit.record(
            "register",
            canonical_name,
            group_id,
            f"Registered {len(alias_list)} aliases",
        )
        return entry

    def reset(self) -> None:
        """Drop everything registered at runtime and reseed."""
        self._group_map.clear()
        self._initialize()

    # ---- lookups --------------------------------------------------------

    def is_known_group(self, name: str) -> bool:
        entry = self._group_map.get(lookup_key(name))
        self.audit.record("lookup", name, entry.id if entry else NOT_FOUND)
        return entry is not None

    def resolve_group(self, name: str) -> Optional[Dict[str, str]]:
        """Return {"id", "canonical_name"} for a known group, else None."""
        entry = self._group_map.get(lookup_key(name))
        self.audit.record("resolve", name, entry.id if entry else NOT_FOUND)
        if entry is None:
            return None
        return {"id": entry.id, "canonical_name": entry.canonical_name}

    def get_canonical_name(self, name: str) -> str:
        resolution = self.resolve_group(name)
        return resolution["canonical_name"] if resolution else name

    def get_group_entry(self, name: str) -> Optional[GroupRegistryEntry]:
        return self._group_map.get(lookup_key(name))

    def all_groups(self) -> List[GroupRegistryEntry]:
        """Registered groups, one per id, in registration order."""
        seen = set()
        result: List[GroupRegistryEntry] = []
        for entry in self._group_map.values():
            if entry.id not in seen:
                seen.add(entry.id)
                result.append(entry)
        return result

    # ---- audit passthroughs ----------------------------------------------

    def audit_log(self, event_type: Optional[AuditEventType] = None) -> List[AuditEntry]:
        return self.audit.entries(event_type)

    def clear_audit_log(self) -> None:
        self.audit.clear()

    def set_audit_enabled(self, enabled: bool) -> None:
        self.audit.enabled = enabled

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and lookup_key(name) in self._group_map

    def __len__(self) -> int:
        return len(self.all_groups())


_default_registry: Optional[GroupRegistry] = None


def default_registry() -> GroupRegistry:
    """Process-wide registry, built on first use from config + bundled data."""
    global _default_registry
    if _default_registry is None:
        cfg = get_config()
        audit = AuditLog(
            max_entries=int(cfg.taxonomy.get("audit_max_entries", DEFAULT_AUDIT_MAX_ENTRIES)),
            enabled=bool(cfg.taxonomy.get("audit_enabled", True)),
        )
        _default_registry = GroupRegistry(audit=audit)
    return _default_registry


__all__ = [
    "AuditEntry",
    "AuditLog",
    "GroupRegistry",
    "GroupRegistryEntry",
    "default_registry",
    "load_known_groups",
]
