"""
name_normalization.py
Antagonist name cleanup and placeholder filtering.

Rules:
- Parenthetical alias spans are dropped entirely
  ("Green Goblin (Norman Osborn)" -> "Green Goblin")
- Trailing punctuation is dropped, internal whitespace runs collapse to one space
- An empty result means "invalid name"; callers skip the mention
- Placeholder names ("Unknown", "Unnamed Thug", "?") are rejected by a separate
  filter, while names that merely contain those words are kept
"""

from __future__ import annotations

import re
from typing import Any, Optional

_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_TRAILING_PUNCT_RE = re.compile(r"[\s,;:.]+$")
_WS_RE = re.compile(r"\s+")

PLACEHOLDER_NAMES = ("unknown", "unnamed", "unidentified")
PLACEHOLDER_SYMBOL = "?"


def clean_ws(s: Optional[str]) -> str:
    """Collapse whitespace runs and trim. ``None`` becomes ``""``."""
    if s is None:
        return ""
    return _WS_RE.sub(" ", str(s)).strip()


def normalize_villain_name(name: Any) -> str:
    """
    Canonical display form of a raw antagonist name.

    Total and idempotent: ``normalize_villain_name(normalize_villain_name(x))``
    equals ``normalize_villain_name(x)`` for every input.
    """
    if name is None:
        return ""

    normalized = str(name).strip()
    normalized = _PARENTHETICAL_RE.sub("", normalized)
    normalized = clean_ws(normalized)
    normalized = _TRAILING_PUNCT_RE.sub("", normalized)
    return normalized


def lookup_key(name: Any) -> str:
    """Lowercase, whitespace-collapsed key used for registry lookups."""
    return clean_ws(name).lower()


def is_unnamed_or_invalid(name: Any) -> bool:
    """
    True when the name should not be tracked at all.

    Filters (case-insensitive, after whitespace cleanup):
      - empty / non-string input
      - exactly "unknown", "unnamed", "unidentified" or "?"
      - prefixed by one of those words ("Unknown Thug", "Unnamed Gunman")
    """
    if not isinstance(name, str):
        return True

    n = lookup_key(name)
    if not n:
        return True

    if n == PLACEHOLDER_SYMBOL or n in PLACEHOLDER_NAMES:
        return True

    return any(n.startswith(word + " ") for word in PLACEHOLDER_NAMES)
