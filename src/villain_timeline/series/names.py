"""
Series name handling.

Series names show up in two spellings:
  - display: "Amazing Spider-Man Vol 1"
  - slug:    "Amazing_Spider-Man_Vol_1" (file names, wiki URLs)

SeriesName compares the two case-insensitively. ``normalize_series_descriptor``
is the looser form used to match free-text placement hints against series.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Union

from villain_timeline.normalization.name_normalization import clean_ws

_VOLUME_RE = re.compile(r"\bvol\.?\s*\d+\b", re.IGNORECASE)
_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_FILE_RE = re.compile(r"(?:villains|raw)\.([^.]+)\.json$")

ANNUAL_TOKEN = "annual"


class SeriesName:
    __slots__ = ("canonical",)

    def __init__(self, name: str):
        self.canonical = SeriesName.normalize(name)

    @staticmethod
    def normalize(name: Optional[str]) -> str:
        if not name:
            return ""
        return clean_ws(name.replace("_", " "))

    def to_display(self) -> str:
        return self.canonical

    def to_slug(self) -> str:
        return self.canonical.replace(" ", "_")

    def equals(self, other: Union[str, "SeriesName"]) -> bool:
        other_norm = other.canonical if isinstance(other, SeriesName) else SeriesName.normalize(other)
        return self.canonical.lower() == other_norm.lower()

    def matches_any(self, names: Iterable[Union[str, "SeriesName"]]) -> bool:
        return any(self.equals(n) for n in names)

    @classmethod
    def from_file_path(cls, file_path: str) -> Optional["SeriesName"]:
        """``data/villains.Amazing_Spider-Man_Vol_1.json`` -> Amazing Spider-Man Vol 1"""
        m = _FILE_RE.search(str(file_path).replace("\\", "/").rsplit("/", 1)[-1])
        return cls(m.group(1)) if m else None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, SeriesName)):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.canonical.lower())

    def __str__(self) -> str:
        return self.canonical

    def __repr__(self) -> str:
        return f"SeriesName({self.canonical!r})"


def normalize_series_descriptor(name: Optional[str]) -> str:
    """
    Lowercase series text with volume tokens ("Vol 1") and parenthetical
    annotations ("(1963)") removed, underscores read as spaces.
    """
    text = SeriesName.normalize(name).lower()
    text = _VOLUME_RE.sub("", text)
    text = _PARENTHETICAL_RE.sub("", text)
    return clean_ws(text)


def series_matches_descriptor(series_name: Optional[str], descriptor: Optional[str]) -> bool:
    """
    Whether a timeline entry's series is the one a hint descriptor names.

    Exact match after normalization, or the series extends the descriptor
    ("amazing spider-man" vs "amazing spider-man 2099"). An annual never
    matches a descriptor that does not itself mention the annual, so the
    flagship title and its annual stay apart.
    """
    entry = normalize_series_descriptor(series_name)
    target = normalize_series_descriptor(descriptor)
    if not target:
        return False

    if entry == target:
        return True

    if not entry.startswith(target + " "):
        return False

    entry_is_annual = ANNUAL_TOKEN in entry.split()
    target_is_annual = ANNUAL_TOKEN in target.split()
    return not entry_is_annual or target_is_annual
