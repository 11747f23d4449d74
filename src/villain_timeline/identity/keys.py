# src/villain_timeline/identity/keys.py
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional

IdentitySource = Literal["url", "name"]

WIKI_PATH_MARKER = "/wiki/"


# -----------------------------
# URL canonicalization
# -----------------------------

def canonical_url(url: Optional[str]) -> Optional[str]:
    """
    Strip query parameters and anchors so every link to the same character
    page produces the same key. Empty input yields None.
    """
    if url is None:
        return None

    u = str(url).strip()
    if not u:
        return None

    return u.split("?", 1)[0].split("#", 1)[0] or None


# -----------------------------
# Deterministic ids
# -----------------------------

def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")


def villain_id(name_or_url: str) -> str:
    """
    Stable id for an identity.

    URL input: the wiki page slug
      https://marvel.fandom.com/wiki/Carolyn_Trainer_(Earth-616) -> Carolyn_Trainer_(Earth-616)
    Name input: lowercase hyphen slug
      "Green Goblin" -> green-goblin
    """
    if WIKI_PATH_MARKER in name_or_url:
        slug = name_or_url.split(WIKI_PATH_MARKER, 1)[1]
        slug = slug.split("?", 1)[0].split("#", 1)[0]
        return slug or name_or_url

    return slugify(name_or_url)


# -----------------------------
# Identity key (tagged by source)
# -----------------------------

@dataclass(frozen=True, slots=True)
class IdentityKey:
    """
    Key of a resolved identity.

    The source tag is part of the key, so a URL-keyed identity and a
    name-keyed identity can never share a slot even when the normalized name
    equals the URL text or the same display name is used by both.
    """
    source: IdentitySource
    value: str

    @classmethod
    def for_mention(cls, url: Optional[str], normalized_name: str) -> "IdentityKey":
        if url:
            return cls("url", url)
        return cls("name", normalized_name)

    @property
    def is_url(self) -> bool:
        return self.source == "url"

    def make_id(self) -> str:
        return villain_id(self.value)

    def __str__(self) -> str:
        return f"{self.source}:{self.value}"


__all__ = [
    "IdentityKey",
    "IdentitySource",
    "canonical_url",
    "slugify",
    "villain_id",
]
