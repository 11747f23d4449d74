from .keys import IdentityKey, IdentitySource, canonical_url, slugify, villain_id

__all__ = [
    "IdentityKey",
    "IdentitySource",
    "canonical_url",
    "slugify",
    "villain_id",
]
