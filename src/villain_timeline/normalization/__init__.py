"""
villain_timeline.normalization package

Contains normalization modules such as:

- name_normalization (antagonist names, placeholder filter)
"""

from .name_normalization import (
    clean_ws,
    is_unnamed_or_invalid,
    lookup_key,
    normalize_villain_name,
)

__all__ = [
    "clean_ws",
    "is_unnamed_or_invalid",
    "lookup_key",
    "normalize_villain_name",
]
