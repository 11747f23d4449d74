"""
Exporter package.

Re-exports the serializers and JSON file helpers used by the pipeline.
"""

from __future__ import annotations

from .json_exporter import (
    compact,
    dumps,
    read_json,
    serialize_group,
    serialize_processed_data,
    serialize_timeline_entry,
    serialize_villain,
    write_json,
)

__all__ = [
    "compact",
    "dumps",
    "read_json",
    "serialize_group",
    "serialize_processed_data",
    "serialize_timeline_entry",
    "serialize_villain",
    "write_json",
]
