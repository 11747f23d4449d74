"""
json_exporter.py
Serialized (JSON-shaped) views of processed series and JSON file writing.

Output shape per series:

    {series, processedAt, stats: {totalVillains, mostFrequent, mostFrequentCount,
     averageFrequency}, villains: [...], timeline: [...], groups?: [...]}

Within a timeline entry, villains / villainUrls / villainIds are parallel
arrays: index i of each refers to the same identity. villainUrls keeps null
slots for name-keyed identities so the arrays stay aligned.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Dict, List

from villain_timeline.core.exceptions import DataIOError
from villain_timeline.logging import get_logger
from villain_timeline.processing.stats import round_frequency
from villain_timeline.registry.entities import (
    GroupEntity,
    ProcessedSeries,
    TimelineEntry,
    VillainEntity,
)

log = get_logger("json_exporter")


def _to_json_compatible(obj: Any) -> Any:
    """
    Recursively convert objects into JSON-compatible structures.

    Rules:
    - Primitives pass through
    - dataclasses → dict (recursively)
    - dict → dict (recursively)
    - list / tuple / set → list (recursively)
    - Unknown objects → str(obj)
    """
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj

    if is_dataclass(obj) and not isinstance(obj, type):
        return {k: _to_json_compatible(v) for k, v in asdict(obj).items()}

    if isinstance(obj, dict):
        return {str(k): _to_json_compatible(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple, set)):
        return [_to_json_compatible(v) for v in obj]

    return str(obj)


def compact(d: Dict[str, Any]) -> Dict[str, Any]:
    """Drop keys whose value is None (optional fields are omitted, not null)."""
    return {k: v for k, v in d.items() if v is not None}


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------

def serialize_villain(v: VillainEntity) -> Dict[str, Any]:
    return compact({
        "id": v.id,
        "name": v.name,
        "aliases": v.aliases,
        "url": v.url,
        "imageUrl": v.image_url,
        "identitySource": v.identity_source,
        "firstAppearance": v.first_appearance,
        "appearances": list(v.appearances),
        "frequency": v.frequency,
    })


def serialize_timeline_entry(t: TimelineEntry) -> Dict[str, Any]:
    return compact({
        "issue": t.issue,
        "releaseDate": t.release_date,
        "chronologicalPlacementHint": t.chronological_placement_hint,
        "villainCount": t.villain_count,
        "villains": [v.name for v in t.villains],
        "villainUrls": [v.url for v in t.villains],
        "villainIds": [v.id for v in t.villains],
        "series": t.series,
        "chronologicalPosition": t.chronological_position,
        "groups": (
            [{"name": g.name, "members": list(g.members)} for g in t.groups]
            if t.groups
            else None
        ),
    })


def serialize_group(g: GroupEntity) -> Dict[str, Any]:
    return compact({
        "id": g.id,
        "name": g.name,
        "url": g.url,
        "appearances": list(g.appearances),
        "frequency": g.frequency,
    })


def serialize_processed_data(data: ProcessedSeries) -> Dict[str, Any]:
    most = data.stats.most_frequent
    return {
        "series": data.series,
        "processedAt": data.processed_at,
        "stats": {
            "totalVillains": data.stats.total_villains,
            "mostFrequent": most.name if most else "",
            "mostFrequentCount": most.frequency if most else 0,
            "averageFrequency": round_frequency(data.stats.average_frequency),
        },
        "villains": [serialize_villain(v) for v in data.villains],
        "timeline": [serialize_timeline_entry(t) for t in data.timeline],
        "groups": [serialize_group(g) for g in data.groups],
    }


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------

def dumps(data: Any, *, pretty: bool = True) -> str:
    payload = _to_json_compatible(data)
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def write_json(data: Any, output_path: str | Path, *, pretty: bool = True) -> Path:
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as f:
            f.write(dumps(data, pretty=pretty))
    except OSError as exc:
        raise DataIOError.write_failed(str(output_path), str(exc)) from exc

    log.info("Wrote %s (%d bytes)", output_path, output_path.stat().st_size)
    return output_path


def read_json(path: str | Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise DataIOError.file_not_found(str(path))
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise DataIOError.read_failed(str(path), str(exc)) from exc


__all__: List[str] = [
    "dumps",
    "read_json",
    "serialize_group",
    "serialize_processed_data",
    "serialize_timeline_entry",
    "serialize_villain",
    "write_json",
]
