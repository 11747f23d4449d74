"""
Cross-series merge.

Consumes serialized per-series outputs (see exporter.json_exporter) and
produces one combined dataset:

    1. union identities (key: canonical URL, else id)
    2. union groups (key: name, else id)
    3. concatenate timelines, tagging each entry with its series
    4. stable chronological sort by release date (undated last)
    5. reinsert entries that carry a placement hint
    6. assign chronological positions 1..n
    7. recompute first appearances from the global order
    8. recompute stats

Each step is a plain function over dicts so it can be exercised on its own.
Source datasets are never modified; every entry that changes is copied first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from villain_timeline.core.exceptions import ProcessingError
from villain_timeline.dates.normalizer import chronological_sort_key
from villain_timeline.exporter.json_exporter import compact
from villain_timeline.identity.keys import canonical_url, slugify
from villain_timeline.logging import get_logger
from villain_timeline.merge.hints import HINT_KEY, apply_placement_hints
from villain_timeline.processing.processor import utc_timestamp
from villain_timeline.processing.stats import round_frequency

log = get_logger("merge.merger")

UNKNOWN_SERIES = "Unknown"
DEFAULT_COMBINED_SERIES = "Combined"

MergeKey = Tuple[str, str]


@dataclass
class MergedDataset:
    villains: List[Dict[str, Any]] = field(default_factory=list)
    groups: List[Dict[str, Any]] = field(default_factory=list)
    timeline: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# 1. Identity union
# ---------------------------------------------------------------------------

def villain_merge_key(villain: Dict[str, Any]) -> MergeKey:
    """
    URL-keyed and id-keyed identities live in separate key spaces, so a
    name-keyed identity never folds into a URL-keyed one.
    """
    url = canonical_url(villain.get("url"))
    if url:
        return ("url", url)
    return ("id", str(villain.get("id")))


def _union_names(primary: str, current: List[str], incoming: Iterable[str]) -> List[str]:
    names = list(current)
    for name in incoming:
        if name and name != primary and name not in names:
            names.append(name)
    return names


def _appearance_set(villain: Dict[str, Any]) -> Set[float]:
    appearances = villain.get("appearances")
    if appearances is None:
        return set()
    if not isinstance(appearances, list) or not all(
        isinstance(n, (int, float)) and not isinstance(n, bool) for n in appearances
    ):
        raise ProcessingError.data_inconsistency(
            f'appearances of "{villain.get("id")}" must be a list of issue numbers'
        )
    return set(appearances)


def union_villains(datasets: Sequence[Dict[str, Any]]) -> Dict[MergeKey, Dict[str, Any]]:
    """
    Raises ProcessingError when an identity's appearances are not issue
    numbers, or when two different identities carry the same id.
    """
    merged: Dict[MergeKey, Dict[str, Any]] = {}
    key_by_id: Dict[str, MergeKey] = {}

    for dataset in datasets:
        for villain in dataset.get("villains") or []:
            key = villain_merge_key(villain)
            appearances = _appearance_set(villain)
            variants = [villain.get("name")] + list(villain.get("aliases") or [])

            existing = merged.get(key)
            if existing is None:
                vid = str(villain.get("id") or "")
                if vid and key_by_id.setdefault(vid, key) != key:
                    raise ProcessingError.merge_conflict(
                        vid, f"shared by {key_by_id[vid][1]} and {key[1]}"
                    )
                url = canonical_url(villain.get("url"))
                merged[key] = {
                    "id": villain.get("id"),
                    "name": villain.get("name"),
                    "aliases": _union_names(villain.get("name"), [], variants),
                    "url": url,
                    "imageUrl": villain.get("imageUrl") or None,
                    "identitySource": villain.get("identitySource") or ("url" if url else "name"),
                    "firstAppearance": villain.get("firstAppearance"),
                    "appearances": sorted(appearances),
                    "frequency": len(appearances),
                }
                continue

            existing["aliases"] = _union_names(existing["name"], existing["aliases"], variants)
            if not existing.get("imageUrl") and villain.get("imageUrl"):
                existing["imageUrl"] = villain["imageUrl"]

            union = set(existing["appearances"]) | appearances
            existing["appearances"] = sorted(union)
            existing["frequency"] = len(union)

    return merged


# ---------------------------------------------------------------------------
# 2. Group union
# ---------------------------------------------------------------------------

def union_groups(datasets: Sequence[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    merged: Dict[str, Dict[str, Any]] = {}

    for dataset in datasets:
        for group in dataset.get("groups") or []:
            key = group.get("name") or str(group.get("id"))
            appearances = set(group.get("appearances") or [])

            existing = merged.get(key)
            if existing is None:
                merged[key] = {
                    "id": group.get("id") or slugify(key),
                    "name": group.get("name") or key,
                    "url": group.get("url"),
                    "appearances": sorted(appearances),
                    "frequency": len(appearances),
                }
                continue

            if not existing.get("url") and group.get("url"):
                existing["url"] = group["url"]
            union = set(existing["appearances"]) | appearances
            existing["appearances"] = sorted(union)
            existing["frequency"] = len(union)

    return merged


# ---------------------------------------------------------------------------
# 3-6. Timeline
# ---------------------------------------------------------------------------

def concatenate_timelines(datasets: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    combined: List[Dict[str, Any]] = []
    for dataset in datasets:
        series = dataset.get("series") or UNKNOWN_SERIES
        for entry in dataset.get("timeline") or []:
            tagged = dict(entry)
            tagged["series"] = series
            combined.append(tagged)
    return combined


def sort_chronologically(timeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Release date ascending; undated entries after every dated one, order kept.
    Each unparsable date is warned about once per call.
    """
    warned: Set[str] = set()
    return sorted(
        timeline, key=lambda e: chronological_sort_key(e.get("releaseDate"), warned)
    )


def assign_positions(timeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    for index, entry in enumerate(timeline):
        entry["chronologicalPosition"] = index + 1
    return timeline


# ---------------------------------------------------------------------------
# 7. First appearances
# ---------------------------------------------------------------------------

def recompute_first_appearances(
    villains: Iterable[Dict[str, Any]], timeline: Sequence[Dict[str, Any]]
) -> None:
    """
    First appearance follows the global chronological order: the first
    timeline entry listing the identity's URL wins, whatever its issue number.
    Identities without a URL or a timeline match fall back to their lowest
    appearance number.
    """
    first_entry_by_url: Dict[str, Dict[str, Any]] = {}
    for entry in timeline:
        for url in entry.get("villainUrls") or []:
            if url and url not in first_entry_by_url:
                first_entry_by_url[url] = entry

    for villain in villains:
        entry = first_entry_by_url.get(villain.get("url")) if villain.get("url") else None
        if entry is not None:
            villain["firstAppearance"] = entry.get("issue")
            villain["firstAppearanceSeries"] = entry.get("series")
            continue

        if villain.get("appearances"):
            villain["firstAppearance"] = min(villain["appearances"])
        villain["firstAppearanceSeries"] = None


# ---------------------------------------------------------------------------
# 8. Stats
# ---------------------------------------------------------------------------

def compute_merged_stats(villains: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    most: Optional[Dict[str, Any]] = None
    for v in villains:
        if most is None or v.get("frequency", 0) > most.get("frequency", 0):
            most = v

    total = len(villains)
    average = sum(v.get("frequency", 0) for v in villains) / total if total else 0.0

    return {
        "totalVillains": total,
        "mostFrequent": most["name"] if most else "",
        "mostFrequentCount": most.get("frequency", 0) if most else 0,
        "averageFrequency": round_frequency(average),
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def merge_datasets(datasets: Sequence[Dict[str, Any]]) -> MergedDataset:
    """
    Merge serialized per-series datasets into one combined dataset.

    Raises ProcessingError (PROCESSING_NO_DATASETS) when called with nothing
    to merge. Unparsable or unmatched placement hints are recoverable: the
    entry goes to the end and a warning is recorded on the result.
    """
    if not datasets:
        raise ProcessingError.no_datasets()

    warnings: List[str] = []

    villains = list(union_villains(datasets).values())
    groups = list(union_groups(datasets).values())

    timeline = sort_chronologically(concatenate_timelines(datasets))
    hinted = sum(1 for e in timeline if e.get(HINT_KEY))
    timeline = apply_placement_hints(timeline, warnings)
    assign_positions(timeline)

    recompute_first_appearances(villains, timeline)
    stats = compute_merged_stats(villains)

    log.info(
        "Merged %d datasets: %d villains, %d groups, %d timeline entries (%d hinted)",
        len(datasets),
        len(villains),
        len(groups),
        len(timeline),
        hinted,
    )

    return MergedDataset(
        villains=villains,
        groups=groups,
        timeline=timeline,
        stats=stats,
        warnings=warnings,
    )


# ---------------------------------------------------------------------------
# Combined output
# ---------------------------------------------------------------------------

def _ids_for_entry(
    entry: Dict[str, Any],
    by_url: Dict[str, Dict[str, Any]],
    by_id: Dict[str, Dict[str, Any]],
    by_name: Dict[str, List[Dict[str, Any]]],
) -> List[str]:
    """
    Rebuild villainIds for one entry against the merged identities, slot by
    slot so villains / villainUrls / villainIds stay aligned.

    A slot with a URL resolves through the URL. A slot without one only ever
    resolves to a URL-less identity: first through its source id (the merge
    key of name-keyed identities), then by primary name.
    """
    names = entry.get("villains") or []
    urls = entry.get("villainUrls") or []
    previous = entry.get("villainIds") or []

    ids: List[str] = []
    for i, name in enumerate(names):
        url = canonical_url(urls[i]) if i < len(urls) else None
        source_id = previous[i] if i < len(previous) else None

        if url:
            match = by_url.get(url)
        else:
            match = by_id.get(source_id) if source_id else None
            if match is None and by_name.get(name):
                match = by_name[name][0]

        if match is not None:
            ids.append(match["id"])
        elif source_id:
            ids.append(source_id)
        else:
            ids.append(slugify(name))
    return ids


def build_combined_output(
    merged: MergedDataset,
    series_name: str = DEFAULT_COMBINED_SERIES,
    *,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Serialized shape of a merged dataset (same layout as a per-series file)."""
    by_url = {v["url"]: v for v in merged.villains if v.get("url")}
    by_id: Dict[str, Dict[str, Any]] = {}
    by_name: Dict[str, List[Dict[str, Any]]] = {}
    for v in merged.villains:
        if v.get("url"):
            continue
        by_id.setdefault(str(v["id"]), v)
        by_name.setdefault(v["name"], []).append(v)

    villains = [
        compact({
            "id": v["id"],
            "name": v["name"],
            "aliases": list(v.get("aliases") or []),
            "url": v.get("url"),
            "imageUrl": v.get("imageUrl"),
            "identitySource": "url" if v.get("url") else "name",
            "firstAppearance": v.get("firstAppearance"),
            "firstAppearanceSeries": v.get("firstAppearanceSeries"),
            "appearances": list(v.get("appearances") or []),
            "frequency": v.get("frequency", 0),
        })
        for v in merged.villains
    ]

    timeline = []
    for entry in merged.timeline:
        out = dict(entry)
        out["villainIds"] = _ids_for_entry(entry, by_url, by_id, by_name)
        timeline.append(out)

    return {
        "series": series_name,
        "processedAt": utc_timestamp(now),
        "stats": dict(merged.stats),
        "villains": villains,
        "timeline": timeline,
        "groups": [dict(g) for g in merged.groups],
    }


__all__ = [
    "MergedDataset",
    "assign_positions",
    "build_combined_output",
    "compute_merged_stats",
    "concatenate_timelines",
    "merge_datasets",
    "recompute_first_appearances",
    "sort_chronologically",
    "union_groups",
    "union_villains",
    "villain_merge_key",
]
