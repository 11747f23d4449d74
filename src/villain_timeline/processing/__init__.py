"""
Per-series processing: identity resolution, timeline construction, stats.
"""

from villain_timeline.processing.processor import check_processed, process_villain_data
from villain_timeline.processing.resolver import (
    IdentityResolver,
    ResolvedIdentities,
    resolve_identities,
    select_primary_name,
)
from villain_timeline.processing.stats import generate_stats
from villain_timeline.processing.timeline import build_timeline, group_members

__all__ = [
    "IdentityResolver",
    "ResolvedIdentities",
    "build_timeline",
    "check_processed",
    "generate_stats",
    "group_members",
    "process_villain_data",
    "resolve_identities",
    "select_primary_name",
]
