"""Cross-series merge: union identities, reorder the timeline, apply placement hints."""

from .hints import (
    HintParseFailure,
    PlacementHint,
    apply_placement_hints,
    parse_placement_hint,
)
from .merger import MergedDataset, build_combined_output, merge_datasets

__all__ = [
    "HintParseFailure",
    "MergedDataset",
    "PlacementHint",
    "apply_placement_hints",
    "build_combined_output",
    "merge_datasets",
    "parse_placement_hint",
]
