"""
Taxonomy package: curated group registry + individual/group classifier.
"""

from villain_timeline.taxonomy.classifier import (
    FALLBACK_PATTERNS,
    GroupClassifier,
    classify_kind,
    is_group_name,
    registered_groups,
    resolve_group_canonical,
)
from villain_timeline.taxonomy.registry import (
    AuditEntry,
    AuditLog,
    GroupRegistry,
    GroupRegistryEntry,
    default_registry,
)

__all__ = [
    "AuditEntry",
    "AuditLog",
    "FALLBACK_PATTERNS",
    "GroupClassifier",
    "GroupRegistry",
    "GroupRegistryEntry",
    "classify_kind",
    "default_registry",
    "is_group_name",
    "registered_groups",
    "resolve_group_canonical",
]
