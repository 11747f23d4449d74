from .normalizer import chronological_sort_key, parse_release_date

__all__ = ["chronological_sort_key", "parse_release_date"]
