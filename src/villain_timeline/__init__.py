"""
villain_timeline

Identity resolution and cross-series merge engine for per-issue antagonist
mention records: name normalization, group/individual taxonomy, per-series
identity + timeline construction, and chronological multi-series merging.
"""

__version__ = "0.4.0"
