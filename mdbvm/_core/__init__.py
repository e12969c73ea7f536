"""
Core version handling for mdbvm.

This module handles:
- Version parsing and ordering (pre-releases before finals)
- Version thresholds that select artifact layouts
"""

from mdbvm._core.version import (
    MDBVM_VERSION,
    TOOLS_SPLIT_VERSION,
    TOOLS_DEDICATED_VERSION,
    parse_version,
    compare,
    lt,
    lte,
    gt,
    gte,
    eq,
    sort_versions,
    max_version,
)

__all__ = [
    # Version
    "MDBVM_VERSION",
    "TOOLS_SPLIT_VERSION",
    "TOOLS_DEDICATED_VERSION",
    # Comparison
    "parse_version",
    "compare",
    "lt",
    "lte",
    "gt",
    "gte",
    "eq",
    "sort_versions",
    "max_version",
]
