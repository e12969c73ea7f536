"""
Version constants and comparison for mdbvm.

Release versions look like ``major.minor.patch`` with an optional
pre-release tag (``7.1.0-rc1``, ``3.6.0-beta2``, ``2.0.0-alpha``).
Comparison is numeric per component, and a pre-release sorts before
its final release: ``alpha < beta < rc < final``.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from mdbvm.errors import InvalidVersionFormat
from mdbvm.types import Ordering

# mdbvm package version
MDBVM_VERSION = "0.3.0"

# Server releases below this version ship the database tools in the same
# archive; from here on the tools are a separate product.
TOOLS_SPLIT_VERSION = "4.3.2"

# First release of the standalone database tools
TOOLS_DEDICATED_VERSION = "100.0.0"

# Apple Silicon builds of the server exist from 6.0.0, of the tools after 100.7.0
OSX_ARM64_SERVER_MIN = "6.0.0"
OSX_ARM64_TOOLS_MAX = "100.7.0"

# macOS archives were renamed from "osx" to "macos" in 4.1.1
OSX_MACOS_NAMING_MIN = "4.1.1"

VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-(alpha|beta|rc)(\d*))?$")

_TAG_RANK = {
    "alpha": 0,
    "beta": 1,
    "rc": 2,
}
_FINAL_RANK = 3

VersionKey = Tuple[int, int, int, int, int]


def parse_version(version: str) -> VersionKey:
    """
    Parse a version string into a sortable key.

    Args:
        version: Version string like "7.0.2" or "7.1.0-rc1"

    Returns:
        Tuple of (major, minor, patch, tag_rank, tag_number). Final
        releases get a tag rank above every pre-release tag.

    Raises:
        InvalidVersionFormat: If the string is not a valid version
    """
    if not isinstance(version, str):
        raise InvalidVersionFormat(repr(version), "not a string")

    match = VERSION_RE.match(version)
    if not match:
        raise InvalidVersionFormat(version)

    major, minor, patch, tag, tag_num = match.groups()
    if tag is None:
        rank, number = _FINAL_RANK, 0
    else:
        rank, number = _TAG_RANK[tag], int(tag_num or 0)

    return (int(major), int(minor), int(patch), rank, number)


def is_valid_version(version: str) -> bool:
    """Check whether ``version`` parses, without raising."""
    try:
        parse_version(version)
    except InvalidVersionFormat:
        return False
    return True


def is_prerelease(version: str) -> bool:
    """True for alpha, beta and rc releases."""
    return parse_version(version)[3] != _FINAL_RANK


def version_series(version: str) -> Tuple[int, int]:
    """Return the (major, minor) release series of a version."""
    key = parse_version(version)
    return key[0], key[1]


def compare(a: str, b: str) -> Ordering:
    """
    Compare two versions.

    Raises:
        InvalidVersionFormat: If either side is malformed
    """
    left = parse_version(a)
    right = parse_version(b)
    if left < right:
        return Ordering.LT
    if left > right:
        return Ordering.GT
    return Ordering.EQ


def lt(a: str, b: str) -> bool:
    return compare(a, b) == Ordering.LT


def lte(a: str, b: str) -> bool:
    return compare(a, b) != Ordering.GT


def gt(a: str, b: str) -> bool:
    return compare(a, b) == Ordering.GT


def gte(a: str, b: str) -> bool:
    return compare(a, b) != Ordering.LT


def eq(a: str, b: str) -> bool:
    return compare(a, b) == Ordering.EQ


def sort_versions(versions: Iterable[str], reverse: bool = False) -> List[str]:
    """Sort versions ascending (or descending with ``reverse``)."""
    return sorted(versions, key=cmp_to_key(compare), reverse=reverse)


def max_version(versions: Iterable[str]) -> Optional[str]:
    """Highest version, or None for an empty iterable."""
    best: Optional[str] = None
    for version in versions:
        if best is None or gt(version, best):
            best = version
    return best
