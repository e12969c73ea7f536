"""
Installed versions directory.

Each installed server version lives in ``<versions_dir>/<version>`` (with
an ``-ent`` suffix for enterprise builds); database tools live in
``<versions_dir>/tools-<version>``.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from platformdirs import user_data_dir

from mdbvm._core.version import is_valid_version, sort_versions
from mdbvm.types import ENTERPRISE_SUFFIX, Edition, Product, ResolvedVersion

TOOLS_PREFIX = "tools-"


def default_versions_dir() -> Path:
    """Get the directory where versions are installed."""
    return Path(user_data_dir("mdbvm", "mdbvm")) / "versions"


def install_dirname(resolved: ResolvedVersion) -> str:
    """Directory name for an installed version."""
    name = resolved.version
    if resolved.edition == Edition.ENTERPRISE:
        name += ENTERPRISE_SUFFIX
    if resolved.product == Product.TOOLS:
        name = TOOLS_PREFIX + name
    return name


def install_path(resolved: ResolvedVersion, versions_dir: Optional[Path] = None) -> Path:
    """Full path where ``resolved`` is (or would be) installed."""
    return (versions_dir or default_versions_dir()) / install_dirname(resolved)


def is_installed(resolved: ResolvedVersion, versions_dir: Optional[Path] = None) -> bool:
    return install_path(resolved, versions_dir).is_dir()


def list_installed(
    versions_dir: Optional[Path] = None,
    product: Product = Product.SERVER,
) -> List[ResolvedVersion]:
    """
    Installed versions of a product, ascending.

    Entries whose names are not valid versions are ignored. A missing
    directory means nothing is installed.
    """
    root = versions_dir or default_versions_dir()
    if not root.is_dir():
        return []

    found = {}
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        name = entry.name
        if product == Product.TOOLS:
            if not name.startswith(TOOLS_PREFIX):
                continue
            name = name[len(TOOLS_PREFIX):]
        elif name.startswith(TOOLS_PREFIX):
            continue

        edition = Edition.COMMUNITY
        if name.endswith(ENTERPRISE_SUFFIX):
            name, edition = name[: -len(ENTERPRISE_SUFFIX)], Edition.ENTERPRISE
        if is_valid_version(name):
            found[(name, edition)] = ResolvedVersion(name, edition, product)

    ordered = sort_versions({version for version, _ in found})
    return [
        found[(version, edition)]
        for version in ordered
        for edition in (Edition.COMMUNITY, Edition.ENTERPRISE)
        if (version, edition) in found
    ]
