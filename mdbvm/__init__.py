"""
mdbvm: MongoDB server and database tools version resolution.

This package provides:
- Version comparison with pre-release ordering
- A cached view of the official release catalog
- Resolution of "7.0", "stable", "latest" or "6.0.5-ent" to one version
- Platform fingerprinting (OS, architecture, Linux distribution)
- Location of the matching download URL, with distribution fallbacks

Installation:
    pip install mdbvm

Quickstart:
    from mdbvm import resolve_artifact, EngineConfig

    artifact = resolve_artifact("7.0", config=EngineConfig.from_env())
    if artifact.found:
        print(artifact.url)

Step by step:
    from mdbvm import ReleaseCatalog, parse_spec, resolve, detect, adapt, locate

    catalog = ReleaseCatalog()
    resolved = resolve(parse_spec("stable"), catalog)
    fingerprint, advisories = adapt(detect(), resolved.version)
    artifact = locate(resolved, fingerprint)
"""

from mdbvm.types import (
    Alias,
    AliasSpec,
    ArtifactCandidate,
    BuildVariant,
    CatalogSnapshot,
    Edition,
    ExactSpec,
    Flavor,
    Ordering,
    OSFamily,
    PlatformFingerprint,
    Product,
    ResolvedArtifact,
    ResolvedVersion,
    SeriesSpec,
    VersionSpec,
)
from mdbvm.errors import (
    MdbvmError,
    ConfigError,
    InvalidVersionFormat,
    CatalogUnavailable,
    NoMatchingRelease,
    ArtifactNotFound,
)
from mdbvm.config import EngineConfig
from mdbvm.catalog import ReleaseCatalog
from mdbvm.fingerprint import adapt, detect
from mdbvm.resolver import parse_spec, resolve
from mdbvm.locator import build_candidates, locate
from mdbvm.engine import resolve_artifact, resolve_version
from mdbvm._core.version import (
    MDBVM_VERSION,
    compare,
    gte,
    lt,
    lte,
    sort_versions,
)

__version__ = MDBVM_VERSION

__all__ = [
    # Version
    "__version__",
    "MDBVM_VERSION",
    "compare",
    "lt",
    "lte",
    "gte",
    "sort_versions",
    # Types
    "Alias",
    "AliasSpec",
    "ArtifactCandidate",
    "BuildVariant",
    "CatalogSnapshot",
    "Edition",
    "ExactSpec",
    "Flavor",
    "Ordering",
    "OSFamily",
    "PlatformFingerprint",
    "Product",
    "ResolvedArtifact",
    "ResolvedVersion",
    "SeriesSpec",
    "VersionSpec",
    # Errors
    "MdbvmError",
    "ConfigError",
    "InvalidVersionFormat",
    "CatalogUnavailable",
    "NoMatchingRelease",
    "ArtifactNotFound",
    # Engine
    "EngineConfig",
    "ReleaseCatalog",
    "detect",
    "adapt",
    "parse_spec",
    "resolve",
    "build_candidates",
    "locate",
    "resolve_version",
    "resolve_artifact",
]
