"""
Type definitions for mdbvm.

Defines enums and value objects used across the package for:
- Version requests (specs) and their resolution
- Release catalog snapshots
- Platform fingerprints and artifact candidates
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple, Union


# =============================================================================
# Enums
# =============================================================================


class Product(str, Enum):
    """Installable product. Each has its own catalog and URL templates."""
    SERVER = "server"
    TOOLS = "tools"


class Edition(str, Enum):
    """
    Build edition of the same version.

    The enterprise edition is requested with a ``-ent`` suffix on the
    version expression (``7.0-ent``).
    """
    COMMUNITY = "community"
    ENTERPRISE = "enterprise"


class Flavor(str, Enum):
    """
    Resolution mode for series and aliases.

    - STABLE: pre-release tags (alpha, beta, rc) are excluded
    - LATEST: pre-release tags are included
    """
    STABLE = "stable"
    LATEST = "latest"


class Alias(str, Enum):
    """Symbolic version names."""
    STABLE = "stable"
    LATEST = "latest"


class OSFamily(str, Enum):
    """Supported operating system families."""
    LINUX = "linux"
    OSX = "osx"
    SUNOS5 = "sunos5"
    UNSUPPORTED = "unsupported"


class BuildVariant(str, Enum):
    """SSL build variant of an artifact."""
    SSL = "ssl"
    NOSSL = "nossl"


class Ordering(IntEnum):
    """Result of comparing two versions."""
    LT = -1
    EQ = 0
    GT = 1


# =============================================================================
# Version Specs
# =============================================================================


ENTERPRISE_SUFFIX = "-ent"


def _edition_suffix(edition: Edition) -> str:
    return ENTERPRISE_SUFFIX if edition == Edition.ENTERPRISE else ""


@dataclass(frozen=True)
class ExactSpec:
    """A fully specified version such as ``7.0.2`` or ``7.1.0-rc1``."""
    version: str
    edition: Edition = Edition.COMMUNITY

    def __str__(self) -> str:
        return f"{self.version}{_edition_suffix(self.edition)}"


@dataclass(frozen=True)
class SeriesSpec:
    """A release series such as ``7.0``, spanning its patch releases."""
    major: int
    minor: int
    edition: Edition = Edition.COMMUNITY

    @property
    def pattern(self) -> str:
        """Series prefix used to query the catalog."""
        return f"{self.major}.{self.minor}"

    def __str__(self) -> str:
        return f"{self.pattern}{_edition_suffix(self.edition)}"


@dataclass(frozen=True)
class AliasSpec:
    """``stable`` or ``latest``."""
    alias: Alias
    edition: Edition = Edition.COMMUNITY

    def __str__(self) -> str:
        return f"{self.alias.value}{_edition_suffix(self.edition)}"


VersionSpec = Union[ExactSpec, SeriesSpec, AliasSpec]


# =============================================================================
# Resolution Results
# =============================================================================


@dataclass(frozen=True)
class ResolvedVersion:
    """
    A concrete version produced by the resolver.

    Attributes:
        version: Dotted version, ``major.minor.patch[-tag]``
        edition: Community or enterprise build
        product: Server or tools
    """
    version: str
    edition: Edition = Edition.COMMUNITY
    product: Product = Product.SERVER

    def __post_init__(self) -> None:
        # Imported here to avoid a circular import with the comparator
        from mdbvm._core.version import parse_version

        parse_version(self.version)

    @property
    def prerelease(self) -> Optional[str]:
        """Pre-release tag (``rc1``), or None for final releases."""
        if "-" not in self.version:
            return None
        return self.version.split("-", 1)[1]

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def __str__(self) -> str:
        return f"{self.version}{_edition_suffix(self.edition)}"


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    The set of known release versions for a product at capture time.

    Attributes:
        product: Product the catalog describes
        versions: Valid version strings, in document order
        captured_at: Capture time in epoch seconds
    """
    product: Product
    versions: Tuple[str, ...]
    captured_at: float = field(default_factory=time.time)

    def age(self, now: Optional[float] = None) -> float:
        """Seconds elapsed since the snapshot was captured."""
        now = time.time() if now is None else now
        return now - self.captured_at

    def is_fresh(self, expiry: float, now: Optional[float] = None) -> bool:
        """
        True if the snapshot is strictly younger than ``expiry`` seconds.

        A capture time in the future (clock moved back, edited file) is
        never fresh.
        """
        return 0 <= self.age(now) < expiry


# =============================================================================
# Platform and Artifacts
# =============================================================================


@dataclass(frozen=True)
class PlatformFingerprint:
    """
    Identity of the local machine, as far as artifact selection cares.

    Attributes:
        os: Operating system family
        arch: CPU architecture (``x86_64``, ``arm64``, ...)
        distro_id: Canonical Linux distribution id (``rhel``, ``ubuntu``)
        distro_version: Upstream distribution version (``8.6``, ``22.04``)
        candidates: Distribution build tags to try, most specific first
        legacy: No-SSL mode; only the generic build is attempted
    """
    os: OSFamily
    arch: str
    distro_id: Optional[str] = None
    distro_version: Optional[str] = None
    candidates: Tuple[str, ...] = ()
    legacy: bool = False

    @property
    def supported(self) -> bool:
        return self.os != OSFamily.UNSUPPORTED

    def describe(self) -> str:
        """Human-readable summary, e.g. ``linux/x86_64 (rhel 8.6)``."""
        text = f"{self.os.value}/{self.arch}"
        if self.distro_id:
            text += f" ({self.distro_id} {self.distro_version or '?'})"
        return text


@dataclass(frozen=True)
class ArtifactCandidate:
    """One constructed download URL and the combination that produced it."""
    url: str
    edition: Edition
    variant: BuildVariant
    distro: Optional[str] = None


@dataclass(frozen=True)
class ResolvedArtifact:
    """
    Outcome of artifact location: ``Found{url}`` or ``NotFound``.

    Attributes:
        found: Whether a candidate was confirmed to exist
        version: The resolved version that was located
        fingerprint: Fingerprint used to build candidates
        candidate: Winning candidate when found
        tried: URLs probed, in order
        advisories: Platform or build substitutions the caller should report
    """
    found: bool
    version: ResolvedVersion
    fingerprint: PlatformFingerprint
    candidate: Optional[ArtifactCandidate] = None
    tried: Tuple[str, ...] = ()
    advisories: Tuple[str, ...] = ()

    @classmethod
    def found_at(
        cls,
        candidate: ArtifactCandidate,
        version: ResolvedVersion,
        fingerprint: PlatformFingerprint,
        tried: List[str],
        advisories: Sequence[str] = (),
    ) -> "ResolvedArtifact":
        return cls(True, version, fingerprint, candidate, tuple(tried), tuple(advisories))

    @classmethod
    def not_found(
        cls,
        version: ResolvedVersion,
        fingerprint: PlatformFingerprint,
        tried: List[str],
        advisories: Sequence[str] = (),
    ) -> "ResolvedArtifact":
        return cls(False, version, fingerprint, None, tuple(tried), tuple(advisories))

    @property
    def url(self) -> Optional[str]:
        return self.candidate.url if self.candidate else None

    def unwrap(self) -> str:
        """
        Return the artifact URL.

        Raises:
            ArtifactNotFound: If no candidate exists
        """
        if self.candidate is None:
            from mdbvm.errors import ArtifactNotFound

            raise ArtifactNotFound(
                self.version.version,
                self.version.edition,
                self.fingerprint,
                list(self.tried),
            )
        return self.candidate.url
