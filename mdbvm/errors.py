"""
Exception types for mdbvm.

Provides typed exceptions for:
- Version parsing and comparison errors
- Release catalog errors
- Version resolution errors
- Artifact location errors
"""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from mdbvm.types import Edition, Flavor, PlatformFingerprint, VersionSpec


class MdbvmError(Exception):
    """Base exception for all mdbvm errors."""
    pass


class ConfigError(MdbvmError):
    """
    Raised when engine configuration is invalid.

    This includes:
    - Negative cache expiry
    - Non-positive network timeouts
    - Unparseable environment overrides
    """
    pass


# =============================================================================
# Version Errors
# =============================================================================


class InvalidVersionFormat(MdbvmError, ValueError):
    """
    Raised when a version string does not match ``major.minor.patch[-tag]``.

    Malformed versions are never coerced. Comparing against one, or asking
    the resolver to pass one through, fails with this error.
    """

    def __init__(self, value: str, detail: str = ""):
        self.value = value
        message = f"Invalid version format: {value!r}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)


# =============================================================================
# Catalog Errors
# =============================================================================


class CatalogUnavailable(MdbvmError):
    """
    Raised when the remote release catalog cannot be used.

    This includes:
    - Network failures and timeouts
    - Non-200 responses
    - Documents without a single recognizable version
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


# =============================================================================
# Resolution Errors
# =============================================================================


class NoMatchingRelease(MdbvmError):
    """
    Raised when no catalog release satisfies a version spec.

    Example:
        try:
            resolved = resolve(parse_spec("9.9"), catalog)
        except NoMatchingRelease as e:
            logger.error(f"Nothing to install for {e.spec}")
    """

    def __init__(self, spec: "VersionSpec", flavor: "Flavor", detail: str = ""):
        self.spec = spec
        self.flavor = flavor
        message = f"No {flavor.value} release matches {spec}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ArtifactNotFound(MdbvmError):
    """
    Raised when every candidate URL failed its existence probe.

    Carries the platform and edition context so callers can print
    build-from-source guidance.
    """

    def __init__(
        self,
        version: str,
        edition: "Edition",
        fingerprint: "PlatformFingerprint",
        tried: Optional[List[str]] = None,
    ):
        self.version = version
        self.edition = edition
        self.fingerprint = fingerprint
        self.tried = list(tried or [])

        message = (
            f"No {edition.value} binary of {version} for {fingerprint.describe()}"
        )
        if self.tried:
            message += f" (tried {len(self.tried)} URL(s))"
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"ArtifactNotFound(version={self.version!r}, edition={self.edition!r}, "
            f"tried={self.tried!r})"
        )
