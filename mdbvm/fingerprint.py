"""
Platform detection for artifact selection.

Handles:
- OS family and CPU architecture normalization
- Linux distribution detection and its build candidate chain
- Version-gated macOS substitutions (Rosetta fallback, SSL naming)
"""

from __future__ import annotations

import logging
import platform
from dataclasses import replace
from typing import List, Tuple

import distro

from mdbvm._core.version import (
    OSX_ARM64_SERVER_MIN,
    OSX_ARM64_TOOLS_MAX,
    OSX_MACOS_NAMING_MIN,
    lt,
    lte,
)
from mdbvm.distros import candidate_chain, normalize_distro
from mdbvm.types import Edition, OSFamily, PlatformFingerprint, Product

logger = logging.getLogger(__name__)

_OS_FAMILIES = {
    "linux": OSFamily.LINUX,
    "darwin": OSFamily.OSX,
    "sunos": OSFamily.SUNOS5,
}

_ARCH_ALIASES = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "arm64",
    "arm64e": "arm64",
}


def normalize_os(system: str) -> OSFamily:
    """Map ``platform.system()`` output to an OS family."""
    return _OS_FAMILIES.get(system.strip().lower(), OSFamily.UNSUPPORTED)


def normalize_arch(machine: str) -> str:
    """Map ``platform.machine()`` output to the names used in artifact URLs."""
    arch = machine.strip().lower()
    return _ARCH_ALIASES.get(arch, arch)


def detect(legacy: bool = False) -> PlatformFingerprint:
    """
    Determine the fingerprint of the local machine.

    Args:
        legacy: No-SSL mode; the distribution candidate chain is left empty
            so only generic builds are attempted

    Returns:
        PlatformFingerprint for this machine
    """
    os_family = normalize_os(platform.system())
    arch = normalize_arch(platform.machine())

    if os_family != OSFamily.LINUX:
        return PlatformFingerprint(os=os_family, arch=arch, legacy=legacy)

    # distro consults os-release, lsb_release and distro release files in order
    distro_id, distro_version = normalize_distro(distro.id(), distro.version(best=True))
    candidates = () if legacy else candidate_chain(distro_id, distro_version)
    if not candidates and not legacy:
        logger.debug(
            f"No distribution builds known for {distro_id} {distro_version}; "
            "only the generic build will be tried"
        )

    return PlatformFingerprint(
        os=os_family,
        arch=arch,
        distro_id=distro_id or None,
        distro_version=distro_version or None,
        candidates=candidates,
        legacy=legacy,
    )


def adapt(
    fingerprint: PlatformFingerprint,
    version: str,
    product: Product = Product.SERVER,
) -> Tuple[PlatformFingerprint, List[str]]:
    """
    Apply version-gated substitutions before candidate construction.

    Apple Silicon has no native server builds below 6.0.0 and no native
    tools builds up to 100.7.0; those requests fall back to x86_64 builds
    run under Rosetta.

    Returns:
        Tuple of (fingerprint, advisories)
    """
    advisories: List[str] = []

    if fingerprint.os == OSFamily.OSX and fingerprint.arch == "arm64":
        if product == Product.TOOLS:
            emulate = lte(version, OSX_ARM64_TOOLS_MAX)
        else:
            emulate = lt(version, OSX_ARM64_SERVER_MIN)
        if emulate:
            advisory = (
                f"No native arm64 build of {product.value} {version}; "
                "using the x86_64 build (requires Rosetta 2)"
            )
            logger.warning(advisory)
            advisories.append(advisory)
            fingerprint = replace(fingerprint, arch="x86_64")

    if fingerprint.legacy and fingerprint.candidates:
        fingerprint = replace(fingerprint, candidates=())

    return fingerprint, advisories


def osx_variant(version: str, edition: Edition) -> str:
    """
    macOS archive naming for a server version.

    Community builds before 4.1.1 were published as "osx-ssl", enterprise
    builds as "osx"; from 4.1.1 on both are "macos".
    """
    if lt(version, OSX_MACOS_NAMING_MIN):
        return "osx-ssl" if edition == Edition.COMMUNITY else "osx"
    return "macos"
