"""
Artifact location: from a resolved version and a fingerprint to one URL.

Candidate URLs are built in strict priority order and probed one at a
time; the first that exists wins and nothing after it is probed.

Server order:
1. Distribution builds from the candidate chain, most specific first
2. The generic non-SSL build (community only, never enterprise)

Database tools from 100.0.0 have their own archive layout. Older tools
were bundled with the server and share its archives up to 4.3.2.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

import requests

from mdbvm._core.version import (
    TOOLS_DEDICATED_VERSION,
    TOOLS_SPLIT_VERSION,
    gte,
    lt,
)
from mdbvm.config import EngineConfig
from mdbvm.fingerprint import osx_variant
from mdbvm.types import (
    ArtifactCandidate,
    BuildVariant,
    Edition,
    OSFamily,
    PlatformFingerprint,
    Product,
    ResolvedArtifact,
    ResolvedVersion,
)

logger = logging.getLogger(__name__)


def _linux_server_arch(arch: str) -> str:
    # Linux server archives name 64-bit ARM "aarch64"
    return "aarch64" if arch == "arm64" else arch


def server_candidates(
    version: str,
    fingerprint: PlatformFingerprint,
    edition: Edition,
    config: EngineConfig,
) -> List[ArtifactCandidate]:
    """Ordered server archive candidates for a fingerprint."""
    fastdl, enterprise = config.fastdl_url, config.enterprise_url
    arch = fingerprint.arch
    candidates: List[ArtifactCandidate] = []

    if fingerprint.os == OSFamily.LINUX:
        arch = _linux_server_arch(arch)
        chain = () if fingerprint.legacy else fingerprint.candidates
        for tag in chain:
            if edition == Edition.ENTERPRISE:
                url = f"{enterprise}/linux/mongodb-linux-{arch}-enterprise-{tag}-{version}.tgz"
            else:
                url = f"{fastdl}/linux/mongodb-linux-{arch}-{tag}-{version}.tgz"
            candidates.append(ArtifactCandidate(url, edition, BuildVariant.SSL, tag))
        if edition == Edition.COMMUNITY:
            url = f"{fastdl}/linux/mongodb-linux-{arch}-{version}.tgz"
            candidates.append(ArtifactCandidate(url, edition, BuildVariant.NOSSL))

    elif fingerprint.os == OSFamily.OSX:
        variant = osx_variant(version, edition)
        if edition == Edition.ENTERPRISE:
            url = f"{enterprise}/osx/mongodb-{variant}-{arch}-enterprise-{version}.tgz"
            candidates.append(ArtifactCandidate(url, edition, BuildVariant.SSL))
        else:
            if not fingerprint.legacy:
                url = f"{fastdl}/osx/mongodb-{variant}-{arch}-{version}.tgz"
                candidates.append(ArtifactCandidate(url, edition, BuildVariant.SSL))
            if variant == "osx-ssl" or fingerprint.legacy:
                url = f"{fastdl}/osx/mongodb-osx-{arch}-{version}.tgz"
                candidates.append(ArtifactCandidate(url, edition, BuildVariant.NOSSL))

    elif fingerprint.os == OSFamily.SUNOS5:
        if edition == Edition.COMMUNITY:
            url = f"{fastdl}/sunos5/mongodb-sunos5-{arch}-{version}.tgz"
            candidates.append(ArtifactCandidate(url, edition, BuildVariant.NOSSL))

    return candidates


def tools_archive_extension(version: str, fingerprint: PlatformFingerprint) -> str:
    """Standalone tools ship as zip on macOS and as tarballs elsewhere."""
    if fingerprint.os == OSFamily.OSX and gte(version, TOOLS_DEDICATED_VERSION):
        return "zip"
    return "tgz"


def tools_candidates(
    version: str,
    fingerprint: PlatformFingerprint,
    edition: Edition,
    config: EngineConfig,
) -> List[ArtifactCandidate]:
    """
    Ordered database tools archive candidates.

    Tools below 100.0.0 are the server archive of the same version, which
    only bundled them before 4.3.2.
    """
    if lt(version, TOOLS_DEDICATED_VERSION):
        if lt(version, TOOLS_SPLIT_VERSION):
            return server_candidates(version, fingerprint, edition, config)
        logger.debug(f"Server {version} does not bundle the database tools")
        return []

    base = f"{config.fastdl_url}/tools/db/mongodb-database-tools"
    ext = tools_archive_extension(version, fingerprint)
    arch = fingerprint.arch

    # The tools are published as a single build for both editions
    if fingerprint.os == OSFamily.OSX:
        url = f"{base}-macos-{arch}-{version}.{ext}"
        return [ArtifactCandidate(url, edition, BuildVariant.SSL)]

    if fingerprint.os == OSFamily.LINUX:
        return [
            ArtifactCandidate(f"{base}-{tag}-{arch}-{version}.{ext}", edition, BuildVariant.SSL, tag)
            for tag in fingerprint.candidates
        ]

    return []


def build_candidates(
    resolved: ResolvedVersion,
    fingerprint: PlatformFingerprint,
    edition: Optional[Edition] = None,
    config: Optional[EngineConfig] = None,
) -> List[ArtifactCandidate]:
    """
    Every candidate for a resolved version, in probing order.

    Args:
        resolved: Version to locate
        fingerprint: Adapted platform fingerprint
        edition: Edition override (default: the version's edition)
        config: Mirror and timeout settings

    Returns:
        Candidates, highest priority first; empty for unsupported platforms
    """
    config = config or EngineConfig()
    edition = edition or resolved.edition

    if not fingerprint.supported:
        return []
    if resolved.product == Product.TOOLS:
        return tools_candidates(resolved.version, fingerprint, edition, config)
    return server_candidates(resolved.version, fingerprint, edition, config)


def probe(url: str, timeout: float) -> bool:
    """
    Check that a URL exists without downloading it.

    Returns:
        True only for an HTTP 200 after redirects; network errors and
        timeouts count as a missing artifact
    """
    try:
        response = requests.head(url, allow_redirects=True, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.debug(f"Probe failed for {url}: {e}")
        return False

    logger.debug(f"Probe {url} -> HTTP {response.status_code}")
    return response.status_code == 200


def locate(
    resolved: ResolvedVersion,
    fingerprint: PlatformFingerprint,
    edition: Optional[Edition] = None,
    config: Optional[EngineConfig] = None,
    advisories: Sequence[str] = (),
) -> ResolvedArtifact:
    """
    Find the first existing artifact for a version on a platform.

    Args:
        resolved: Version to locate
        fingerprint: Adapted platform fingerprint
        edition: Edition override (default: the version's edition)
        config: Mirror and timeout settings
        advisories: Advisories already raised while adapting the fingerprint

    Returns:
        ResolvedArtifact; ``found`` is False when every candidate failed.
        A generic non-SSL winner adds an advisory unless legacy mode
        asked for it.
    """
    config = config or EngineConfig()
    advisories = list(advisories)
    if edition is not None and edition != resolved.edition:
        resolved = replace(resolved, edition=edition)
    tried: List[str] = []

    for candidate in build_candidates(resolved, fingerprint, config=config):
        tried.append(candidate.url)
        if probe(candidate.url, config.timeout):
            logger.info(f"Found {resolved} for {fingerprint.describe()}: {candidate.url}")
            if candidate.variant == BuildVariant.NOSSL and not fingerprint.legacy:
                advisory = (
                    f"Using the generic non-SSL build of {resolved.version}; "
                    f"no SSL build was found for {fingerprint.describe()}"
                )
                logger.warning(advisory)
                advisories.append(advisory)
            return ResolvedArtifact.found_at(candidate, resolved, fingerprint, tried, advisories)

    logger.info(
        f"No {resolved.edition.value} binary of {resolved.version} "
        f"for {fingerprint.describe()}"
    )
    return ResolvedArtifact.not_found(resolved, fingerprint, tried, advisories)
