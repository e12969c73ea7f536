"""
End-to-end resolution: version expression in, artifact URL out.

Usage:
    from mdbvm import resolve_artifact, EngineConfig

    artifact = resolve_artifact("7.0", config=EngineConfig.from_env())
    if artifact.found:
        print(artifact.url)
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from mdbvm.catalog import ReleaseCatalog
from mdbvm.config import EngineConfig
from mdbvm.fingerprint import adapt, detect
from mdbvm.locator import locate
from mdbvm.resolver import parse_spec, resolve
from mdbvm.types import (
    Flavor,
    PlatformFingerprint,
    Product,
    ResolvedArtifact,
    ResolvedVersion,
)

logger = logging.getLogger(__name__)


def resolve_version(
    text: str,
    product: Product = Product.SERVER,
    flavor: Flavor = Flavor.STABLE,
    config: Optional[EngineConfig] = None,
    catalog: Optional[ReleaseCatalog] = None,
) -> ResolvedVersion:
    """
    Parse and resolve a version expression.

    Raises:
        InvalidVersionFormat: If ``text`` is not a version expression
        NoMatchingRelease: If the catalog has no matching release
        CatalogUnavailable: If the catalog is needed but unavailable
    """
    config = config or EngineConfig()
    catalog = catalog or ReleaseCatalog(product, config)
    return resolve(parse_spec(text), catalog, flavor)


def resolve_artifact(
    text: str,
    product: Product = Product.SERVER,
    flavor: Flavor = Flavor.STABLE,
    config: Optional[EngineConfig] = None,
    fingerprint: Optional[PlatformFingerprint] = None,
    catalog: Optional[ReleaseCatalog] = None,
) -> ResolvedArtifact:
    """
    Resolve a version expression and locate its artifact for this machine.

    Args:
        text: Version expression ("7.0", "stable", "6.0.5-ent", ...)
        product: Server or database tools
        flavor: Include pre-releases when LATEST
        config: Engine configuration
        fingerprint: Platform override (default: detected)
        catalog: Catalog override (default: one for ``product``)

    Returns:
        ResolvedArtifact, found or not found, with any advisories raised
        while adapting the platform or choosing the build
    """
    config = config or EngineConfig()
    resolved = resolve_version(text, product, flavor, config, catalog)
    logger.debug(f"Locating {product.value} {resolved} requested as {text!r}")

    if fingerprint is None:
        fingerprint = detect(legacy=config.legacy)
    elif config.legacy and not fingerprint.legacy:
        fingerprint = replace(fingerprint, legacy=True)
    fingerprint, advisories = adapt(fingerprint, resolved.version, product)

    return locate(resolved, fingerprint, config=config, advisories=advisories)
