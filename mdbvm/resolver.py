"""
Version spec parsing and resolution.

Expands what a user types (``7.0``, ``7.0.2-ent``, ``stable``, ``latest``)
into one concrete version from the release catalog.

Usage:
    from mdbvm import ReleaseCatalog, parse_spec, resolve, Flavor

    catalog = ReleaseCatalog()
    resolved = resolve(parse_spec("7.0"), catalog, Flavor.STABLE)
    print(resolved.version)  # e.g. "7.0.14"
"""

from __future__ import annotations

import logging
import re

from mdbvm._core.version import (
    max_version,
    parse_version,
    version_series,
)
from mdbvm.catalog import ReleaseCatalog
from mdbvm.errors import InvalidVersionFormat, NoMatchingRelease
from mdbvm.types import (
    ENTERPRISE_SUFFIX,
    Alias,
    AliasSpec,
    Edition,
    ExactSpec,
    Flavor,
    Product,
    ResolvedVersion,
    SeriesSpec,
    VersionSpec,
)

logger = logging.getLogger(__name__)

_SERIES_RE = re.compile(r"^(\d+)\.(\d+)$")


def parse_spec(text: str) -> VersionSpec:
    """
    Parse a version expression.

    Accepted forms, each optionally followed by ``-ent``:
    - ``stable`` / ``latest``
    - ``X.Y`` (release series)
    - ``X.Y.Z`` or ``X.Y.Z-rcN`` (exact)

    Raises:
        InvalidVersionFormat: For anything else
    """
    raw = (text or "").strip()
    body, edition = raw, Edition.COMMUNITY
    if raw.endswith(ENTERPRISE_SUFFIX):
        body, edition = raw[: -len(ENTERPRISE_SUFFIX)], Edition.ENTERPRISE

    lowered = body.lower()
    if lowered in (Alias.STABLE.value, Alias.LATEST.value):
        return AliasSpec(Alias(lowered), edition)

    series = _SERIES_RE.match(body)
    if series:
        return SeriesSpec(int(series.group(1)), int(series.group(2)), edition)

    if body.startswith("v"):
        body = body[1:]
    try:
        parse_version(body)
    except InvalidVersionFormat:
        raise InvalidVersionFormat(text, "expected X.Y, X.Y.Z[-tag], stable or latest") from None
    return ExactSpec(body, edition)


def is_stable_series(major: int, minor: int, product: Product = Product.SERVER) -> bool:
    """
    Whether a server release series is a stable (production) series.

    From 5.0 on only ``X.0`` series are stable; the other minors are rapid
    releases. Before 5.0 even minors were stable and odd minors were
    development series. The tools have no such distinction.
    """
    if product == Product.TOOLS:
        return True
    if major >= 5:
        return minor == 0
    return minor % 2 == 0


def resolve(
    spec: VersionSpec,
    catalog: ReleaseCatalog,
    flavor: Flavor = Flavor.STABLE,
) -> ResolvedVersion:
    """
    Expand a version spec into a concrete version.

    Args:
        spec: Parsed version spec
        catalog: Release catalog for the product being resolved
        flavor: Include pre-releases for series specs when LATEST

    Returns:
        ResolvedVersion carrying the spec's edition

    Raises:
        NoMatchingRelease: If the catalog has no matching release
        CatalogUnavailable: If the catalog cannot be loaded
    """
    product = catalog.product

    if isinstance(spec, ExactSpec):
        return ResolvedVersion(spec.version, spec.edition, product)

    if isinstance(spec, SeriesSpec):
        candidates = catalog.query(
            spec.pattern, include_prerelease=flavor == Flavor.LATEST
        )
    elif spec.alias == Alias.LATEST:
        candidates = catalog.query(include_prerelease=True)
    else:
        candidates = [
            v for v in catalog.query(include_prerelease=False)
            if is_stable_series(*version_series(v), product=product)
        ]

    best = max_version(candidates)
    if best is None:
        raise NoMatchingRelease(spec, flavor, f"no {product.value} release in catalog")

    logger.debug(f"Resolved {spec} ({flavor.value}) to {best}")
    return ResolvedVersion(best, spec.edition, product)