"""
Release catalog for the server and the database tools.

Handles:
- Fetching the remote release list (a JSON document)
- On-disk snapshot caching with expiry
- Querying versions by release series
"""

from __future__ import annotations

import json
import logging
import re
import time
from pathlib import Path
from typing import List, Optional

import requests

from mdbvm._core.version import is_prerelease, is_valid_version, sort_versions
from mdbvm.config import EngineConfig
from mdbvm.errors import CatalogUnavailable
from mdbvm.types import CatalogSnapshot, Product

logger = logging.getLogger(__name__)

# Only the version identifiers are needed, not the full document structure
_VERSION_FIELD_RE = re.compile(r'"version"\s*:\s*"([^"]+)"')


def extract_versions(document: str) -> List[str]:
    """
    Pull valid version identifiers out of a catalog document.

    Invalid identifiers are skipped; duplicates keep their first position.
    """
    seen = set()
    versions = []
    for raw in _VERSION_FIELD_RE.findall(document):
        if raw in seen:
            continue
        seen.add(raw)
        if not is_valid_version(raw):
            logger.debug(f"Skipping unrecognized catalog version {raw!r}")
            continue
        versions.append(raw)
    return versions


def matches_pattern(version: str, pattern: Optional[str]) -> bool:
    """
    Check whether ``version`` belongs to a series prefix or equals a version.

    "7.0" matches 7.0.0 and 7.0.3-rc0 but not 7.10.1.
    """
    if not pattern:
        return True
    return (
        version == pattern
        or version.startswith(pattern + ".")
        or version.startswith(pattern + "-")
    )


class ReleaseCatalog:
    """
    Release list for one product, backed by an optional on-disk snapshot.

    The snapshot is reused only when caching is enabled and its age is
    strictly below the configured expiry. Every fetch replaces the stored
    snapshot as a whole.

    Usage:
        catalog = ReleaseCatalog(Product.SERVER, EngineConfig())
        catalog.query("7.0")  # ['7.0.0', '7.0.1', ...]
    """

    def __init__(
        self,
        product: Product = Product.SERVER,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.product = product
        self.config = config or EngineConfig()
        self._snapshot: Optional[CatalogSnapshot] = None

    @property
    def url(self) -> str:
        if self.product == Product.TOOLS:
            return self.config.tools_catalog_url
        return self.config.server_catalog_url

    @property
    def cache_path(self) -> Path:
        return self.config.resolved_cache_dir() / f"{self.product.value}-releases.json"

    def snapshot(self) -> CatalogSnapshot:
        """Snapshot for this instance, loading or fetching it once."""
        if self._snapshot is None:
            self._snapshot = self.load_cached() or self.fetch()
        return self._snapshot

    def fetch(self) -> CatalogSnapshot:
        """
        Fetch the release list from the remote catalog.

        Returns:
            A fresh, non-empty snapshot

        Raises:
            CatalogUnavailable: If the catalog is unreachable or malformed
        """
        url = self.url
        logger.info(f"Fetching {self.product.value} release catalog from {url}")

        try:
            response = requests.get(url, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            raise CatalogUnavailable(f"Failed to fetch release catalog: {e}", url=url) from e

        if response.status_code != 200:
            raise CatalogUnavailable(
                f"Release catalog returned HTTP {response.status_code}", url=url
            )

        versions = extract_versions(response.text)
        if not versions:
            raise CatalogUnavailable("Release catalog lists no recognizable versions", url=url)

        snapshot = CatalogSnapshot(self.product, tuple(versions), time.time())
        logger.debug(f"Catalog lists {len(versions)} {self.product.value} versions")

        if self.config.cache_enabled:
            self.store(snapshot)
        self._snapshot = snapshot
        return snapshot

    def load_cached(self, now: Optional[float] = None) -> Optional[CatalogSnapshot]:
        """
        Load the stored snapshot if caching is enabled and it is still fresh.

        Missing, unreadable, corrupt or expired files are all cache misses, as
        is a file fetched from a different catalog URL.
        """
        if not self.config.cache_enabled:
            return None

        path = self.cache_path
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            snapshot = CatalogSnapshot(
                product=Product(data["product"]),
                versions=tuple(v for v in data["versions"] if is_valid_version(v)),
                captured_at=float(data["captured_at"]),
            )
        except FileNotFoundError:
            logger.debug(f"No cached catalog at {path}")
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.debug(f"Ignoring unreadable catalog cache {path}: {e}")
            return None

        if data.get("url") != self.url:
            logger.debug(f"Cached catalog at {path} came from another source, refetching")
            return None

        if snapshot.product != self.product or not snapshot.versions:
            return None

        if not snapshot.is_fresh(self.config.cache_expiry, now):
            logger.debug(
                f"Cached catalog is {snapshot.age(now):.0f}s old "
                f"(expiry {self.config.cache_expiry:.0f}s), refetching"
            )
            return None

        logger.debug(f"Using cached catalog from {path}")
        return snapshot

    def store(self, snapshot: CatalogSnapshot) -> bool:
        """
        Write the snapshot to the cache file.

        Best-effort: failures are logged and reported as False.
        """
        path = self.cache_path
        payload = {
            "product": snapshot.product.value,
            "url": self.url,
            "captured_at": snapshot.captured_at,
            "versions": list(snapshot.versions),
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write catalog cache {path}: {e}")
            return False
        return True

    def clear_cache(self) -> None:
        """Forget the stored and in-memory snapshots."""
        self._snapshot = None
        path = self.cache_path
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove catalog cache {path}: {e}")

    def query(
        self,
        pattern: Optional[str] = None,
        include_prerelease: bool = False,
    ) -> List[str]:
        """
        Versions in a release series, deduplicated and ascending.

        Args:
            pattern: Series prefix ("7.0") or full version; None matches all
            include_prerelease: Keep alpha/beta/rc releases

        Raises:
            CatalogUnavailable: If no snapshot can be loaded or fetched
        """
        versions = {
            v for v in self.snapshot().versions
            if matches_pattern(v, pattern)
            and (include_prerelease or not is_prerelease(v))
        }
        return sort_versions(versions)
