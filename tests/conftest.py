"""
Pytest configuration for mdbvm tests.
"""

import json

import pytest

from mdbvm.catalog import ReleaseCatalog
from mdbvm.config import EngineConfig
from mdbvm.types import CatalogSnapshot, OSFamily, PlatformFingerprint, Product


@pytest.fixture
def config(tmp_path):
    """Engine config with the catalog cache in a temporary directory."""
    return EngineConfig(cache_dir=tmp_path / "cache")


@pytest.fixture
def make_catalog(config):
    """Build a ReleaseCatalog preloaded with the given versions (no network)."""
    def _make(versions, product=Product.SERVER):
        catalog = ReleaseCatalog(product, config)
        catalog._snapshot = CatalogSnapshot(product, tuple(versions))
        return catalog
    return _make


@pytest.fixture
def catalog_document():
    """Trimmed-down server full.json document."""
    return json.dumps({
        "versions": [
            {"version": "7.1.0-rc1", "downloads": [{"target": "rhel80"}]},
            {"version": "7.0.2", "production_release": True},
            {"version": "7.0.1", "production_release": True},
            {"version": "6.0.11", "production_release": True},
            {"version": "4.4.25", "production_release": True},
            {"version": "7.0.1", "production_release": True},
            {"version": "nightly"},
        ]
    })


@pytest.fixture
def rhel8_fingerprint():
    """Linux x86_64 fingerprint on RHEL 8."""
    return PlatformFingerprint(
        os=OSFamily.LINUX,
        arch="x86_64",
        distro_id="rhel",
        distro_version="8.6",
        candidates=("rhel80", "rhel70"),
    )


@pytest.fixture
def osx_arm64_fingerprint():
    """Apple Silicon fingerprint."""
    return PlatformFingerprint(os=OSFamily.OSX, arch="arm64")
