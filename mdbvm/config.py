"""
Engine configuration.

Usage:
    from mdbvm import EngineConfig

    config = EngineConfig(cache_expiry=600)

    # Or from the environment
    config = EngineConfig.from_env()

Environment Variables:
    MDBVM_CACHE: "0", "false", "no" or "off" disables the catalog cache
    MDBVM_CACHE_EXPIRY: Cache expiry in seconds (default 3600)
    MDBVM_CACHE_DIR: Directory for the catalog cache file
    MDBVM_LEGACY: Truthy value enables legacy (no-SSL) builds only
    MDBVM_TIMEOUT: Network timeout in seconds (default 30)
    MDBVM_MIRROR: Base URL replacing https://fastdl.mongodb.org
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from platformdirs import user_cache_dir

from mdbvm.errors import ConfigError

DEFAULT_CACHE_EXPIRY = 3600
DEFAULT_TIMEOUT = 30.0

FASTDL_URL = "https://fastdl.mongodb.org"
ENTERPRISE_URL = "https://downloads.mongodb.com"
SERVER_CATALOG_URL = "https://downloads.mongodb.org/full.json"
TOOLS_CATALOG_URL = "https://downloads.mongodb.org/tools/db/full.json"

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class EngineConfig:
    """
    Configuration for catalog fetching and artifact location.

    Attributes:
        cache_enabled: Reuse the on-disk catalog snapshot while fresh
        cache_expiry: Snapshot lifetime in seconds
        cache_dir: Cache directory (default: platform user cache dir)
        legacy: Only try generic (no-SSL) builds
        timeout: Timeout in seconds for every network call
        fastdl_url: Base URL for community downloads
        enterprise_url: Base URL for enterprise downloads
        server_catalog_url: Server release catalog document
        tools_catalog_url: Database tools release catalog document
    """
    cache_enabled: bool = True
    cache_expiry: float = DEFAULT_CACHE_EXPIRY
    cache_dir: Optional[Path] = None
    legacy: bool = False
    timeout: float = DEFAULT_TIMEOUT
    fastdl_url: str = FASTDL_URL
    enterprise_url: str = ENTERPRISE_URL
    server_catalog_url: str = SERVER_CATALOG_URL
    tools_catalog_url: str = TOOLS_CATALOG_URL

    def __post_init__(self) -> None:
        """Validate configuration on creation."""
        if self.cache_dir is not None:
            self.cache_dir = Path(self.cache_dir)
        self.fastdl_url = self.fastdl_url.rstrip("/")
        self.enterprise_url = self.enterprise_url.rstrip("/")
        self.validate()

    def validate(self) -> None:
        """Validate configuration values."""
        if self.cache_expiry < 0:
            raise ConfigError(
                f"cache_expiry must be >= 0 seconds, got {self.cache_expiry}"
            )
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be > 0 seconds, got {self.timeout}")

    def resolved_cache_dir(self) -> Path:
        """Cache directory, falling back to the platform user cache dir."""
        if self.cache_dir is not None:
            return self.cache_dir
        return Path(user_cache_dir("mdbvm", "mdbvm"))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """
        Build a configuration from ``MDBVM_*`` environment variables.

        Raises:
            ConfigError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        if "MDBVM_CACHE" in env:
            kwargs["cache_enabled"] = env["MDBVM_CACHE"].strip().lower() not in _FALSE_VALUES
        if "MDBVM_LEGACY" in env:
            kwargs["legacy"] = env["MDBVM_LEGACY"].strip().lower() not in _FALSE_VALUES + ("",)
        if env.get("MDBVM_CACHE_DIR"):
            kwargs["cache_dir"] = Path(env["MDBVM_CACHE_DIR"])
        if env.get("MDBVM_MIRROR"):
            kwargs["fastdl_url"] = env["MDBVM_MIRROR"]

        for var, key in (("MDBVM_CACHE_EXPIRY", "cache_expiry"), ("MDBVM_TIMEOUT", "timeout")):
            if env.get(var):
                try:
                    kwargs[key] = float(env[var])
                except ValueError as e:
                    raise ConfigError(f"{var} must be a number, got {env[var]!r}") from e

        return cls(**kwargs)
