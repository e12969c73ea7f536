"""
Command line interface for mdbvm.

Usage:
    mdbvm ls 7.0 --all
    mdbvm resolve stable
    mdbvm url 6.0-ent
    mdbvm --tools url latest
"""

from __future__ import annotations

import argparse
import logging
import sys
from enum import IntEnum
from typing import List, Optional

from mdbvm._core.version import MDBVM_VERSION
from mdbvm.catalog import ReleaseCatalog
from mdbvm.config import EngineConfig
from mdbvm.engine import resolve_artifact, resolve_version
from mdbvm.errors import (
    ArtifactNotFound,
    CatalogUnavailable,
    ConfigError,
    InvalidVersionFormat,
    NoMatchingRelease,
)
from mdbvm.fingerprint import detect
from mdbvm.installed import default_versions_dir, install_dirname, list_installed
from mdbvm.types import Flavor, Product

BUILD_FROM_SOURCE_HINT = (
    "No prebuilt binary is published for this platform. "
    "See https://github.com/mongodb/mongo/blob/master/docs/building.md "
    "to build from source."
)


# Sub-commands that read the release catalog
CATALOG_COMMANDS = ("ls", "resolve", "url")


class ExitCodes(IntEnum):
    """Process exit codes."""
    SUCCESS = 0
    NOT_FOUND = 1
    USAGE_ERROR = 2
    CATALOG_UNAVAILABLE = 3


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mdbvm",
        description="Resolve MongoDB server and database tools versions to downloadable binaries",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {MDBVM_VERSION}")
    parser.add_argument("--tools",
                        dest="product",
                        help="Operate on the database tools instead of the server",
                        action="store_const",
                        const=Product.TOOLS,
                        default=Product.SERVER)
    parser.add_argument("--no-cache",
                        dest="no_cache",
                        help="Do not read or write the release catalog cache",
                        action="store_true")
    parser.add_argument("--cache-expiry",
                        dest="cache_expiry",
                        help="Catalog cache lifetime in seconds",
                        type=float)
    parser.add_argument("--refresh",
                        dest="refresh",
                        help="Discard the cached catalog before running",
                        action="store_true")
    parser.add_argument("-v", "--verbose",
                        dest="verbose",
                        help="Enable debug logging",
                        action="store_true")

    commands = parser.add_subparsers(dest="command", required=True)

    ls = commands.add_parser("ls", help="List remote versions")
    ls.add_argument("pattern", nargs="?", help="Release series, e.g. 7.0")
    ls.add_argument("--all", dest="include_prerelease", action="store_true",
                    help="Include alpha, beta and rc releases")

    commands.add_parser("installed", help="List installed versions")
    commands.add_parser("platform", help="Show the detected platform")

    for name, text in (("resolve", "Print the concrete version for SPEC"),
                       ("url", "Print the download URL for SPEC")):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("spec", help="X.Y, X.Y.Z[-rcN], stable or latest; append -ent for enterprise")
        sub.add_argument("--latest", dest="flavor", action="store_const",
                         const=Flavor.LATEST, default=Flavor.STABLE,
                         help="Allow pre-releases when resolving a series")
        if name == "url":
            sub.add_argument("--legacy", dest="legacy", action="store_true",
                             help="Only try generic (no-SSL) builds")

    return parser


def _build_config(args: argparse.Namespace) -> EngineConfig:
    config = EngineConfig.from_env()
    if args.no_cache:
        config.cache_enabled = False
    if args.cache_expiry is not None:
        config.cache_expiry = args.cache_expiry
    if getattr(args, "legacy", False):
        config.legacy = True
    config.validate()
    return config


def _run(args: argparse.Namespace, config: EngineConfig) -> int:
    catalog = ReleaseCatalog(args.product, config)
    if args.refresh:
        catalog.clear_cache()
        if args.command in CATALOG_COMMANDS:
            catalog.fetch()

    if args.command == "ls":
        for version in catalog.query(args.pattern, args.include_prerelease):
            print(version)
        return ExitCodes.SUCCESS

    if args.command == "installed":
        for resolved in list_installed(default_versions_dir(), args.product):
            print(install_dirname(resolved))
        return ExitCodes.SUCCESS

    if args.command == "platform":
        fingerprint = detect(legacy=config.legacy)
        print(fingerprint.describe())
        for tag in fingerprint.candidates:
            print(f"  {tag}")
        return ExitCodes.SUCCESS

    if args.command == "resolve":
        print(resolve_version(args.spec, args.product, args.flavor, config, catalog))
        return ExitCodes.SUCCESS

    artifact = resolve_artifact(args.spec, args.product, args.flavor, config, catalog=catalog)
    print(artifact.unwrap())
    return ExitCodes.SUCCESS


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``mdbvm`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
        return _run(args, config)
    except (ConfigError, InvalidVersionFormat) as e:
        print(f"mdbvm: {e}", file=sys.stderr)
        return ExitCodes.USAGE_ERROR
    except CatalogUnavailable as e:
        print(f"mdbvm: {e}", file=sys.stderr)
        return ExitCodes.CATALOG_UNAVAILABLE
    except NoMatchingRelease as e:
        print(f"mdbvm: {e}", file=sys.stderr)
        return ExitCodes.NOT_FOUND
    except ArtifactNotFound as e:
        print(f"mdbvm: {e}", file=sys.stderr)
        print(BUILD_FROM_SOURCE_HINT, file=sys.stderr)
        return ExitCodes.NOT_FOUND


if __name__ == "__main__":
    sys.exit(main())
