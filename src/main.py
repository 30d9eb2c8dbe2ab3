# src/main.py — v2
"""CLI entry point: save, restore, lookup commands.

Usage:
    artifactcache save --key <key> <path>...
    artifactcache restore --key <key> [--restore-key <prefix>]... <path>...
    artifactcache lookup --key <key> [--restore-key <prefix>]... <path>...

The cache directory comes from --cache-dir or LOCAL_CACHE_PATH.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from artifactcache.cache.cache_factory import create_cache_store
from artifactcache.cache.errors import CacheError
from artifactcache.cache.local_store import LocalCacheStore
from artifactcache.config.settings import ConfigurationError, Settings, load_settings
from artifactcache.logging.logger import setup_logging
from artifactcache.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    if not settings.local_cache_enabled:
        logger.error("No cache directory: pass --cache-dir or set LOCAL_CACHE_PATH")
        return 2

    store = create_cache_store(settings)

    try:
        return asyncio.run(args.func(store, args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="artifactcache",
        description=f"artifactcache v{__version__}: Key-addressed local artifact cache",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--cache-dir", default=None,
        help="Cache directory (default: LOCAL_CACHE_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- save ---
    p_save = subparsers.add_parser("save", help="Archive paths under a key")
    p_save.add_argument("--key", required=True, help="Cache key")
    p_save.add_argument("paths", nargs="+", help="Files or directories to cache")
    p_save.set_defaults(func=_cmd_save)

    # --- restore ---
    p_restore = subparsers.add_parser(
        "restore", help="Restore the best entry for a key",
    )
    _add_restore_arguments(p_restore)
    p_restore.add_argument(
        "--lookup-only", action="store_true",
        help="Only check whether an entry exists",
    )
    p_restore.set_defaults(func=_cmd_restore)

    # --- lookup ---
    p_lookup = subparsers.add_parser(
        "lookup", help="Check for an entry without extracting it",
    )
    _add_restore_arguments(p_lookup)
    p_lookup.set_defaults(func=_cmd_restore, lookup_only=True)

    return parser


def _add_restore_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--key", required=True, help="Primary cache key")
    p.add_argument(
        "--restore-key", dest="restore_keys", action="append", default=[],
        help="Fallback key prefix; repeat in priority order",
    )
    p.add_argument(
        "--fail-on-error", action="store_true",
        help="Exit non-zero when the cache cannot be read",
    )
    p.add_argument("paths", nargs="+", help="Files or directories covered by the key")


async def _cmd_save(store: LocalCacheStore, args: argparse.Namespace) -> int:
    """Save paths; a failure is reported but left to the caller to judge."""
    try:
        archive_path = await store.save(args.paths, args.key)
    except (CacheError, ValueError) as exc:
        logger.error("Failed to save cache %r: %s", args.key, exc)
        return 1
    print(archive_path)
    return 0


async def _cmd_restore(store: LocalCacheStore, args: argparse.Namespace) -> int:
    """Restore or look up; read failures count as a miss unless --fail-on-error."""
    try:
        matched = await store.restore(
            args.paths,
            args.key,
            restore_keys=args.restore_keys,
            lookup_only=args.lookup_only,
        )
    except CacheError as exc:
        if args.fail_on_error:
            logger.error("Failed to restore cache %r: %s", args.key, exc)
            return 1
        logger.warning("Failed to restore cache %r: %s", args.key, exc)
        matched = None

    _print_outputs(args.key, matched)
    return 0


def _print_outputs(primary_key: str, matched: str | None) -> None:
    """Print key=value lines in the style of CI step outputs."""
    print(f"cache-hit={'true' if matched == primary_key else 'false'}")
    print(f"cache-matched={'true' if matched is not None else 'false'}")
    print(f"matched-key={matched or ''}")


def _load_settings(args: argparse.Namespace) -> Settings:
    if args.cache_dir:
        return load_settings(local_cache_path=args.cache_dir)
    return load_settings()


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage; stdout is reserved for outputs."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        stream=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())
