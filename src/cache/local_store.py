# src/cache/local_store.py — v1
"""Local filesystem cache store.

Each entry is one tarball ``<base_dir>/<normalized key>.tar.gz``. Restore
tries the primary key exactly, then each restore key as a filename prefix,
in the order given.

Prefix matching scans entries in directory-listing order. When several
entries share a prefix the one returned depends on the filesystem, not on
age or name.
"""

from __future__ import annotations

import errno
import logging
import os
import uuid
from pathlib import Path
from typing import Sequence

from artifactcache.cache.archive import TarArchiver
from artifactcache.cache.base_cache_store import BaseCacheStore
from artifactcache.cache.errors import (
    ArchiveCreationError,
    ArchiveExtractionError,
    StorageAccessError,
)
from artifactcache.cache.keys import (
    archive_filename,
    display_key_from_filename,
    is_archive_filename,
    normalize_key,
)
from artifactcache.cache.models import CacheLookupResult, SaveResult
from artifactcache.logging.context import clear_context, set_cache_context

logger = logging.getLogger(__name__)


class LocalCacheStore(BaseCacheStore):
    """Cache store backed by a single local directory."""

    def __init__(
        self,
        base_dir: Path | str,
        archiver: TarArchiver | None = None,
        working_directory: Path | str | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_dir: Directory holding the cache entries. Created on first save.
            archiver: Archive engine. Defaults to TarArchiver().
            working_directory: Directory paths are archived from and
                extracted into. None means the process cwd at call time.
        """
        self._root = Path(base_dir).expanduser()
        self._archiver = archiver or TarArchiver()
        self._cwd = Path(working_directory) if working_directory else None

    @property
    def base_dir(self) -> Path:
        return self._root

    def entry_path(self, key: str) -> Path:
        """Return the entry file for a cache key."""
        return self._root / archive_filename(key)

    # --- Save ---

    async def save(self, paths: Sequence[str], key: str) -> Path:
        """Archive ``paths`` under ``key`` and return the entry path.

        Raises:
            ValueError: ``paths`` or ``key`` is empty.
            StorageAccessError: The cache directory cannot be created.
            ArchiveCreationError: tar failed; no entry is left behind.
        """
        result = await self.save_entry(paths, key)
        return result.archive_path

    async def save_entry(self, paths: Sequence[str], key: str) -> SaveResult:
        """Same as save() but returns the full SaveResult."""
        if not paths:
            raise ValueError("At least one path is required to save a cache entry")
        if not key:
            raise ValueError("Cache key must not be empty")

        set_cache_context("save", key)
        try:
            logger.info("Saving cache to local path: %s", self._root)
            self._ensure_root(key)

            storage_id = normalize_key(key)
            destination = self.entry_path(key)
            logger.info("Creating cache archive: %s", destination)

            await self._compress_atomically(paths, key, destination)

            size_bytes = self._stat_size(destination, key)
            result = SaveResult(
                key=key,
                storage_id=storage_id,
                archive_path=destination,
                size_bytes=size_bytes,
            )
            logger.info("Cache saved successfully. Size: %.2f MB", result.size_mb)
            return result
        finally:
            clear_context()

    async def _compress_atomically(
        self, paths: Sequence[str], key: str, destination: Path
    ) -> None:
        """Write to a hidden temp file, then rename it onto ``destination``."""
        # Fixed-length name: the entry name may already be near NAME_MAX.
        tmp_path = self._root / f".tmp-{uuid.uuid4().hex[:8]}.part"
        try:
            await self._archiver.compress(paths, tmp_path, self._working_directory())
        except ArchiveCreationError as exc:
            exc.key = key
            exc.path = destination
            self._discard(tmp_path)
            raise
        except BaseException:
            self._discard(tmp_path)
            raise

        try:
            os.replace(tmp_path, destination)
        except OSError as exc:
            self._discard(tmp_path)
            raise StorageAccessError(
                f"Cannot move cache archive into place at {destination}: {exc}",
                key=key,
                path=destination,
            ) from exc

    # --- Restore ---

    async def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
        lookup_only: bool = False,
    ) -> str | None:
        """Restore the best-matching entry into the working directory.

        Args:
            paths: Paths the caller expects back. Informational only.
            primary_key: Key tried for an exact match.
            restore_keys: Fallback key prefixes, highest priority first.
            lookup_only: Report the match without extracting anything.

        Returns:
            ``primary_key`` on an exact hit, the reconstructed key of the
            matched entry on a prefix hit, None on a miss.

        Raises:
            ArchiveExtractionError: The chosen entry failed to extract.
                Lower-priority keys are not tried.
            StorageAccessError: The cache directory or an entry cannot be
                inspected or listed. An overlong key is a miss, not an error.
        """
        set_cache_context("restore", primary_key)
        try:
            logger.info("Restoring cache from local path: %s", self._root)
            logger.debug("Requested paths: %s", ", ".join(paths))

            result = self._resolve(primary_key, restore_keys)
            if not result.is_hit:
                return None

            if lookup_only:
                logger.info(
                    "Cache found and can be restored from key: %s", result.matched_key
                )
            else:
                await self._extract(
                    result.archive_path, result.matched_key or primary_key
                )
            return result.matched_key
        finally:
            clear_context()

    async def lookup(
        self,
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
    ) -> CacheLookupResult:
        """Resolve keys to an entry without touching the working directory."""
        set_cache_context("lookup", primary_key)
        try:
            return self._resolve(primary_key, restore_keys)
        finally:
            clear_context()

    def _resolve(
        self, primary_key: str, restore_keys: Sequence[str] | None
    ) -> CacheLookupResult:
        if not self._exists(self._root, primary_key):
            logger.info("Local cache directory does not exist")
            return CacheLookupResult()

        primary_path = self.entry_path(primary_key)
        if self._exists(primary_path, primary_key):
            logger.info("Cache hit on primary key: %s", primary_key)
            return CacheLookupResult(
                hit_level="exact",
                matched_key=primary_key,
                archive_path=primary_path,
            )

        if restore_keys:
            logger.info(
                "No exact match found, trying restore keys with prefix matching"
            )
            candidates = self._list_entry_names(primary_key)
            for restore_key in restore_keys:
                prefix = normalize_key(restore_key)
                matched = next(
                    (name for name in candidates if name.startswith(prefix)), None
                )
                if matched is None:
                    continue
                matched_key = display_key_from_filename(matched)
                logger.info(
                    "Cache hit on restore key: %s (matched: %s)",
                    restore_key, matched_key,
                )
                return CacheLookupResult(
                    hit_level="prefix",
                    matched_key=matched_key,
                    archive_path=self._root / matched,
                    restore_key=restore_key,
                )

        logger.info("Cache not found in local storage")
        return CacheLookupResult()

    async def _extract(self, archive_path: Path, matched_key: str) -> None:
        logger.info("Extracting cache from: %s", archive_path)
        try:
            await self._archiver.extract(archive_path, self._working_directory())
        except ArchiveExtractionError as exc:
            exc.key = matched_key
            raise
        logger.info("Cache extracted successfully")

    # --- Filesystem helpers ---

    def _working_directory(self) -> Path:
        return self._cwd if self._cwd is not None else Path.cwd()

    def _ensure_root(self, key: str) -> None:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageAccessError(
                f"Cannot create cache directory {self._root}: {exc}",
                key=key,
                path=self._root,
            ) from exc

    def _exists(self, path: Path, key: str) -> bool:
        """Stat-based existence check that maps OS errors onto the cache taxonomy.

        A name longer than the filesystem allows cannot exist, so it is a miss.
        """
        try:
            path.stat()
        except (FileNotFoundError, NotADirectoryError):
            return False
        except OSError as exc:
            if exc.errno == errno.ENAMETOOLONG:
                return False
            raise StorageAccessError(
                f"Cannot inspect cache path {path}: {exc}", key=key, path=path
            ) from exc
        return True

    def _list_entry_names(self, key: str) -> list[str]:
        """Entry filenames in directory-listing order (unsorted)."""
        try:
            names = os.listdir(self._root)
        except OSError as exc:
            raise StorageAccessError(
                f"Cannot list cache directory {self._root}: {exc}",
                key=key,
                path=self._root,
            ) from exc
        return [name for name in names if is_archive_filename(name)]

    def _stat_size(self, path: Path, key: str) -> int:
        try:
            return path.stat().st_size
        except OSError as exc:
            raise StorageAccessError(
                f"Cannot stat cache archive {path}: {exc}", key=key, path=path
            ) from exc

    @staticmethod
    def _discard(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Failed to remove temporary archive %s: %s", path, exc)
