# src/cache/errors.py — v1
"""Cache error taxonomy.

Archive tool failures and filesystem access failures are raised to the
caller untouched; a missing cache directory or a missing entry is a plain
miss and never an error.
"""

from __future__ import annotations

from pathlib import Path


class CacheError(Exception):
    """Base class for all cache failures."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.path = Path(path) if path is not None else None


class ArchiveError(CacheError):
    """The archive tool could not be run or exited non-zero."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        path: Path | str | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message, key=key, path=path)
        self.returncode = returncode
        self.stderr = stderr


class ArchiveCreationError(ArchiveError):
    """Compressing paths into a cache entry failed."""


class ArchiveExtractionError(ArchiveError):
    """Extracting a cache entry into the working directory failed."""


class StorageAccessError(CacheError):
    """Creating, listing or inspecting the cache directory failed."""
