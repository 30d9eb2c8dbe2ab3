"""Cache store, key normalization and archive engine."""

from artifactcache.cache.errors import (
    ArchiveCreationError,
    ArchiveExtractionError,
    CacheError,
    StorageAccessError,
)
from artifactcache.cache.keys import normalize_key
from artifactcache.cache.local_store import LocalCacheStore

__all__ = [
    "ArchiveCreationError",
    "ArchiveExtractionError",
    "CacheError",
    "LocalCacheStore",
    "StorageAccessError",
    "normalize_key",
]
