# src/api/facade.py — v2
"""Public API facade: restore and save with local/remote routing.

Usage:
    from artifactcache.api.facade import restore_cache, save_cache
    matched = await restore_cache(["node_modules"], key, ["linux-deps-"])
    if matched is None:
        ...  # do the expensive work
        await save_cache(["node_modules"], key)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from artifactcache.cache.cache_factory import create_cache_store
from artifactcache.cache.local_store import LocalCacheStore
from artifactcache.config.settings import Settings

if TYPE_CHECKING:
    from artifactcache.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

# Local entries are addressed by key, so there is no per-entry id to return.
LOCAL_CACHE_ID = 0


async def restore_cache(
    paths: Sequence[str],
    primary_key: str,
    restore_keys: Sequence[str] | None = None,
    lookup_only: bool = False,
    settings: Settings | None = None,
    remote_store: BaseCacheStore | None = None,
) -> str | None:
    """Restore a cache entry from the configured backend.

    Args:
        paths: Paths covered by the cache entry.
        primary_key: Exact key to look for first.
        restore_keys: Ordered fallback prefixes.
        lookup_only: Only report whether an entry exists.
        settings: Global settings. Loaded from the environment if None.
        remote_store: Backend used when LOCAL_CACHE_PATH is empty.

    Returns:
        The matched key, or None on a miss.
    """
    store = _select_store(settings, remote_store)
    return await store.restore(
        paths, primary_key, restore_keys=restore_keys, lookup_only=lookup_only
    )


async def save_cache(
    paths: Sequence[str],
    key: str,
    settings: Settings | None = None,
    remote_store: BaseCacheStore | None = None,
) -> int:
    """Save ``paths`` under ``key`` to the configured backend.

    Returns:
        The remote backend's cache id, or LOCAL_CACHE_ID for local storage.
    """
    store = _select_store(settings, remote_store)
    result = await store.save(paths, key)
    if isinstance(store, LocalCacheStore):
        return LOCAL_CACHE_ID
    return int(result)  # type: ignore[call-overload]


def _select_store(
    settings: Settings | None, remote_store: BaseCacheStore | None
) -> BaseCacheStore:
    store = create_cache_store(settings, remote_store=remote_store)
    if isinstance(store, LocalCacheStore):
        logger.info("Using local filesystem cache")
    return store
