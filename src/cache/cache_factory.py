# src/cache/cache_factory.py — v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from artifactcache.cache.archive import TarArchiver
from artifactcache.cache.base_cache_store import BaseCacheStore
from artifactcache.cache.local_store import LocalCacheStore
from artifactcache.config.settings import ConfigurationError, Settings


def create_cache_store(
    settings: Settings | None = None,
    remote_store: BaseCacheStore | None = None,
) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Loaded from the environment if None.
        remote_store: Backend used when no local cache path is configured.

    Returns:
        LocalCacheStore when LOCAL_CACHE_PATH is set, else ``remote_store``.

    Raises:
        ConfigurationError: Neither a local path nor a remote store is available.
    """
    settings = settings or Settings()

    if settings.local_cache_enabled:
        return LocalCacheStore(
            base_dir=settings.local_cache_path,
            archiver=TarArchiver(settings.cache_tar_command),
            working_directory=settings.cache_working_directory,
        )

    if remote_store is None:
        raise ConfigurationError(
            "LOCAL_CACHE_PATH is not set and no remote cache store was provided"
        )
    return remote_store
