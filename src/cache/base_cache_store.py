# src/cache/base_cache_store.py — v2
"""Abstract cache store interface.

The local filesystem store implements it; a remote backend supplied by the
caller only has to implement the same two coroutines.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence


class BaseCacheStore(ABC):
    """Unified interface for cache storage backends."""

    @abstractmethod
    async def save(self, paths: Sequence[str], key: str) -> object:
        """Persist a snapshot of ``paths`` under ``key``.

        Returns a backend-specific handle for the stored entry.
        """

    @abstractmethod
    async def restore(
        self,
        paths: Sequence[str],
        primary_key: str,
        restore_keys: Sequence[str] | None = None,
        lookup_only: bool = False,
    ) -> str | None:
        """Restore the best entry for ``primary_key``.

        Returns the matched key, or None on a miss.
        """
