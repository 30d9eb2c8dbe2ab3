# src/cache/models.py — v2
"""Cache domain models: CacheLookupResult, SaveResult."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class CacheLookupResult(BaseModel):
    """Outcome of resolving a primary key and its restore keys."""

    hit_level: Literal["exact", "prefix"] | None = None
    matched_key: str | None = None
    archive_path: Path | None = None
    restore_key: str | None = None

    @property
    def is_hit(self) -> bool:
        return self.hit_level is not None


class SaveResult(BaseModel):
    """A cache entry written by a save."""

    key: str
    storage_id: str
    archive_path: Path
    size_bytes: int

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)
