# tests/unit/cache/test_models.py — v2
"""Tests for cache/models.py: lookup and save result models."""

from __future__ import annotations

from pathlib import Path

from artifactcache.cache.models import CacheLookupResult, SaveResult


class TestCacheLookupResult:
    def test_default_is_miss(self):
        result = CacheLookupResult()
        assert result.is_hit is False
        assert result.matched_key is None
        assert result.archive_path is None

    def test_exact_hit(self):
        result = CacheLookupResult(
            hit_level="exact",
            matched_key="linux-deps-abc",
            archive_path=Path("/cache/linux-deps-abc.tar.gz"),
        )
        assert result.is_hit is True
        assert result.restore_key is None

    def test_prefix_hit_records_restore_key(self):
        result = CacheLookupResult(
            hit_level="prefix", matched_key="linux-deps-abc", restore_key="linux-deps-"
        )
        assert result.is_hit is True
        assert result.restore_key == "linux-deps-"


class TestSaveResult:
    def test_size_mb(self):
        result = SaveResult(
            key="k",
            storage_id="k",
            archive_path=Path("/cache/k.tar.gz"),
            size_bytes=3 * 1024 * 1024,
        )
        assert result.size_mb == 3.0
