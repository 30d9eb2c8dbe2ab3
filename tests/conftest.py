# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides a temp cache directory, a temp workspace set as cwd with a small
tree of files, and an archiver double that never shells out.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from artifactcache.logging.context import clear_context


# === FIXTURES: Temp dirs ===


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Cache base directory. Not created: stores create it lazily."""
    return tmp_path / "cache"


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory holding a file and a nested directory."""
    ws = tmp_path / "workspace"
    (ws / "deps" / "pkg").mkdir(parents=True)
    (ws / "deps" / "pkg" / "index.js").write_text("module.exports = 1;\n")
    (ws / "deps" / "pkg" / "data.bin").write_bytes(bytes(range(256)))
    (ws / "lockfile.txt").write_text("pkg==1.0.0\n")
    monkeypatch.chdir(ws)
    return ws


# === FIXTURES: Archiver double ===


@pytest.fixture
def fake_archiver() -> AsyncMock:
    """TarArchiver double: compress writes a placeholder file, extract does nothing."""

    async def _compress(paths, destination, working_directory):
        Path(destination).write_bytes(b"fake-archive")

    archiver = AsyncMock()
    archiver.compress = AsyncMock(side_effect=_compress)
    archiver.extract = AsyncMock(return_value=None)
    return archiver


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
