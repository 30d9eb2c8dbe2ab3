# tests/unit/logging/test_handlers.py — v3
"""Tests for logging/handlers.py: LOG_ROTATION parsing and the file handler."""

from __future__ import annotations

import logging

import pytest

from artifactcache.logging.handlers import (
    FILE_HANDLER_NAME,
    create_rotating_handler,
    parse_size,
)


class TestParseSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("10MB", 10 * 1024**2),
            ("512KB", 512 * 1024),
            ("512K", 512 * 1024),
            ("1gb", 1024**3),
            ("2 M", 2 * 1024**2),
            ("4096", 4096),
            ("4096B", 4096),
            (" 10MB ", 10 * 1024**2),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["", "lots", "10bytes", "1.5MB", "-1MB", "10TB"])
    def test_invalid_format(self, value):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size(value)

    def test_zero_rejected(self):
        with pytest.raises(ValueError, match="must be positive"):
            parse_size("0MB")


class TestCreateRotatingHandler:
    def test_limits(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "cache.log", rotation="1MB", retention=2)
        try:
            assert handler.maxBytes == 1024**2
            assert handler.backupCount == 2
            assert handler.get_name() == FILE_HANDLER_NAME
        finally:
            handler.close()

    def test_creates_parent_dirs_but_not_file(self, tmp_path):
        log_file = tmp_path / "logs" / "deep" / "cache.log"
        handler = create_rotating_handler(str(log_file))
        try:
            assert log_file.parent.is_dir()
            assert not log_file.exists()
        finally:
            handler.close()

    def test_file_written_on_first_record(self, tmp_path):
        log_file = tmp_path / "cache.log"
        handler = create_rotating_handler(log_file)
        handler.setFormatter(logging.Formatter("%(message)s"))
        try:
            handler.emit(logging.makeLogRecord({"msg": "Cache saved"}))
        finally:
            handler.close()
        assert log_file.read_text(encoding="utf-8") == "Cache saved\n"

    def test_rotates_past_limit(self, tmp_path):
        log_file = tmp_path / "cache.log"
        handler = create_rotating_handler(log_file, rotation="64", retention=1)
        handler.setFormatter(logging.Formatter("%(message)s"))
        try:
            for _ in range(4):
                handler.emit(logging.makeLogRecord({"msg": "x" * 40}))
        finally:
            handler.close()
        assert (tmp_path / "cache.log.1").exists()
        assert not (tmp_path / "cache.log.2").exists()
