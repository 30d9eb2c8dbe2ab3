# src/logging/handlers.py — v3
"""Size-based log file rotation for the artifactcache CLI.

A CI job may run save and restore many times against the same LOG_FILE, so
the file handler rotates by size instead of growing without bound.
"""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNITS = {"": 1, "B": 1, "K": 1024, "M": 1024**2, "G": 1024**3}

# "4096", "512K", "512KB", "10 MB", "1gb"
_SIZE_RE = re.compile(r"(?P<value>\d+)\s*(?P<unit>[KMG]?)B?", re.IGNORECASE)

FILE_HANDLER_NAME = "artifactcache-file"


def parse_size(size_str: str) -> int:
    """Convert a LOG_ROTATION value to a byte count.

    Accepts plain bytes or a binary K/M/G multiplier, with or without a
    trailing ``B``. Zero is rejected: RotatingFileHandler would never rotate.
    """
    match = _SIZE_RE.fullmatch(size_str.strip())
    if match is None:
        raise ValueError(
            f"Invalid size format: {size_str!r}. Use bytes or e.g. '512KB', '10MB'."
        )
    size = int(match["value"]) * _UNITS[match["unit"].upper()]
    if size == 0:
        raise ValueError(f"Invalid size {size_str!r}: rotation size must be positive")
    return size


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 5,
) -> RotatingFileHandler:
    """Return a handler that appends to ``log_file`` and rolls it over by size.

    Missing parent directories are created. The file itself is opened on the
    first emitted record, so a run that logs nothing leaves no empty file.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        path,
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
        delay=True,
    )
    handler.set_name(FILE_HANDLER_NAME)
    return handler
