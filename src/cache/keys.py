# src/cache/keys.py — v1
"""Cache key normalization and entry filename helpers.

A key becomes a storage identifier by replacing every character outside
``[A-Za-z0-9_-]`` with an underscore. The mapping is not injective: ``a/b``
and ``a:b`` address the same entry.
"""

from __future__ import annotations

import re

ARCHIVE_EXTENSION = ".tar.gz"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def normalize_key(key: str) -> str:
    """Map a cache key to its storage identifier."""
    return _UNSAFE_CHARS.sub("_", key)


def archive_filename(key: str) -> str:
    """Return the entry filename for a cache key."""
    return f"{normalize_key(key)}{ARCHIVE_EXTENSION}"


def is_archive_filename(name: str) -> bool:
    """True for names that look like cache entries."""
    return name.endswith(ARCHIVE_EXTENSION) and not name.startswith(".")


def display_key_from_filename(name: str) -> str:
    """Best-effort key reconstruction from an entry filename.

    Strips the archive extension and turns every underscore into a hyphen.
    Characters other than hyphen that were normalized away cannot be
    recovered, so the result may differ from the key used at save time.
    """
    if name.endswith(ARCHIVE_EXTENSION):
        name = name[: -len(ARCHIVE_EXTENSION)]
    return name.replace("_", "-")
