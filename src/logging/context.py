# src/logging/context.py — v2
"""Contextual logging support: attach the current cache operation and key to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per store call, cleared when it returns.
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_cache_key: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "cache_key", default=None
)


@dataclass(frozen=True)
class LogContext:
    """The cache operation and key in effect when a record was emitted."""

    operation: str | None = None
    cache_key: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(operation=_operation.get(), cache_key=_cache_key.get())


def set_cache_context(operation: str, cache_key: str) -> None:
    """Set the operation ("save", "restore", "lookup") and key being processed."""
    _operation.set(operation)
    _cache_key.set(cache_key)


def clear_context() -> None:
    """Reset all context variables."""
    _operation.set(None)
    _cache_key.set(None)
