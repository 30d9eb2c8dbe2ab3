# src/config/settings.py — v2
"""Typed configuration loaded from the environment and .env via pydantic-settings.

LOCAL_CACHE_PATH selects the local filesystem store. When it is empty the
facade routes to a caller-supplied remote store instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from artifactcache.logging.handlers import parse_size


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Local cache ===
    local_cache_path: str = ""
    cache_working_directory: Path | None = None
    cache_tar_command: str = "tar"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 5

    # --- Validators ---

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:  # noqa: N805
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if not self.cache_tar_command.strip():
            errors.append("CACHE_TAR_COMMAND must not be empty")

        try:
            parse_size(self.log_rotation)
        except ValueError as exc:
            errors.append(f"LOG_ROTATION: {exc}")

        if self.log_retention < 0:
            errors.append("LOG_RETENTION must be >= 0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def local_cache_enabled(self) -> bool:
        """True when a local cache directory is configured."""
        return bool(self.local_cache_path.strip())


def load_settings(**overrides: object) -> Settings:
    """Load settings from the environment and .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
