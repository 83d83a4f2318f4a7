"""Settings loader and singleton manager.

This module handles:
- Configuration file loading from TOML
- Thread-safe singleton pattern for the Settings instance
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

import toml
from pydantic import ValidationError

from fsinspect.config.models.settings import Settings
from fsinspect.shared.constants import FileSystem
from fsinspect.shared.errors import (
    ApplicationError,
    ErrorCode,
    ErrorContext,
    create_config_error,
)

logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Candidate configuration files, in lookup order."""
    return [
        Path(FileSystem.CONFIG_DIRECTORY) / FileSystem.CONFIG_FILE_NAME,
        Path(FileSystem.CONFIG_FILE_NAME),
        Path.home() / FileSystem.HOME_DIR / FileSystem.HOME_CONFIG_FILE_NAME,
    ]


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML configuration file or the environment.

    Args:
        config_path: Optional path to a TOML file. If None, the default
            locations are tried before falling back to environment variables.

    Returns:
        Settings instance loaded from the first available source

    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        ApplicationError: If the configuration content is invalid
    """
    try:
        if config_path:
            return Settings.from_toml_file(config_path)

        for candidate in default_config_paths():
            if candidate.exists():
                logger.debug("Loading configuration from %s", candidate)
                return Settings.from_toml_file(candidate)

        return Settings()
    except toml.TomlDecodeError as e:
        raise create_config_error(
            f"Configuration file is not valid TOML: {e}",
            config_key=str(config_path or ""),
            operation="load_settings",
            original_error=e,
        ) from e
    except ValidationError as e:
        raise ApplicationError(
            code=ErrorCode.INVALID_CONFIG,
            message=f"Invalid configuration: {e.error_count()} validation error(s)",
            context=ErrorContext(
                operation="load_settings",
                additional_data={"config_path": str(config_path or "")},
            ),
            original_error=e,
        ) from e


class SettingsLoader:
    """Thread-safe singleton manager for Settings.

    Uses double-checked locking to keep the hot path lock-free.
    """

    def __init__(self) -> None:
        self._instance: Settings | None = None
        self._lock = threading.RLock()

    def get_config(self) -> Settings:
        """Get the global settings instance, loading it if necessary."""
        if self._instance is None:
            with self._lock:
                if self._instance is None:
                    self._instance = load_settings()

        return self._instance

    def reload_config(self, config_path: str | Path | None = None) -> Settings:
        """Reload the global settings instance."""
        with self._lock:
            self._instance = load_settings(config_path)

        return self._instance


_loader = SettingsLoader()


def get_config() -> Settings:
    """Get the global settings instance (thread-safe)."""
    return _loader.get_config()


def reload_config(config_path: str | Path | None = None) -> Settings:
    """Reload the global settings instance from configuration files."""
    return _loader.reload_config(config_path)


__all__ = [
    "SettingsLoader",
    "default_config_paths",
    "get_config",
    "load_settings",
    "reload_config",
]
