"""Logging related constants."""

from __future__ import annotations


class LogConfig:
    """Logging defaults."""

    ROOT_LOGGER = "fsinspect"
    DEFAULT_LEVEL = "INFO"
    TIME_FORMAT = "[%H:%M:%S]"


class FileSystem:
    """Configuration file locations."""

    HOME_DIR = ".fsinspect"
    CONFIG_DIRECTORY = "config"
    CONFIG_FILE_NAME = "fsinspect.toml"
    HOME_CONFIG_FILE_NAME = "config.toml"
