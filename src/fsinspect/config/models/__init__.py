"""Configuration domain models."""

from __future__ import annotations

from .app_settings import LoggingSettings
from .scan_settings import ScanConfiguration, ScanSettings
from .settings import Settings

__all__ = [
    "LoggingSettings",
    "ScanConfiguration",
    "ScanSettings",
    "Settings",
]
