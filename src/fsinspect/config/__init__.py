"""fsinspect Configuration Module

- Settings: Main configuration facade
- ScanConfiguration: immutable per-scan policy with named presets
- Loader functions: get_config, load_settings, reload_config
"""

from __future__ import annotations

from .loader import get_config, load_settings, reload_config
from .models import LoggingSettings, ScanConfiguration, ScanSettings, Settings

__all__ = [
    "LoggingSettings",
    "ScanConfiguration",
    "ScanSettings",
    "Settings",
    "get_config",
    "load_settings",
    "reload_config",
]
