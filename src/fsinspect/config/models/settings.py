"""fsinspect Settings Configuration Model.

Main Settings class that consolidates all configuration domains.
"""

from __future__ import annotations

from pathlib import Path

import toml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from fsinspect.config.models.app_settings import LoggingSettings
from fsinspect.config.models.scan_settings import ScanSettings


class Settings(BaseSettings):
    """Settings facade providing unified configuration access.

    Environment variables override defaults, e.g.
    ``FSINSPECT_SCAN__MAX_CONCURRENCY=4``.
    """

    model_config = SettingsConfigDict(
        env_prefix="FSINSPECT_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    scan: ScanSettings = Field(default_factory=ScanSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from TOML file with environment variable overrides."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = self.model_dump(exclude_none=True, exclude_unset=False)

        with open(file_path, "w", encoding="utf-8") as f:
            toml.dump(config_dict, f)
