"""Logging configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from fsinspect.shared.constants import LogConfig


class LoggingSettings(BaseModel):
    """Logging configuration.

    Controls the level and outputs set up by
    ``fsinspect.shared.logging.setup_structured_logger``.
    """

    level: str = Field(default=LogConfig.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    use_rich_console: bool = Field(
        default=True,
        description="Use Rich console output instead of JSON lines",
    )


__all__ = [
    "LoggingSettings",
]
