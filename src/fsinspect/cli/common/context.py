"""
CLI Context Management Module

Holds the global options parsed by the main callback in a ContextVar so
command handlers can read them without threading arguments through.
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from fsinspect.config.models.scan_settings import ScanConfiguration


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ScanPreset(str, Enum):
    """Named scan policies selectable from the command line."""

    DEFAULT = "default"
    JUNK = "junk"
    LARGE = "large"

    def base_configuration(self) -> ScanConfiguration:
        if self is ScanPreset.JUNK:
            return ScanConfiguration.junk_scan()
        if self is ScanPreset.LARGE:
            return ScanConfiguration.large_file_scan()
        return ScanConfiguration.default()


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        verbose: Verbosity level (0 = normal, 1+ = verbose)
        log_level: Explicit logging level, or None to use the configured one
        config_path: Configuration file given with --config
    """

    verbose: int = Field(
        default=0,
        ge=0,
        description="Verbosity level (0 = normal, 1+ = verbose)",
    )

    log_level: LogLevel | None = Field(
        default=None,
        description="Logging level",
    )

    config_path: Path | None = Field(
        default=None,
        description="Explicit configuration file",
    )

    def is_verbose(self) -> bool:
        """Check if verbose mode is enabled."""
        return self.verbose > 0

    def get_effective_log_level(self, configured: str) -> str:
        """
        Get the effective log level.

        Verbose forces DEBUG; otherwise an explicit --log-level wins over
        the configured level.
        """
        if self.is_verbose():
            return LogLevel.DEBUG.value
        if self.log_level is not None:
            return self.log_level.value
        return configured.upper()


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """
    Get the current CLI context.

    Raises:
        RuntimeError: If context has not been initialized
    """
    context = cli_context_var.get()
    if context is None:
        raise RuntimeError(
            "CLI context has not been initialized. "
            "Make sure to call the main callback before accessing context.",
        )
    return context


def set_cli_context(context: CliContext) -> None:
    """Set the current CLI context."""
    cli_context_var.set(context)


def clear_cli_context() -> None:
    """Clear the current CLI context."""
    cli_context_var.set(None)
