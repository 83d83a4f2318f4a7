"""
fsinspect Constants Module

Centralized constants for the scanning engine, its configuration and CLI.
"""

from .cli import CLICommands, CLIDefaults, CLIFormatting, CLIHelp
from .logging import FileSystem, LogConfig
from .scan import (
    BYTES_PER_KIB,
    BYTES_PER_MIB,
    HashDefaults,
    ScanDefaults,
    SizeDefaults,
    ThrottleDefaults,
)

__all__ = [
    "BYTES_PER_KIB",
    "BYTES_PER_MIB",
    "CLICommands",
    "CLIDefaults",
    "CLIFormatting",
    "CLIHelp",
    "FileSystem",
    "HashDefaults",
    "LogConfig",
    "ScanDefaults",
    "SizeDefaults",
    "ThrottleDefaults",
]
