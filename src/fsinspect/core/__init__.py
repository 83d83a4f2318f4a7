"""
Core components for fsinspect.

This module contains the concurrent scanning, sizing and hashing engine.
"""

from .pipeline import (
    DirectoryScanner,
    FileMetadata,
    HashComputer,
    SizeComputer,
    UpdateThrottle,
)

__all__ = [
    "DirectoryScanner",
    "FileMetadata",
    "HashComputer",
    "SizeComputer",
    "UpdateThrottle",
]
