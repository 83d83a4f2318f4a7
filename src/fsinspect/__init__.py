"""
fsinspect - Concurrent filesystem inspection

Parallel directory scanning with pluggable per-file transforms, exact and
sampled size computation, bounded-concurrency hashing and throttled
progress delivery.
"""

__version__ = "0.1.0"

from .config import ScanConfiguration
from .core import (
    DirectoryScanner,
    FileMetadata,
    HashComputer,
    SizeComputer,
    UpdateThrottle,
)
from .core.pipeline.utils import CancelToken

__all__ = [
    "CancelToken",
    "DirectoryScanner",
    "FileMetadata",
    "HashComputer",
    "ScanConfiguration",
    "SizeComputer",
    "UpdateThrottle",
]
