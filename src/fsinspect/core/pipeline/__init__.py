"""Pipeline components for fsinspect.

- DirectoryScanner: parallel multi-root scan with a caller-supplied transform
- SizeComputer: exact chunked sums and sampled size estimates
- HashComputer: semaphore-gated content hashing and duplicate grouping
- UpdateThrottle: batched, rate-limited observer delivery

Recommended imports:
    from fsinspect.core.pipeline import DirectoryScanner, SizeComputer
    from fsinspect.core.pipeline.utils import CancelToken, ProgressTracker
"""

from fsinspect.core.pipeline.directory_scanner import DirectoryScanner, scan_directories
from fsinspect.core.pipeline.hash_computer import (
    HashComputer,
    find_duplicates,
    group_duplicates,
)
from fsinspect.core.pipeline.size_computer import SizeComputer, partition_paths
from fsinspect.core.pipeline.throttle import UpdateThrottle
from fsinspect.core.pipeline.walker import FileMetadata, FileWalk, iter_files

__all__ = [
    "DirectoryScanner",
    "FileMetadata",
    "FileWalk",
    "HashComputer",
    "SizeComputer",
    "UpdateThrottle",
    "find_duplicates",
    "group_duplicates",
    "iter_files",
    "partition_paths",
    "scan_directories",
]
