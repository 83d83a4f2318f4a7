"""Scanning, sizing and hashing constants."""

from __future__ import annotations

from typing import ClassVar

BYTES_PER_KIB = 1024
BYTES_PER_MIB = BYTES_PER_KIB * 1024


class ScanDefaults:
    """Default scan policy values."""

    MAX_CONCURRENCY = 8
    NOTIFY_INTERVAL = 100
    MIN_FILE_SIZE = 0
    INCLUDE_HIDDEN = False

    # Junk scan preset: permissive, frequent updates
    JUNK_NOTIFY_INTERVAL = 50

    # Large file scan preset: 50MB floor, sensitive directories skipped
    LARGE_FILE_MIN_SIZE = 50 * BYTES_PER_MIB
    LARGE_FILE_EXCLUDED_PREFIXES: ClassVar[frozenset[str]] = frozenset(
        {"Library", "Applications", "Public", ".Trash"},
    )


class SizeDefaults:
    """Size computation defaults."""

    MAX_CHUNKS = 8
    MIN_CHUNK_SIZE = 100
    SAMPLE_RATE = 0.1


class HashDefaults:
    """Content hashing defaults."""

    ALGORITHM = "md5"
    MAX_CONCURRENCY = 8
    READ_CHUNK_SIZE = BYTES_PER_MIB


class ThrottleDefaults:
    """Update throttle defaults."""

    MIN_INTERVAL_SECONDS = 0.1
    DELIVERY_THREAD_PREFIX = "fsinspect-delivery"
