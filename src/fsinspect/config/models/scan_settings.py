"""Scan policy and scan-engine configuration models.

ScanConfiguration is the immutable per-scan policy handed to the
DirectoryScanner. ScanSettings holds the user-configurable defaults loaded
from TOML or the environment and builds ScanConfiguration instances.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fsinspect.shared.constants import (
    HashDefaults,
    ScanDefaults,
    SizeDefaults,
    ThrottleDefaults,
)


def _normalize_prefixes(prefixes: frozenset[str]) -> frozenset[str]:
    """Strip leading separators and reject empty prefixes."""
    normalized: set[str] = set()
    for prefix in prefixes:
        cleaned = prefix.replace("\\", "/").lstrip("/")
        if not cleaned:
            msg = f"Excluded prefix must not be empty: {prefix!r}"
            raise ValueError(msg)
        normalized.add(cleaned)
    return frozenset(normalized)


class ScanConfiguration(BaseModel):
    """Immutable scan policy.

    Attributes:
        max_concurrency: Upper bound on concurrently walked roots.
        notify_interval: Processed files between observer notifications.
        min_file_size: Files smaller than this (bytes) are discarded.
        include_hidden: Visit dot-prefixed / hidden entries.
        excluded_prefixes: Root-relative path prefixes whose subtrees are pruned.
    """

    model_config = ConfigDict(frozen=True)

    max_concurrency: int = Field(
        default=ScanDefaults.MAX_CONCURRENCY,
        gt=0,
        description="Maximum number of roots walked concurrently",
    )
    notify_interval: int = Field(
        default=ScanDefaults.NOTIFY_INTERVAL,
        gt=0,
        description="Number of processed files between progress notifications",
    )
    min_file_size: int = Field(
        default=ScanDefaults.MIN_FILE_SIZE,
        ge=0,
        description="Minimum file size in bytes to keep",
    )
    include_hidden: bool = Field(
        default=ScanDefaults.INCLUDE_HIDDEN,
        description="Include hidden files and directories",
    )
    excluded_prefixes: frozenset[str] = Field(
        default_factory=frozenset,
        description="Root-relative path prefixes to prune",
    )

    @field_validator("excluded_prefixes")
    @classmethod
    def validate_prefixes(cls, v: frozenset[str]) -> frozenset[str]:
        """Normalize prefixes to POSIX separators without a leading slash."""
        return _normalize_prefixes(v)

    @classmethod
    def default(cls) -> ScanConfiguration:
        """Balanced policy: hidden entries skipped, nothing excluded."""
        return cls()

    @classmethod
    def junk_scan(cls) -> ScanConfiguration:
        """Permissive policy with frequent updates."""
        return cls(
            max_concurrency=ScanDefaults.MAX_CONCURRENCY,
            notify_interval=ScanDefaults.JUNK_NOTIFY_INTERVAL,
            min_file_size=0,
            include_hidden=True,
            excluded_prefixes=frozenset(),
        )

    @classmethod
    def large_file_scan(cls) -> ScanConfiguration:
        """50MB floor, sensitive system directories pruned."""
        return cls(
            max_concurrency=ScanDefaults.MAX_CONCURRENCY,
            notify_interval=ScanDefaults.NOTIFY_INTERVAL,
            min_file_size=ScanDefaults.LARGE_FILE_MIN_SIZE,
            include_hidden=False,
            excluded_prefixes=ScanDefaults.LARGE_FILE_EXCLUDED_PREFIXES,
        )


class ScanSettings(BaseModel):
    """User-configurable defaults for the scanning engine."""

    max_concurrency: int = Field(
        default=ScanDefaults.MAX_CONCURRENCY,
        gt=0,
        description="Default maximum concurrency for scans and hashing",
    )
    notify_interval: int = Field(
        default=ScanDefaults.NOTIFY_INTERVAL,
        gt=0,
        description="Default processed files between progress notifications",
    )
    min_file_size: int = Field(
        default=ScanDefaults.MIN_FILE_SIZE,
        ge=0,
        description="Default minimum file size in bytes",
    )
    include_hidden: bool = Field(
        default=ScanDefaults.INCLUDE_HIDDEN,
        description="Include hidden entries by default",
    )
    excluded_prefixes: list[str] = Field(
        default_factory=list,
        description="Default root-relative prefixes to prune",
    )
    throttle_interval: float = Field(
        default=ThrottleDefaults.MIN_INTERVAL_SECONDS,
        ge=0,
        description="Minimum seconds between batched progress deliveries",
    )
    sample_rate: float = Field(
        default=SizeDefaults.SAMPLE_RATE,
        gt=0,
        le=1,
        description="Default sampling probability for size estimates",
    )
    size_workers: int = Field(
        default=SizeDefaults.MAX_CHUNKS,
        gt=0,
        description="Maximum parallel chunks for exact size computation",
    )
    hash_algorithm: str = Field(
        default=HashDefaults.ALGORITHM,
        description="hashlib algorithm name used for content digests",
    )
    hash_read_chunk_size: int = Field(
        default=HashDefaults.READ_CHUNK_SIZE,
        gt=0,
        description="Bytes read per chunk while hashing",
    )

    def to_configuration(self) -> ScanConfiguration:
        """Build the immutable scan policy from these settings."""
        return ScanConfiguration(
            max_concurrency=self.max_concurrency,
            notify_interval=self.notify_interval,
            min_file_size=self.min_file_size,
            include_hidden=self.include_hidden,
            excluded_prefixes=frozenset(self.excluded_prefixes),
        )


__all__ = [
    "ScanConfiguration",
    "ScanSettings",
]
