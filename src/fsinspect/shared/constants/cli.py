"""CLI related constants."""

from __future__ import annotations


class CLIDefaults:
    """CLI default values."""

    VERSION = "0.1.0"

    EXIT_SUCCESS = 0
    EXIT_ERROR = 1
    EXIT_INTERRUPTED = 130


class CLICommands:
    """CLI command names."""

    SCAN = "scan"
    SIZE = "size"
    HASH = "hash"
    DUPS = "dups"


class CLIHelp:
    """CLI help texts."""

    APP_NAME = "fsinspect"
    APP_DESCRIPTION = "Concurrent filesystem inspection: scan, size and hash directory trees."
    APP_STYLE = "rich"
    VERSION_TEXT = "fsinspect v{version}"

    SCAN_ROOTS_HELP = "Root directories to scan"
    SCAN_PRESET_HELP = "Scan policy preset (default, junk, large)"
    SCAN_MIN_SIZE_HELP = "Minimum file size in bytes (overrides the preset)"
    SCAN_INCLUDE_HIDDEN_HELP = "Include hidden files and directories"
    SCAN_EXCLUDE_HELP = "Relative path prefix to prune (repeatable)"

    SIZE_PATH_HELP = "File or directory to measure"
    SIZE_ESTIMATE_HELP = "Estimate by random sampling instead of an exact sum"
    SIZE_SAMPLE_RATE_HELP = "Sampling probability in (0, 1] used with --estimate"

    HASH_PATHS_HELP = "Files to hash"
    HASH_CONCURRENCY_HELP = "Maximum number of files hashed at once"

    DUPS_ROOTS_HELP = "Root directories to search for duplicate content"
    DUPS_MIN_SIZE_HELP = "Ignore files smaller than this many bytes"


class CLIFormatting:
    """Output formatting values."""

    TABLE_PATH_COLUMN = "Path"
    TABLE_SIZE_COLUMN = "Size"
    TABLE_DIGEST_COLUMN = "Digest"
    SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
