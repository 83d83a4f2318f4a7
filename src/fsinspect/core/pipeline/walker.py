"""Directory tree enumeration shared by the scanner and size computer.

Walks a root with ``os.scandir``, pruning hidden and excluded subtrees
before descending into them. Entries that cannot be read (permission
denied, removed mid-walk) are skipped without raising.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from fsinspect.core.pipeline.utils.cancellation import CancelToken, is_cancelled

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileMetadata:
    """Metadata handed to scan transforms alongside the file path."""

    size: int
    modified_time: datetime
    is_directory: bool = False

    @classmethod
    def from_stat(cls, st: os.stat_result) -> FileMetadata:
        return cls(
            size=st.st_size,
            modified_time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            is_directory=stat.S_ISDIR(st.st_mode),
        )


def is_hidden(entry: os.DirEntry[str]) -> bool:
    """Dot-prefixed names, plus the hidden attribute on Windows."""
    if entry.name.startswith("."):
        return True
    if os.name == "nt":
        try:
            attributes = getattr(entry.stat(follow_symlinks=False), "st_file_attributes", 0)
        except OSError:
            return False
        return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)
    return False


def is_excluded(relative_path: str, prefixes: frozenset[str], *, is_directory: bool) -> bool:
    """Check a root-relative POSIX path against the excluded prefixes.

    A directory also matches in its slash-terminated form, so a prefix such
    as ``cache/`` prunes the ``cache`` directory itself.
    """
    if not prefixes:
        return False
    candidates = (relative_path, f"{relative_path}/") if is_directory else (relative_path,)
    return any(candidate.startswith(prefix) for candidate in candidates for prefix in prefixes)


class FileWalk:
    """Iterable walk over every regular file below ``root``.

    Files of a directory are yielded before its subdirectories are
    entered; subdirectories are visited in enumeration order. Symbolic
    links are neither followed nor yielded.

    Args:
        root: Directory to walk. A missing or non-directory root yields nothing.
        include_hidden: Visit hidden files and descend into hidden directories.
        excluded_prefixes: Root-relative prefixes whose subtrees are pruned.
        cancel_token: Stops the walk between entries once cancelled.

    Attributes:
        interrupted: True once the walk stopped because the token was
            cancelled before every entry had been visited.
    """

    def __init__(
        self,
        root: str | Path,
        *,
        include_hidden: bool = False,
        excluded_prefixes: frozenset[str] = frozenset(),
        cancel_token: CancelToken | None = None,
    ) -> None:
        self.root = os.fspath(root)
        self.include_hidden = include_hidden
        self.excluded_prefixes = excluded_prefixes
        self.cancel_token = cancel_token
        self.interrupted = False

    def _stop_requested(self) -> bool:
        if is_cancelled(self.cancel_token):
            self.interrupted = True
        return self.interrupted

    def __iter__(self) -> Iterator[os.DirEntry[str]]:
        stack: list[tuple[str, str]] = [(self.root, "")]

        while stack:
            if self._stop_requested():
                return
            directory, relative_dir = stack.pop()

            try:
                with os.scandir(directory) as entries:
                    listing = list(entries)
            except OSError:
                logger.debug("Cannot enumerate directory: %s", directory, exc_info=True)
                continue

            subdirectories: list[tuple[str, str]] = []
            for entry in listing:
                if self._stop_requested():
                    return
                if not self.include_hidden and is_hidden(entry):
                    continue

                relative_path = f"{relative_dir}{entry.name}"
                try:
                    if entry.is_dir(follow_symlinks=False):
                        if is_excluded(relative_path, self.excluded_prefixes, is_directory=True):
                            continue
                        subdirectories.append((entry.path, f"{relative_path}/"))
                    elif entry.is_file(follow_symlinks=False):
                        if is_excluded(relative_path, self.excluded_prefixes, is_directory=False):
                            continue
                        yield entry
                except OSError:
                    logger.debug("Skipping unreadable entry: %s", entry.path, exc_info=True)
                    continue

            # Reversed so the stack pops subdirectories in enumeration order
            stack.extend(reversed(subdirectories))


def iter_files(
    root: str | Path,
    *,
    include_hidden: bool = False,
    excluded_prefixes: frozenset[str] = frozenset(),
    cancel_token: CancelToken | None = None,
) -> Iterator[os.DirEntry[str]]:
    """Yield every regular file below ``root``; see FileWalk."""
    return iter(
        FileWalk(
            root,
            include_hidden=include_hidden,
            excluded_prefixes=excluded_prefixes,
            cancel_token=cancel_token,
        )
    )


def read_metadata(entry: os.DirEntry[str]) -> FileMetadata | None:
    """Stat an entry without following links; None if it vanished or is unreadable."""
    try:
        return FileMetadata.from_stat(entry.stat(follow_symlinks=False))
    except OSError:
        logger.debug("Cannot stat entry: %s", entry.path, exc_info=True)
        return None


def file_size(path: str | Path) -> int:
    """Size of a file in bytes, 0 if it cannot be read."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0
