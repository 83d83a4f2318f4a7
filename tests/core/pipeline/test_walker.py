"""Tests for directory tree enumeration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from fsinspect.core.pipeline.utils import CancelToken
from fsinspect.core.pipeline.walker import (
    FileMetadata,
    FileWalk,
    file_size,
    is_excluded,
    iter_files,
    read_metadata,
)


def _relative(entries, root: Path) -> list[str]:
    return [Path(entry.path).relative_to(root).as_posix() for entry in entries]


class TestIsExcluded:
    """Test cases for prefix exclusion matching."""

    def test_no_prefixes_never_excludes(self) -> None:
        assert not is_excluded("anything", frozenset(), is_directory=False)

    def test_plain_string_prefix(self) -> None:
        prefixes = frozenset({"Library"})

        assert is_excluded("Library", prefixes, is_directory=True)
        assert is_excluded("Library/Caches/x", prefixes, is_directory=False)
        # Plain string prefix, not a path-segment match
        assert is_excluded("LibraryBackup", prefixes, is_directory=True)
        assert not is_excluded("docs/Library", prefixes, is_directory=True)

    def test_slash_terminated_prefix_matches_directory(self) -> None:
        prefixes = frozenset({"cache/"})

        assert is_excluded("cache", prefixes, is_directory=True)
        assert not is_excluded("cache", prefixes, is_directory=False)
        assert not is_excluded("cachet", prefixes, is_directory=True)


class TestIterFiles:
    """Test cases for iter_files."""

    def test_yields_regular_files_recursively(self, tmp_path: Path, make_file) -> None:
        make_file("a.txt", 1)
        make_file("sub/b.txt", 2)
        make_file("sub/deeper/c.txt", 3)

        found = sorted(_relative(iter_files(tmp_path), tmp_path))

        assert found == ["a.txt", "sub/b.txt", "sub/deeper/c.txt"]

    def test_files_of_a_directory_come_before_its_subdirectories(
        self, tmp_path: Path, make_file
    ) -> None:
        make_file("sub/nested.txt")
        make_file("top.txt")

        found = _relative(iter_files(tmp_path), tmp_path)

        assert found == ["top.txt", "sub/nested.txt"]

    def test_hidden_entries_are_skipped_by_default(self, tmp_path: Path, make_file) -> None:
        make_file("visible.txt")
        make_file(".hidden.txt")
        make_file(".git/config")

        assert _relative(iter_files(tmp_path), tmp_path) == ["visible.txt"]

    def test_hidden_entries_included_on_request(self, tmp_path: Path, make_file) -> None:
        make_file("visible.txt")
        make_file(".hidden.txt")
        make_file(".git/config")

        found = sorted(_relative(iter_files(tmp_path, include_hidden=True), tmp_path))

        assert found == [".git/config", ".hidden.txt", "visible.txt"]

    def test_excluded_subtree_is_not_descended(self, tmp_path: Path, make_file, mocker) -> None:
        """An excluded directory is pruned, not filtered after listing."""
        # Given
        make_file("keep.txt")
        for i in range(100):
            make_file(f"cache/item{i}.bin")
        spy = mocker.patch(
            "fsinspect.core.pipeline.walker.os.scandir",
            wraps=os.scandir,
        )

        # When
        found = _relative(
            iter_files(tmp_path, excluded_prefixes=frozenset({"cache/"})),
            tmp_path,
        )

        # Then
        assert found == ["keep.txt"]
        assert spy.call_count == 1

    def test_symlinks_are_not_followed(self, tmp_path: Path, make_file) -> None:
        target = make_file("real/data.txt", 4)
        try:
            (tmp_path / "link.txt").symlink_to(target)
            (tmp_path / "linkdir").symlink_to(target.parent, target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        assert _relative(iter_files(tmp_path), tmp_path) == ["real/data.txt"]

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        assert list(iter_files(tmp_path / "missing")) == []

    def test_cancelled_token_stops_the_walk(self, tmp_path: Path, make_file) -> None:
        make_file("a.txt")
        token = CancelToken()
        token.cancel()

        assert list(iter_files(tmp_path, cancel_token=token)) == []

    def test_walk_records_interruption(self, tmp_path: Path, make_file) -> None:
        make_file("a.txt")
        make_file("b.txt")
        token = CancelToken()
        walk = FileWalk(tmp_path, cancel_token=token)

        for _entry in walk:
            token.cancel()

        assert walk.interrupted is True

    def test_completed_walk_is_not_interrupted(self, tmp_path: Path, make_file) -> None:
        make_file("a.txt")
        walk = FileWalk(tmp_path, cancel_token=CancelToken())

        assert len(list(walk)) == 1
        assert walk.interrupted is False

    def test_unreadable_directory_is_skipped(self, tmp_path: Path, make_file, mocker) -> None:
        make_file("a.txt")
        make_file("locked/b.txt")
        real_scandir = os.scandir

        def scandir(path):
            if os.fspath(path).endswith("locked"):
                raise PermissionError(13, "denied", os.fspath(path))
            return real_scandir(path)

        mocker.patch("fsinspect.core.pipeline.walker.os.scandir", side_effect=scandir)

        assert _relative(iter_files(tmp_path), tmp_path) == ["a.txt"]


class TestMetadata:
    """Test cases for metadata helpers."""

    def test_read_metadata(self, tmp_path: Path, make_file) -> None:
        make_file("data.bin", 42)

        entry = next(iter_files(tmp_path))
        metadata = read_metadata(entry)

        assert isinstance(metadata, FileMetadata)
        assert metadata.size == 42
        assert metadata.is_directory is False
        assert metadata.modified_time.tzinfo is not None

    def test_file_size_of_missing_path_is_zero(self, tmp_path: Path) -> None:
        assert file_size(tmp_path / "nope") == 0

    def test_file_size(self, make_file) -> None:
        assert file_size(make_file("x.bin", 7)) == 7
