"""Tests for directory digests and sizes."""

from __future__ import annotations

import os
import shutil
import socket
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from run_loop import directory as directory_module
from run_loop.directory import (
    EntryType,
    SizeUnit,
    classify_entry,
    directory_digest,
    recursive_glob_for_entries,
    size,
    skip_file,
)
from run_loop.errors import DirectoryPreconditionError


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    base = tmp_path / "tree"
    (base / "sub" / ".hidden_dir").mkdir(parents=True)
    (base / "a.txt").write_bytes(b"a" * 1500)
    (base / ".dotfile").write_bytes(b"dot")
    (base / "sub" / "b.bin").write_bytes(b"\x00\x01\x02")
    (base / "sub" / ".hidden_dir" / ".nested").write_bytes(b"nested")
    return base


@pytest.fixture
def short_dir():
    # AF_UNIX socket paths are limited to ~100 bytes; tmp_path can be longer.
    path = tempfile.mkdtemp(prefix="rl", dir="/tmp")
    yield Path(path)
    shutil.rmtree(path, ignore_errors=True)


class TestRecursiveGlobForEntries:
    """Tests for recursive_glob_for_entries."""

    def test_includes_dotfiles_and_nested_dotfiles(self, tree) -> None:
        entries = recursive_glob_for_entries(tree)

        relative = [os.path.relpath(entry, tree) for entry in entries]
        assert relative == sorted(relative)
        assert set(relative) == {
            ".dotfile",
            "a.txt",
            "sub",
            os.path.join("sub", ".hidden_dir"),
            os.path.join("sub", ".hidden_dir", ".nested"),
            os.path.join("sub", "b.bin"),
        }

    def test_never_lists_self_or_parent(self, tree) -> None:
        for entry in recursive_glob_for_entries(tree):
            assert os.path.basename(entry) not in (".", "..")

    def test_empty_directory(self, tmp_path) -> None:
        assert recursive_glob_for_entries(tmp_path) == []

    def test_symlinked_directory_is_listed_but_not_descended(self, tree, tmp_path) -> None:
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "inside.txt").write_bytes(b"outside")
        os.symlink(outside, tree / "linked", target_is_directory=True)

        entries = recursive_glob_for_entries(tree)

        assert str(tree / "linked") in entries
        assert str(tree / "linked" / "inside.txt") not in entries
        assert classify_entry(tree / "linked") is EntryType.DIRECTORY


class TestClassifyEntry:
    """Tests for classify_entry and skip_file."""

    def test_regular_and_directory(self, tree) -> None:
        assert classify_entry(tree / "a.txt") is EntryType.REGULAR
        assert classify_entry(tree / "sub") is EntryType.DIRECTORY

    def test_symlinks_follow_their_target(self, tree) -> None:
        os.symlink(tree / "a.txt", tree / "link")
        os.symlink(tree / "missing", tree / "broken")

        assert classify_entry(tree / "link") is EntryType.REGULAR
        assert classify_entry(tree / "broken") is EntryType.BROKEN_SYMLINK
        assert classify_entry(tree / "nothing-here") is EntryType.NONEXISTENT

    def test_fifo(self, tree) -> None:
        os.mkfifo(tree / "pipe")

        assert classify_entry(tree / "pipe") is EntryType.FIFO

    def test_socket(self, short_dir) -> None:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.bind(str(short_dir / "s"))
            assert classify_entry(short_dir / "s") is EntryType.SOCKET
        finally:
            sock.close()

    def test_char_special(self) -> None:
        if not os.path.exists("/dev/null"):
            pytest.skip("no /dev/null")
        assert classify_entry("/dev/null") is EntryType.CHAR_SPECIAL

    def test_skip_file_reports_special_files_in_debug(self, tree, capsys) -> None:
        os.mkfifo(tree / "pipe")

        assert skip_file(tree / "pipe", "SIZE", True) is True
        assert "SIZE IS SKIPPING FIFO" in capsys.readouterr().out
        assert skip_file(tree / "a.txt", "SIZE", True) is False


class TestDirectoryDigest:
    """Tests for directory_digest."""

    def test_is_deterministic(self, tree) -> None:
        first = directory_digest(tree)

        assert first == directory_digest(str(tree))
        assert len(first) == 64

    def test_changes_when_content_changes(self, tree) -> None:
        before = directory_digest(tree)
        (tree / "sub" / "b.bin").write_bytes(b"\x00\x01\x03")

        assert directory_digest(tree) != before

    def test_ignores_broken_symlinks_and_fifos(self, tree) -> None:
        before = directory_digest(tree)
        os.symlink(tree / "missing", tree / "broken")
        os.mkfifo(tree / "sub" / "pipe")

        assert directory_digest(tree) == before

    def test_ignores_sockets(self, short_dir) -> None:
        (short_dir / "f").write_bytes(b"content")
        before = directory_digest(short_dir)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.bind(str(short_dir / "s"))
            assert directory_digest(short_dir) == before
        finally:
            sock.close()

    def test_unreadable_file_contributes_nothing(self, tree) -> None:
        expected = directory_digest(tree)
        (tree / "locked").write_bytes(b"secret")
        real_feed = directory_module._feed_file

        def feed(sha, file_path):
            if file_path.endswith("locked"):
                raise PermissionError(13, "Permission denied", file_path)
            real_feed(sha, file_path)

        with patch("run_loop.directory._feed_file", side_effect=feed):
            assert directory_digest(tree) == expected

    def test_preconditions(self, tree, tmp_path) -> None:
        with pytest.raises(DirectoryPreconditionError, match="to exist"):
            directory_digest(tmp_path / "missing")
        with pytest.raises(DirectoryPreconditionError, match="to be a directory"):
            directory_digest(tree / "a.txt")
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(DirectoryPreconditionError, match="non-empty dir"):
            directory_digest(empty)

    def test_precondition_errors_are_value_errors(self, tmp_path) -> None:
        with pytest.raises(ValueError):
            directory_digest(tmp_path / "missing")


class TestSize:
    """Tests for size."""

    def test_bytes(self, tree) -> None:
        assert size(tree, "bytes") == 1500 + 3 + 3 + 6

    def test_decimal_units(self, tree) -> None:
        total = size(tree, "bytes")

        assert size(tree, "kb") == total / 1000.0
        assert size(tree, SizeUnit.MB) == pytest.approx(total / 1000.0 / 1000.0)
        assert size(tree, "gb") == pytest.approx(total / 1000.0 / 1000.0 / 1000.0)

    def test_skips_special_entries(self, tree) -> None:
        before = size(tree, "bytes")
        os.symlink(tree / "missing", tree / "broken")
        os.mkfifo(tree / "pipe")

        assert size(tree, "bytes") == before

    @pytest.mark.parametrize("unit", ["KB", "tb", "kilobytes", ""])
    def test_invalid_unit(self, tree, unit) -> None:
        with pytest.raises(DirectoryPreconditionError, match="bytes, kb, mb, gb"):
            size(tree, unit)

    def test_symlinked_directory_adds_nothing(self, tree, tmp_path) -> None:
        before = size(tree, "bytes")
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "inside.txt").write_bytes(b"x" * 100)
        os.symlink(outside, tree / "linked", target_is_directory=True)

        assert size(tree, "bytes") == before

    def test_unit_is_checked_before_path(self, tmp_path) -> None:
        with pytest.raises(DirectoryPreconditionError, match="Expected 'tb' to be one of"):
            size(tmp_path / "missing", "tb")

    def test_preconditions(self, tree, tmp_path) -> None:
        with pytest.raises(DirectoryPreconditionError):
            size(tmp_path / "missing", "bytes")
        with pytest.raises(DirectoryPreconditionError):
            size(tree / "a.txt", "kb")
        empty = tmp_path / "empty"
        empty.mkdir()
        with pytest.raises(DirectoryPreconditionError):
            size(empty, "mb")
