"""
Content digests and sizes of directory trees.

Trees produced by device syncs routinely contain broken symlinks, fifos,
sockets and device nodes. Every entry is classified before any I/O happens and
only regular files are read or measured; everything else is skipped.
"""

from __future__ import annotations

import hashlib
import logging
import os
import stat
from enum import Enum
from typing import List, Union

from run_loop.environment import debug_enabled, debug_log
from run_loop.errors import DirectoryPreconditionError

logger = logging.getLogger(__name__)

_READ_CHUNK_BYTES = 1024 * 1024


class EntryType(Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    BROKEN_SYMLINK = "broken_symlink"
    NONEXISTENT = "nonexistent"
    FIFO = "fifo"
    SOCKET = "socket"
    CHAR_SPECIAL = "char_special"
    BLOCK_SPECIAL = "block_special"


class SizeUnit(Enum):
    BYTES = "bytes"
    KB = "kb"
    MB = "mb"
    GB = "gb"

    @property
    def divisor(self) -> int:
        return _UNIT_DIVISORS[self]


_UNIT_DIVISORS = {
    SizeUnit.BYTES: 1,
    SizeUnit.KB: 1000,
    SizeUnit.MB: 1000 * 1000,
    SizeUnit.GB: 1000 * 1000 * 1000,
}

_REPORTED_SKIPS = {
    EntryType.FIFO: "FIFO",
    EntryType.SOCKET: "SOCKET",
    EntryType.CHAR_SPECIAL: "CHAR SPECIAL",
    EntryType.BLOCK_SPECIAL: "BLOCK SPECIAL",
}


def recursive_glob_for_entries(base_dir: Union[str, os.PathLike]) -> List[str]:
    """
    Return every entry below ``base_dir``, dot files included, in sorted order.

    Symlinks to directories are listed but not descended into. ``.`` and ``..``
    never appear.
    """
    entries: List[str] = []
    for root, dirnames, filenames in os.walk(base_dir):
        for name in dirnames + filenames:
            if name in (".", ".."):
                continue
            entries.append(os.path.join(root, name))
    entries.sort()
    return entries


def classify_entry(path: Union[str, os.PathLike]) -> EntryType:
    """Classify ``path`` without reading it. Symlinks are judged by their target."""
    try:
        mode = os.stat(path).st_mode
    except FileNotFoundError:
        if os.path.lexists(path):
            return EntryType.BROKEN_SYMLINK
        return EntryType.NONEXISTENT
    except OSError as exc:
        logger.debug("Unable to stat %s: %s", path, exc)
        return EntryType.NONEXISTENT

    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISFIFO(mode):
        return EntryType.FIFO
    if stat.S_ISSOCK(mode):
        return EntryType.SOCKET
    if stat.S_ISCHR(mode):
        return EntryType.CHAR_SPECIAL
    if stat.S_ISBLK(mode):
        return EntryType.BLOCK_SPECIAL
    return EntryType.REGULAR


def skip_file(path: Union[str, os.PathLike], task: str, debug: bool) -> bool:
    """Return True unless ``path`` is a regular file (or a symlink to one)."""
    entry_type = classify_entry(path)
    if entry_type is EntryType.REGULAR:
        return False
    if debug and entry_type in _REPORTED_SKIPS:
        debug_log(f"{task} IS SKIPPING {_REPORTED_SKIPS[entry_type]} {path}", force=True)
    return True


def _entries_for(path: Union[str, os.PathLike]) -> List[str]:
    if not os.path.exists(path):
        raise DirectoryPreconditionError.missing(os.fspath(path))
    if not os.path.isdir(path):
        raise DirectoryPreconditionError.not_a_directory(os.fspath(path))

    entries = recursive_glob_for_entries(path)
    if not entries:
        raise DirectoryPreconditionError.empty(os.fspath(path), entries)
    return entries


def _feed_file(sha, file_path: str) -> None:
    with open(file_path, "rb") as handle:
        for chunk in iter(lambda: handle.read(_READ_CHUNK_BYTES), b""):
            sha.update(chunk)


def directory_digest(path: Union[str, os.PathLike]) -> str:
    """
    Compute the SHA-256 digest of the regular files below ``path``.

    Files are fed in sorted path order, so the digest is stable for as long as
    regular file contents are unchanged. Files that cannot be read contribute
    nothing.

    Raises:
        DirectoryPreconditionError: When ``path`` does not exist, is not a
            directory, or is empty
    """
    entries = _entries_for(path)
    debug = debug_enabled()

    sha = hashlib.sha256()
    for file_path in entries:
        if skip_file(file_path, "SHA256", debug):
            continue
        try:
            _feed_file(sha, file_path)
        except OSError as exc:  # policy_guard: allow-silent-handler
            logger.debug("Unable to read %s while computing digest: %s", file_path, exc)
            if debug:
                debug_log(
                    f"directory_digest raised an error:\n\n{exc}\n\nwhile trying to find the SHA of this file:\n\n{file_path}\n",
                    force=True,
                )
    return sha.hexdigest()


def iterate_for_size(entries: List[str]) -> int:
    debug = debug_enabled()
    total = 0
    for file_path in entries:
        if not skip_file(file_path, "SIZE", debug):
            total += os.path.getsize(file_path)
    return total


def size(path: Union[str, os.PathLike], unit: Union[str, SizeUnit]) -> Union[int, float]:
    """
    Return the total size of the regular files below ``path``.

    Args:
        path: Directory to measure
        unit: One of ``bytes``, ``kb``, ``mb`` or ``gb`` (decimal units)

    Returns:
        Bytes as an ``int``; the other units as a ``float``

    Raises:
        DirectoryPreconditionError: For an unknown unit or an unusable ``path``
    """
    try:
        size_unit = SizeUnit(unit)
    except ValueError as exc:
        raise DirectoryPreconditionError.invalid_unit(unit, [member.value for member in SizeUnit]) from exc

    total = iterate_for_size(_entries_for(path))
    if size_unit is SizeUnit.BYTES:
        return total
    return total / float(size_unit.divisor)


__all__ = [
    "EntryType",
    "SizeUnit",
    "classify_entry",
    "directory_digest",
    "iterate_for_size",
    "recursive_glob_for_entries",
    "size",
    "skip_file",
]
