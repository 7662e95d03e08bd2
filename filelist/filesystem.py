"""Filesystem access used by the directory walker.

The walker needs only two capabilities: list the raw entries of a directory,
and stat a path. Both live on :class:`LocalFilesystem` so callers and tests
can substitute their own implementation.
"""

from __future__ import annotations

import os
from types import TracebackType
from typing import NamedTuple

from models import FileType


class RawEntry(NamedTuple):
    """One enumerated directory entry with an optional cheap type hint."""

    name: str
    hint: FileType | None


def hint_for_entry(entry: os.DirEntry) -> FileType | None:
    """Derive a type hint from a scandir entry without following symlinks.

    ``None`` means the type is not known from the directory entry alone.
    """
    try:
        if entry.is_symlink():
            return "symlink"
        if entry.is_dir(follow_symlinks=False):
            return "directory"
        if entry.is_file(follow_symlinks=False):
            return "regular"
    except OSError:
        return None
    return None


class DirectoryHandle:
    """Open directory enumeration; ``.`` and ``..`` are never produced."""

    def __init__(self, directory: str) -> None:
        self.directory = directory
        self._iterator = os.scandir(directory)

    def __iter__(self) -> DirectoryHandle:
        return self

    def __next__(self) -> RawEntry:
        entry = next(self._iterator)
        return RawEntry(entry.name, hint_for_entry(entry))

    def close(self) -> None:
        self._iterator.close()

    def __enter__(self) -> DirectoryHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


class LocalFilesystem:
    """Directory enumeration and stat backed by the ``os`` module."""

    def open_directory(self, directory: str) -> DirectoryHandle:
        """Open ``directory`` for enumeration.

        Raises:
            PermissionError: If the directory cannot be read.
            OSError: For any other failure to open the directory.
        """
        return DirectoryHandle(directory)

    def stat(self, path: str, follow_symlinks: bool) -> os.stat_result:
        return os.stat(path, follow_symlinks=follow_symlinks)
