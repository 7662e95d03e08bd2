"""File list builder.

Limitations:
- Only ``/`` is recognized as a directory separator
- No caching between calls; every build walks the tree again
- No cancellation; ``max_entries`` bounds the work instead
"""

from __future__ import annotations

from pathlib import Path
from stat import S_ISDIR
from typing import Iterable

from loguru import logger

from filelist.ancestry import AncestryStack
from filelist.buffer import INITIAL_LIST_SIZE, MAX_LIST_SIZE, ResultBuffer
from filelist.compare import get_comparator, sort_paths
from filelist.filesystem import LocalFilesystem
from filelist.filters import EntryFilter, compile_pattern, normalize_type_mask
from filelist.paths import clean_directory
from filelist.walker import DirectoryWalker
from models import FileList, FileType, Identity, ListOptions, SortMethod


def build_list(
    start_dir: str | Path,
    type_mask: Iterable[FileType] = (),
    name_pattern: str | None = None,
    depth: int = -1,
    options: ListOptions = ListOptions(),
    sort_method: SortMethod = "default",
    *,
    max_entries: int = MAX_LIST_SIZE,
    filesystem: LocalFilesystem | None = None,
) -> FileList:
    """Build a sorted list of the entries found below ``start_dir``.

    Args:
        start_dir: Directory in which the search starts.
        type_mask: File types to list; empty selects every type.
        name_pattern: POSIX regular expression matched against base names.
        depth: Levels of recursion; ``0`` lists the entries directly in
            ``start_dir`` without descending and ``-1`` is unlimited.
        options: Symlink, separator, pattern and device switches.
        sort_method: Ordering applied to the finished list.
        max_entries: Size ceiling; reaching it yields a partial list.
        filesystem: Filesystem access, defaults to the local filesystem.

    Returns:
        The list of entry paths. Its status is ``"partial"`` when
        ``max_entries`` was reached and at least one entry is missing.

    Raises:
        ValueError: If an argument is invalid.
        PatternError: If ``name_pattern`` is malformed.
        FileNotFoundError: If ``start_dir`` does not exist.
        NotADirectoryError: If ``start_dir`` is not a directory.
        OSError: If a directory fails to open for a reason other than
            missing permission.
    """
    if depth < -1:
        raise ValueError(f"depth must be -1 or greater, got {depth}")
    get_comparator(sort_method)
    entry_filter = EntryFilter(
        type_mask=normalize_type_mask(type_mask),
        pattern=compile_pattern(
            name_pattern,
            case_sensitive=options.pattern_case_sensitive,
            dialect=options.pattern_dialect,
        ),
    )

    root = clean_directory(str(start_dir))
    filesystem = filesystem or LocalFilesystem()
    try:
        root_stat = filesystem.stat(root, follow_symlinks=True)
    except FileNotFoundError:
        raise FileNotFoundError(f"Start directory does not exist: {root}") from None
    if not S_ISDIR(root_stat.st_mode):
        raise NotADirectoryError(f"Start directory is not a directory: {root}")

    ancestry = AncestryStack()
    ancestry.push(Identity(device=root_stat.st_dev, inode=root_stat.st_ino))

    buffer = ResultBuffer(initial_capacity=INITIAL_LIST_SIZE, hard_max=max_entries)
    walker = DirectoryWalker(entry_filter, options, buffer, filesystem)
    try:
        status = walker.walk(root, depth, ancestry)
    except Exception:
        buffer.destroy()
        raise

    entries = buffer.finalize()
    if status == "partial":
        logger.warning(f"File list for {root} reached {max_entries} entries; result is partial")

    return FileList(entries=sort_paths(entries, sort_method), status=status)


def destroy_list(file_list: FileList | None) -> None:
    """Release every entry of ``file_list``; None and empty lists are ignored."""
    if file_list is None:
        return
    file_list.entries.clear()
    file_list.status = "complete"
