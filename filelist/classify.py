"""Entry type resolution for enumerated directory entries."""

from __future__ import annotations

import stat
from dataclasses import dataclass

from loguru import logger

from filelist.filesystem import LocalFilesystem, RawEntry
from filelist.paths import join_path
from models import FileType, Identity

# Hints that can never be trusted on their own: directories need an identity
# for loop checking and unknown types need a stat to be resolved.
UNTRUSTED_HINTS = {None, "unknown", "directory"}


@dataclass(frozen=True)
class ClassifiedEntry:
    """Directory entry with its resolved type and, when stat'ed, its identity."""

    name: str
    path: str
    file_type: FileType
    identity: Identity | None = None


def type_from_mode(mode: int) -> FileType:
    """Map an ``st_mode`` value onto a file type."""
    if stat.S_ISDIR(mode):
        return "directory"
    if stat.S_ISREG(mode):
        return "regular"
    if stat.S_ISLNK(mode):
        return "symlink"
    if stat.S_ISFIFO(mode):
        return "fifo"
    if stat.S_ISCHR(mode):
        return "char-device"
    if stat.S_ISBLK(mode):
        return "block-device"
    if stat.S_ISSOCK(mode):
        return "socket"
    return "unknown"


def needs_stat(hint: FileType | None, follow_symlinks: bool) -> bool:
    """Return True when the cheap hint cannot be used as the entry type."""
    if hint in UNTRUSTED_HINTS:
        return True
    return hint == "symlink" and follow_symlinks


def classify_entry(
    entry: RawEntry,
    directory: str,
    follow_symlinks: bool,
    filesystem: LocalFilesystem,
) -> ClassifiedEntry | None:
    """Resolve the type of one entry of ``directory``.

    Returns None when the entry must be skipped because it could not be
    stat'ed, for example a dangling symlink that is being followed or a file
    removed while the walk was running.
    """
    path = join_path(directory, entry.name)
    if not needs_stat(entry.hint, follow_symlinks):
        return ClassifiedEntry(name=entry.name, path=path, file_type=entry.hint)

    try:
        stat_result = filesystem.stat(path, follow_symlinks=follow_symlinks)
    except OSError as exc:
        logger.debug(f"stat(): errno {exc.errno} ({exc.strerror}): \"{path}\"")
        return None

    return ClassifiedEntry(
        name=entry.name,
        path=path,
        file_type=type_from_mode(stat_result.st_mode),
        identity=Identity(device=stat_result.st_dev, inode=stat_result.st_ino),
    )
