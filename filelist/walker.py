"""Depth-first directory traversal feeding a result buffer.

The walk is driven by an explicit stack of open directory frames rather than
by recursion, so deep trees are bounded by memory and not by the interpreter
stack. At most one directory handle is open per descent level.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from filelist.ancestry import AncestryStack
from filelist.buffer import ResultBuffer
from filelist.classify import ClassifiedEntry, classify_entry
from filelist.errors import SizeLimitReached
from filelist.filesystem import DirectoryHandle, LocalFilesystem
from filelist.filters import EntryFilter
from filelist.paths import DIR_SEPARATOR
from models import ListOptions, ListStatus


@dataclass
class _Frame:
    """One directory being enumerated."""

    directory: str
    depth: int
    handle: DirectoryHandle
    # Entry for this directory in its parent, considered for inclusion once
    # the directory's own contents are done.
    pending: ClassifiedEntry | None = None


class DirectoryWalker:
    """Walk a directory tree and append every eligible path to a buffer."""

    def __init__(
        self,
        entry_filter: EntryFilter,
        options: ListOptions,
        buffer: ResultBuffer,
        filesystem: LocalFilesystem | None = None,
    ) -> None:
        self.entry_filter = entry_filter
        self.options = options
        self.buffer = buffer
        self.filesystem = filesystem or LocalFilesystem()

    def _open(self, directory: str) -> DirectoryHandle | None:
        """Open a directory handle; None when reading it is not permitted."""
        try:
            return self.filesystem.open_directory(directory)
        except PermissionError as exc:
            logger.debug(f"opendir(): errno {exc.errno} ({exc.strerror}): \"{directory}\"")
            return None

    def _include(self, entry: ClassifiedEntry) -> None:
        """Append ``entry`` to the buffer when the filter selects it."""
        if not self.entry_filter.eligible_for_inclusion(entry.file_type, entry.name):
            return

        path = entry.path
        if entry.file_type == "directory" and self.options.trailing_separator_on_dirs:
            path = f"{path}{DIR_SEPARATOR}"
        self.buffer.append(path)

    def _crosses_device(self, entry: ClassifiedEntry, ancestry: AncestryStack) -> bool:
        """Return True when ``entry`` leaves the root's device and that is forbidden."""
        if not self.options.stay_on_device:
            return False
        if entry.identity.device == ancestry.root.device:
            return False
        logger.debug(f"Ignoring other file system: \"{entry.path}\"")
        return True

    def walk(self, start_dir: str, depth: int, ancestry: AncestryStack) -> ListStatus:
        """Walk ``start_dir`` up to ``depth`` levels below it.

        ``ancestry`` must already hold the identity of ``start_dir``.

        Returns ``"partial"`` when the buffer reached its maximum size and the
        walk stopped early, otherwise ``"complete"``.

        Raises:
            OSError: If a directory fails to open for a reason other than
                missing permission.
        """
        frames: list[_Frame] = []
        root_handle = self._open(start_dir)
        if root_handle is None:
            return "complete"
        frames.append(_Frame(directory=start_dir, depth=depth, handle=root_handle))

        try:
            while frames:
                frame = frames[-1]
                raw_entry = next(frame.handle, None)

                if raw_entry is None:
                    frames.pop()
                    frame.handle.close()
                    if frame.pending is not None:
                        ancestry.pop()
                        self._include(frame.pending)
                    continue

                entry = classify_entry(
                    raw_entry,
                    frame.directory,
                    follow_symlinks=self.options.follow_symlinks,
                    filesystem=self.filesystem,
                )
                if entry is None:
                    continue

                if self.entry_filter.eligible_for_descent(entry.file_type, frame.depth):
                    if entry.identity in ancestry:
                        logger.debug(f"Directory loop detected: \"{entry.path}\"")
                        continue

                    if not self._crosses_device(entry, ancestry):
                        child_frame = self._descend(entry, frame.depth, ancestry)
                        if child_frame is not None:
                            frames.append(child_frame)
                            continue

                self._include(entry)
        except SizeLimitReached as exc:
            logger.debug(f"{exc}; stopping traversal")
            return "partial"
        finally:
            for frame in reversed(frames):
                frame.handle.close()
                if frame.pending is not None:
                    ancestry.pop()

        return "complete"

    def _descend(self, entry: ClassifiedEntry, depth: int, ancestry: AncestryStack) -> _Frame | None:
        """Open ``entry`` as a new frame, pushing its identity onto ``ancestry``.

        Returns None when the directory is unreadable; it then counts as empty
        and the caller includes the entry right away.
        """
        handle = self._open(entry.path)
        if handle is None:
            return None

        ancestry.push(entry.identity)
        return _Frame(
            directory=entry.path,
            depth=depth - 1 if depth > 0 else depth,
            handle=handle,
            pending=entry,
        )
