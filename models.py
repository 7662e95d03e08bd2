"""Data models for file list results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal

FileType = Literal[
    "unknown",
    "fifo",
    "char-device",
    "directory",
    "block-device",
    "regular",
    "symlink",
    "socket",
]
SortMethod = Literal["none", "default", "natural", "collate", "ascii"]
PatternDialect = Literal["basic", "extended"]
ListStatus = Literal["complete", "partial"]

ALL_FILE_TYPES: tuple[FileType, ...] = (
    "unknown",
    "fifo",
    "char-device",
    "directory",
    "block-device",
    "regular",
    "symlink",
    "socket",
)
SORT_METHODS: tuple[SortMethod, ...] = ("none", "default", "natural", "collate", "ascii")


@dataclass(frozen=True)
class Identity:
    """Device and inode pair identifying one filesystem object."""

    device: int
    inode: int


@dataclass(frozen=True)
class ListOptions:
    """Traversal and matching switches for one list build."""

    follow_symlinks: bool = False
    trailing_separator_on_dirs: bool = False
    pattern_case_sensitive: bool = False
    pattern_dialect: PatternDialect = "extended"
    stay_on_device: bool = False


@dataclass
class FileList:
    """Ordered list of entry paths produced by one build or merge.

    ``status`` is ``"partial"`` when the configured maximum list size was
    reached and at least one entry is missing.
    """

    entries: list[str] = field(default_factory=list)
    status: ListStatus = "complete"

    @property
    def is_partial(self) -> bool:
        """Return True when entries were dropped at the size ceiling."""
        return self.status == "partial"

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def to_dict(self) -> dict[str, object]:
        """Serialize the list to dictionary output."""
        return {
            "status": self.status,
            "count": len(self.entries),
            "entries": list(self.entries),
        }
