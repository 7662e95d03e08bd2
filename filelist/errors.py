"""Exception types raised by list building and merging."""

from __future__ import annotations


class FileListError(Exception):
    """Base class for file list failures."""


class PatternError(FileListError, ValueError):
    """Name pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid name pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class SizeLimitReached(FileListError):
    """Result buffer is at its hard maximum and cannot take another entry."""

    def __init__(self, hard_max: int) -> None:
        super().__init__(f"File list reached its maximum size of {hard_max} entries")
        self.hard_max = hard_max


class MergeOverflowError(FileListError, OverflowError):
    """Combined entry count of a merge exceeds the addressable maximum."""
