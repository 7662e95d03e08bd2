"""Growable result collection with a hard size ceiling."""

from __future__ import annotations

from loguru import logger

from filelist.errors import SizeLimitReached

# Initial and maximum list sizes. The capacity doubles from the initial size
# until it reaches the maximum.
INITIAL_LIST_SIZE = 512
MAX_LIST_SIZE = 1_048_576


class ResultBuffer:
    """Owned sequence of entry paths whose capacity doubles up to ``hard_max``."""

    def __init__(
        self,
        initial_capacity: int = INITIAL_LIST_SIZE,
        hard_max: int = MAX_LIST_SIZE,
    ) -> None:
        if hard_max < 1:
            raise ValueError(f"hard_max must be positive, got {hard_max}")
        if initial_capacity < 1:
            raise ValueError(f"initial_capacity must be positive, got {initial_capacity}")

        self.hard_max = hard_max
        self.capacity = min(initial_capacity, hard_max)
        self._entries: list[str] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def is_full(self) -> bool:
        """Return True when no further entry can be appended."""
        return len(self._entries) == self.hard_max

    def _grow(self) -> None:
        """Double the capacity up to ``hard_max``."""
        if self.capacity == self.hard_max:
            raise SizeLimitReached(self.hard_max)

        self.capacity = min(max(self.capacity * 2, 1), self.hard_max)
        logger.debug(f"Resizing file list array: max. {self.capacity} elements")

    def append(self, path: str) -> None:
        """Take ownership of ``path``.

        Raises:
            SizeLimitReached: If the buffer already holds ``hard_max`` entries.
        """
        if len(self._entries) == self.capacity:
            self._grow()
        self._entries.append(path)

    def finalize(self) -> list[str]:
        """Trim capacity to the current length and hand the entries over."""
        self.capacity = len(self._entries)
        entries = self._entries
        self._entries = []
        return entries

    def destroy(self) -> None:
        """Release every owned entry."""
        self._entries.clear()
        self.capacity = 0
