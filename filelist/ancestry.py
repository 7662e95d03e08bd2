"""Chain of directory identities from the traversal root to the current directory."""

from __future__ import annotations

from typing import Iterator

from models import Identity


class AncestryStack:
    """LIFO stack of directory identities used for loop and device checks.

    It holds only the directories currently being descended into, never a
    history of everything visited, so a directory reachable by two distinct
    non-cyclic routes is walked both times.
    """

    def __init__(self) -> None:
        self._entries: list[Identity] = []

    def push(self, identity: Identity) -> None:
        self._entries.append(identity)

    def pop(self) -> Identity:
        """Remove and return the most recently pushed identity.

        Raises:
            IndexError: If the stack is empty.
        """
        if not self._entries:
            raise IndexError("pop from empty ancestry stack")
        return self._entries.pop()

    def contains(self, identity: Identity) -> bool:
        """Return True when ``identity`` is one of the current ancestors."""
        for entry in self._entries:
            if entry.inode == identity.inode and entry.device == identity.device:
                return True
        return False

    @property
    def root(self) -> Identity:
        """Identity of the traversal root.

        Raises:
            IndexError: If nothing has been pushed yet.
        """
        if not self._entries:
            raise IndexError("ancestry stack has no root")
        return self._entries[0]

    def __contains__(self, identity: object) -> bool:
        return isinstance(identity, Identity) and self.contains(identity)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Identity]:
        return iter(self._entries)
