"""Path string helpers shared by the walker and the builder."""

from __future__ import annotations

import re

DIR_SEPARATOR = "/"

_REPEATED_SEPARATORS_RE = re.compile(r"/{2,}")


def join_path(directory: str, name: str) -> str:
    """Join a directory and a child name with exactly one separator."""
    if directory.endswith(DIR_SEPARATOR):
        return f"{directory}{name}"
    return f"{directory}{DIR_SEPARATOR}{name}"


def clean_directory(directory: str) -> str:
    """Collapse repeated separators and strip trailing ones.

    The filesystem root keeps its single separator.

    Raises:
        ValueError: If ``directory`` is empty.
    """
    if not directory:
        raise ValueError("Start directory must not be empty")

    cleaned = _REPEATED_SEPARATORS_RE.sub(DIR_SEPARATOR, directory)
    if cleaned != DIR_SEPARATOR:
        cleaned = cleaned.rstrip(DIR_SEPARATOR)
    return cleaned


def split_path(path: str) -> tuple[str, str]:
    """Return ``(directory_part, base_name)`` split at the last separator."""
    head, _, tail = path.rpartition(DIR_SEPARATOR)
    return head, tail
