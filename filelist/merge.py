"""Merging of finished file lists."""

from __future__ import annotations

import sys

from loguru import logger

from filelist.compare import get_comparator, sort_paths
from filelist.errors import MergeOverflowError
from models import FileList, SortMethod

# Largest entry count a merged list may hold.
MAX_MERGE_COUNT = sys.maxsize - 1


def count_entries(file_list: FileList) -> int:
    """Return the number of entries in ``file_list``."""
    return len(file_list.entries)


def _resolve_count(file_list: FileList, count_hint: int, label: str) -> int:
    """Turn a count hint into the number of leading entries to merge."""
    if count_hint < 0:
        raise ValueError(f"{label} count must not be negative, got {count_hint}")
    actual = count_entries(file_list)
    if count_hint == 0:
        return actual
    if count_hint > actual:
        raise ValueError(f"{label} count {count_hint} exceeds its {actual} entries")
    return count_hint


def merge_lists(
    destination: FileList,
    n_destination: int,
    source: FileList,
    n_source: int,
    sort_method: SortMethod = "none",
) -> int:
    """Append ``source``'s entries to ``destination`` and optionally re-sort.

    A count of ``0`` means the list's length is computed. Entries are moved,
    so ``source`` is left empty. On any failure ``destination`` is unchanged.

    Returns:
        The number of entries in ``destination`` after the merge.

    Raises:
        ValueError: If a count is negative or larger than its list, or the
            sort method is unknown.
        MergeOverflowError: If the combined count is not addressable.
    """
    if source is destination:
        raise ValueError("Cannot merge a file list into itself")
    get_comparator(sort_method)
    dest_count = _resolve_count(destination, n_destination, "destination")
    source_count = _resolve_count(source, n_source, "source")

    total = dest_count + source_count
    if total > MAX_MERGE_COUNT:
        raise MergeOverflowError(
            f"Cannot merge {source_count} entries into a list of {dest_count}: "
            f"combined size exceeds {MAX_MERGE_COUNT}"
        )

    combined = destination.entries[:dest_count] + source.entries[:source_count]
    combined = sort_paths(combined, sort_method)

    destination.entries[:] = combined
    if source.is_partial:
        destination.status = "partial"
    source.entries.clear()

    logger.debug(f"Merged {source_count} entries into file list: {total} entries")
    return total
