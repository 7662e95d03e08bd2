"""Path-aware comparators used to order finished file lists.

Each comparator splits both paths at their last separator and compares the
directory parts before the base names, so entries are grouped by their
containing directory regardless of enumeration order.
"""

from __future__ import annotations

import locale
import os
from functools import cmp_to_key
from typing import Callable

from filelist.paths import split_path
from models import SORT_METHODS, SortMethod

TextComparator = Callable[[str, str], int]


def _sign(value: int) -> int:
    """Clamp a comparison result to -1, 0 or 1."""
    return (value > 0) - (value < 0)


def _fold(char: str) -> str:
    """Lowercase ASCII letters only."""
    if "A" <= char <= "Z":
        return chr(ord(char) + 32)
    return char


def _is_digit(char: str) -> bool:
    """ASCII digits only."""
    return "0" <= char <= "9"


def _digit_run_end(text: str, start: int) -> int:
    """Return the index just past the digit run starting at ``start``."""
    end = start
    while end < len(text) and _is_digit(text[end]):
        end += 1
    return end


def _compare_chars(left: str, right: str, tie: int) -> tuple[int, int]:
    """Compare two differing characters.

    Returns ``(result, tie)``. ``result`` is non-zero only for a
    case-insensitive difference; a pure case difference only seeds ``tie``
    when no earlier tie was recorded. Lowercase sorts first.
    """
    folded_left = _fold(left)
    folded_right = _fold(right)
    if folded_left != folded_right:
        return _sign(ord(folded_left) - ord(folded_right)), tie
    if not tie:
        tie = _sign(ord(right) - ord(left))
    return 0, tie


def _compare_tails(left: str, left_pos: int, right: str, right_pos: int, tie: int) -> int:
    """Order by remaining length once one side is exhausted, falling back to ``tie``."""
    left_done = left_pos >= len(left)
    right_done = right_pos >= len(right)
    if left_done and right_done:
        return tie
    return -1 if left_done else 1


def compare_default(left: str, right: str) -> int:
    """Compare case-insensitively, breaking pure case ties lowercase first.

    The case tie-break is the first one found but has the lowest priority:
    any later case-insensitive difference, or a length difference, wins.
    """
    tie = 0
    limit = min(len(left), len(right))
    for index in range(limit):
        if left[index] != right[index]:
            result, tie = _compare_chars(left[index], right[index], tie)
            if result:
                return result
    return _compare_tails(left, limit, right, limit, tie)


def compare_natural(left: str, right: str) -> int:
    """Compare like :func:`compare_default`, with digit runs compared as numbers.

    Leading zeros are ignored for magnitude. When two runs have the same value
    but different lengths, the run with more leading zeros sorts first.
    """
    tie = 0
    left_pos = right_pos = 0
    while left_pos < len(left) and right_pos < len(right):
        left_char = left[left_pos]
        right_char = right[right_pos]

        if _is_digit(left_char) and _is_digit(right_char):
            left_end = _digit_run_end(left, left_pos)
            right_end = _digit_run_end(right, right_pos)
            left_run = left[left_pos:left_end]
            right_run = right[right_pos:right_end]
            left_value = left_run.lstrip("0") or "0"
            right_value = right_run.lstrip("0") or "0"

            if len(left_value) != len(right_value):
                return _sign(len(left_value) - len(right_value))
            if left_value != right_value:
                return -1 if left_value < right_value else 1
            if len(left_run) != len(right_run):
                return _sign(len(right_run) - len(left_run))

            left_pos = left_end
            right_pos = right_end
            continue

        if left_char != right_char:
            result, tie = _compare_chars(left_char, right_char, tie)
            if result:
                return result

        left_pos += 1
        right_pos += 1

    return _compare_tails(left, left_pos, right, right_pos, tie)


def compare_collate(left: str, right: str) -> int:
    """Compare with the current locale's ``LC_COLLATE`` rules."""
    return _sign(locale.strcoll(left, right))


def compare_ascii(left: str, right: str) -> int:
    """Compare the encoded file names byte by byte, without case folding.

    Names are encoded with :func:`os.fsencode`, so undecodable bytes carried as
    surrogates keep their original byte value.
    """
    left_bytes = os.fsencode(left)
    right_bytes = os.fsencode(right)
    return (left_bytes > right_bytes) - (left_bytes < right_bytes)


COMPARATORS: dict[SortMethod, TextComparator] = {
    "default": compare_default,
    "natural": compare_natural,
    "collate": compare_collate,
    "ascii": compare_ascii,
}


def compare_paths(left: str, right: str, compare_text: TextComparator) -> int:
    """Compare directory parts first, then base names."""
    left_dir, left_name = split_path(left)
    right_dir, right_name = split_path(right)

    result = compare_text(left_dir, right_dir)
    if result == 0:
        result = compare_text(left_name, right_name)
    return result


def get_comparator(sort_method: SortMethod) -> TextComparator | None:
    """Return the text comparator for ``sort_method``, or None for ``"none"``.

    Raises:
        ValueError: If ``sort_method`` is not a known sort method.
    """
    if sort_method not in SORT_METHODS:
        raise ValueError(f"Unknown sort method: {sort_method!r}")
    return COMPARATORS.get(sort_method)


def path_sort_key(sort_method: SortMethod) -> Callable[[str], object] | None:
    """Return a ``sorted`` key applying the path comparator for ``sort_method``."""
    compare_text = get_comparator(sort_method)
    if compare_text is None:
        return None
    return cmp_to_key(lambda left, right: compare_paths(left, right, compare_text))


def sort_paths(entries: list[str], sort_method: SortMethod) -> list[str]:
    """Return ``entries`` ordered by ``sort_method``; ``"none"`` keeps input order."""
    key = path_sort_key(sort_method)
    if key is None:
        return list(entries)
    return sorted(entries, key=key)
