"""Tests for merging finished file lists."""

import pytest

import filelist.merge as merge_module
from filelist.errors import MergeOverflowError
from filelist.merge import count_entries, merge_lists
from models import FileList


def _lists() -> tuple[FileList, FileList]:
    destination = FileList(entries=["b/file2", "a/x"])
    source = FileList(entries=["b/file10", "a/y", "c/z"])
    return destination, source


@pytest.mark.parametrize("hints", [(2, 3), (0, 0), (2, 0), (0, 3)])
def test_merge_combines_lists_with_or_without_hints(hints: tuple[int, int]) -> None:
    """Verify explicit counts and auto-counting give the same merged list."""
    destination, source = _lists()

    count = merge_lists(destination, hints[0], source, hints[1], sort_method="natural")

    assert count == 5
    assert destination.entries == ["a/x", "a/y", "b/file2", "b/file10", "c/z"]
    assert source.entries == []


def test_merge_without_sort_appends_in_order() -> None:
    """Verify the none method keeps destination entries first."""
    destination, source = _lists()

    merge_lists(destination, 0, source, 0)

    assert destination.entries == ["b/file2", "a/x", "b/file10", "a/y", "c/z"]


def test_merge_into_empty_destination_copies_source() -> None:
    """Verify merging into an empty list yields the source's entries."""
    destination = FileList()
    source = FileList(entries=["d/b", "d/a"])
    expected = list(source.entries)

    count = merge_lists(destination, 0, source, 0)

    assert count == 2
    assert destination.entries == expected


def test_merge_count_hints_select_leading_entries() -> None:
    """Verify count hints limit how many entries of each list are merged."""
    destination, source = _lists()

    count = merge_lists(destination, 1, source, 1)

    assert count == 2
    assert destination.entries == ["b/file2", "b/file10"]


def test_merge_propagates_partial_status() -> None:
    """Verify merging a partial list marks the destination partial."""
    destination = FileList(entries=["d/a"])
    source = FileList(entries=["d/b"], status="partial")

    merge_lists(destination, 0, source, 0, sort_method="default")

    assert destination.is_partial


def test_merge_failure_leaves_destination_unchanged(monkeypatch: pytest.MonkeyPatch) -> None:
    """Verify overflow and bad arguments fail without touching the destination."""
    destination, source = _lists()
    before = list(destination.entries)
    monkeypatch.setattr(merge_module, "MAX_MERGE_COUNT", 4)

    with pytest.raises(MergeOverflowError):
        merge_lists(destination, 0, source, 0)
    with pytest.raises(ValueError):
        merge_lists(destination, 3, source, 0)
    with pytest.raises(ValueError):
        merge_lists(destination, 0, source, 0, sort_method="random")
    with pytest.raises(ValueError):
        merge_lists(destination, 0, destination, 0)

    assert destination.entries == before
    assert count_entries(source) == 3
