"""Tests for building file lists from real directory trees."""

import os
from pathlib import Path

import pytest

from filelist.builder import build_list, destroy_list
from filelist.errors import PatternError
from models import ListOptions


def _relative(entries: list[str], root: Path) -> list[str]:
    """Strip the root prefix from listed paths."""
    prefix = f"{root}/"
    assert all(entry.startswith(prefix) for entry in entries)
    return [entry[len(prefix) :] for entry in entries]


def _write(path: Path, content: str = "x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_build_list_groups_entries_by_directory(tmp_path: Path) -> None:
    """Verify the default sort lists each directory's entries together."""
    _write(tmp_path / "b.txt")
    _write(tmp_path / "A.txt")
    _write(tmp_path / "sub" / "d")
    _write(tmp_path / "sub" / "c.txt")

    result = build_list(tmp_path)

    assert result.status == "complete"
    assert _relative(result.entries, tmp_path) == [
        "A.txt",
        "b.txt",
        "sub",
        "sub/c.txt",
        "sub/d",
    ]


def test_build_list_natural_sort(tmp_path: Path) -> None:
    """Verify natural sorting orders numbered files by value."""
    for name in ("file10", "file2", "file02", "file1"):
        _write(tmp_path / name)

    result = build_list(tmp_path, sort_method="natural")

    assert _relative(result.entries, tmp_path) == ["file1", "file02", "file2", "file10"]


def test_build_list_filters_by_type(tmp_path: Path) -> None:
    """Verify the type mask limits listed entries but not descent."""
    _write(tmp_path / "top.txt")
    _write(tmp_path / "sub" / "nested.txt")

    files = build_list(tmp_path, type_mask={"regular"})
    dirs = build_list(tmp_path, type_mask={"directory"})

    assert _relative(files.entries, tmp_path) == ["top.txt", "sub/nested.txt"]
    assert _relative(dirs.entries, tmp_path) == ["sub"]


def test_build_list_pattern_matches_base_name_only(tmp_path: Path) -> None:
    """Verify the name pattern never sees the containing directory path."""
    _write(tmp_path / "sub" / "a.txt")
    _write(tmp_path / "sub" / "sub.log")

    result = build_list(tmp_path, type_mask={"regular"}, name_pattern="sub")

    assert _relative(result.entries, tmp_path) == ["sub/sub.log"]


def test_build_list_pattern_options(tmp_path: Path) -> None:
    """Verify case sensitivity and the basic dialect are honored."""
    _write(tmp_path / "README")
    _write(tmp_path / "readme.md")
    _write(tmp_path / "a+b")

    insensitive = build_list(tmp_path, name_pattern="^readme")
    sensitive = build_list(
        tmp_path,
        name_pattern="^readme",
        options=ListOptions(pattern_case_sensitive=True),
    )
    basic = build_list(
        tmp_path,
        name_pattern="a+b",
        options=ListOptions(pattern_dialect="basic"),
    )

    assert _relative(insensitive.entries, tmp_path) == ["README", "readme.md"]
    assert _relative(sensitive.entries, tmp_path) == ["readme.md"]
    assert _relative(basic.entries, tmp_path) == ["a+b"]


def test_build_list_depth_limits(tmp_path: Path) -> None:
    """Verify depth 0 lists the start directory's own entries and depth 1 one level more."""
    _write(tmp_path / "a")
    _write(tmp_path / "sub" / "b")
    _write(tmp_path / "sub" / "deeper" / "c")

    flat = build_list(tmp_path, depth=0)
    one_level = build_list(tmp_path, depth=1)
    unlimited = build_list(tmp_path, depth=-1)

    assert _relative(flat.entries, tmp_path) == ["a", "sub"]
    assert _relative(one_level.entries, tmp_path) == ["a", "sub", "sub/b", "sub/deeper"]
    assert "sub/deeper/c" in _relative(unlimited.entries, tmp_path)


def test_build_list_appends_separator_to_directories(tmp_path: Path) -> None:
    """Verify directories get a trailing separator when requested."""
    _write(tmp_path / "a.txt")
    _write(tmp_path / "sub" / "b.txt")

    result = build_list(tmp_path, options=ListOptions(trailing_separator_on_dirs=True))

    assert _relative(result.entries, tmp_path) == ["a.txt", "sub/", "sub/b.txt"]


def test_build_list_cleans_start_directory(tmp_path: Path) -> None:
    """Verify repeated and trailing separators in the start path are collapsed."""
    _write(tmp_path / "a")

    result = build_list(f"{tmp_path}//")

    assert result.entries == [f"{tmp_path}/a"]


def test_build_list_unsorted_lists_children_before_their_directory(tmp_path: Path) -> None:
    """Verify the unsorted walk order finishes a directory before listing it."""
    _write(tmp_path / "sub" / "inner")

    result = build_list(tmp_path, sort_method="none")
    relative = _relative(result.entries, tmp_path)

    assert relative.index("sub/inner") < relative.index("sub")


def test_build_list_symlink_loop_is_not_followed_twice(tmp_path: Path) -> None:
    """Verify a followed link back to an ancestor is neither walked nor listed."""
    _write(tmp_path / "sub" / "file")
    os.symlink(tmp_path, tmp_path / "sub" / "loop")

    followed = build_list(tmp_path, options=ListOptions(follow_symlinks=True))
    not_followed = build_list(tmp_path)

    assert _relative(followed.entries, tmp_path) == ["sub", "sub/file"]
    assert _relative(not_followed.entries, tmp_path) == ["sub", "sub/file", "sub/loop"]


def test_build_list_follows_non_cyclic_directory_links(tmp_path: Path) -> None:
    """Verify a linked sibling directory is walked when links are followed."""
    _write(tmp_path / "real" / "file")
    os.symlink(tmp_path / "real", tmp_path / "link")

    result = build_list(tmp_path, options=ListOptions(follow_symlinks=True))

    assert _relative(result.entries, tmp_path) == ["link", "real", "link/file", "real/file"]


def test_build_list_dangling_symlink(tmp_path: Path, log_messages: list[str]) -> None:
    """Verify a dangling link is skipped when followed and listed otherwise."""
    os.symlink(tmp_path / "missing", tmp_path / "dangling")

    followed = build_list(tmp_path, options=ListOptions(follow_symlinks=True))
    not_followed = build_list(tmp_path, type_mask={"symlink"})

    assert followed.entries == []
    assert any(message.startswith("stat():") for message in log_messages)
    assert _relative(not_followed.entries, tmp_path) == ["dangling"]


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="named pipes not supported")
def test_build_list_classifies_fifos(tmp_path: Path) -> None:
    """Verify entry types only known after a stat are still filtered correctly."""
    os.mkfifo(tmp_path / "pipe")
    _write(tmp_path / "file")

    result = build_list(tmp_path, type_mask={"fifo"})

    assert _relative(result.entries, tmp_path) == ["pipe"]


def test_build_list_size_ceiling_yields_partial_result(tmp_path: Path) -> None:
    """Verify reaching max_entries returns a partial list instead of failing."""
    for index in range(6):
        _write(tmp_path / f"file{index}")

    result = build_list(tmp_path, max_entries=4)

    assert result.status == "partial"
    assert result.is_partial
    assert len(result) == 4


def test_build_list_exact_ceiling_is_complete(tmp_path: Path) -> None:
    """Verify a tree with exactly max_entries entries is not partial."""
    for index in range(3):
        _write(tmp_path / f"file{index}")

    result = build_list(tmp_path, max_entries=3)

    assert result.status == "complete"
    assert len(result) == 3


def test_build_list_walks_deep_trees(tmp_path: Path) -> None:
    """Verify deeply nested directories are walked without recursion limits."""
    deepest = tmp_path.joinpath(*["d"] * 60)
    _write(deepest / "leaf")

    result = build_list(tmp_path, type_mask={"regular"})

    assert result.entries == [f"{deepest}/leaf"]


def test_build_list_rejects_invalid_input(tmp_path: Path) -> None:
    """Verify invalid arguments fail before any traversal."""
    _write(tmp_path / "file")

    with pytest.raises(FileNotFoundError):
        build_list(tmp_path / "missing")
    with pytest.raises(NotADirectoryError):
        build_list(tmp_path / "file")
    with pytest.raises(PatternError):
        build_list(tmp_path, name_pattern="(")
    with pytest.raises(ValueError):
        build_list(tmp_path, depth=-2)
    with pytest.raises(ValueError):
        build_list(tmp_path, sort_method="random")
    with pytest.raises(ValueError):
        build_list(tmp_path, type_mask={"file"})
    with pytest.raises(ValueError):
        build_list("")


def test_destroy_list_clears_entries_and_is_idempotent(tmp_path: Path) -> None:
    """Verify destroy_list empties a list and tolerates repeated calls."""
    _write(tmp_path / "a")
    result = build_list(tmp_path)

    destroy_list(result)
    destroy_list(result)
    destroy_list(None)

    assert result.entries == []
    assert result.to_dict() == {"status": "complete", "count": 0, "entries": []}


def test_build_list_is_stable_across_runs(tmp_path: Path) -> None:
    """Verify repeated builds of the same tree return identical lists."""
    for name in ("b", "a10", "a9", "A9", "sub/x", "sub/X", "sub/deep/y"):
        _write(tmp_path / name)

    first = build_list(tmp_path, sort_method="natural")
    second = build_list(tmp_path, sort_method="natural")

    assert first.entries == second.entries
    assert _relative(first.entries, tmp_path) == [
        "a9",
        "A9",
        "a10",
        "b",
        "sub",
        "sub/deep",
        "sub/x",
        "sub/X",
        "sub/deep/y",
    ]
