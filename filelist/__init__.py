"""Hierarchically sorted file lists."""

from loguru import logger

from filelist.builder import build_list, destroy_list
from filelist.compare import (
    compare_ascii,
    compare_collate,
    compare_default,
    compare_natural,
    get_comparator,
    sort_paths,
)
from filelist.errors import FileListError, MergeOverflowError, PatternError
from filelist.filesystem import LocalFilesystem
from filelist.log import LOGGER_NAME, configure_logging
from filelist.merge import merge_lists

logger.disable(LOGGER_NAME)

__all__ = [
    "FileListError",
    "LocalFilesystem",
    "MergeOverflowError",
    "PatternError",
    "build_list",
    "compare_ascii",
    "compare_collate",
    "compare_default",
    "compare_natural",
    "configure_logging",
    "destroy_list",
    "get_comparator",
    "merge_lists",
    "sort_paths",
]
