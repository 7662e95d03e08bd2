"""Loguru configuration for applications embedding the library."""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

LOGGER_NAME = "filelist"


def configure_logging(verbose: bool, sink: TextIO = sys.stderr) -> int:
    """Enable library messages and route them to ``sink``.

    Verbose mode shows per-entry debug messages (skipped entries, loops,
    device boundaries, buffer growth); otherwise only warnings are shown.

    Returns:
        The loguru handler id, for ``logger.remove``.
    """
    logger.enable(LOGGER_NAME)
    return logger.add(
        sink,
        level="DEBUG" if verbose else "WARNING",
        format="FILE_LIST: {message}",
        filter=LOGGER_NAME,
    )
