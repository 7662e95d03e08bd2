"""Shared fixtures for file list tests."""

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture library debug messages emitted while the test runs."""
    messages: list[str] = []
    logger.enable("filelist")
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="DEBUG",
        filter="filelist",
    )
    yield messages
    logger.remove(handler_id)
    logger.disable("filelist")
