"""Shared fixtures."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """configure_logging() rewires the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    ours = logging.getLogger('visualine')
    ours_level = ours.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    ours.setLevel(ours_level)
