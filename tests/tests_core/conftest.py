"""
Shared fixtures for the core package tests.

Key fixtures:
- restore_root_logger: snapshots the root logger and restores it after the test.
"""

import logging

import pytest


@pytest.fixture
def restore_root_logger():
    """
    Save root logger handlers and level, yield, then close any handlers the
    test added and put the originals back.
    """
    root_logger = logging.getLogger()
    saved_handlers = list(root_logger.handlers)
    saved_level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers:
        if handler not in saved_handlers:
            handler.close()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)
