"""Tests for console/file logging setup."""
from __future__ import annotations

import logging

import colorlog
import pytest

from openrouter_catalog.logging_setup import LIBRARY_LOGGER, setup_logging


@pytest.fixture
def restore_library_logger():
    logger = logging.getLogger(LIBRARY_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def test_console_handler_is_colorized(restore_library_logger) -> None:
    logger = setup_logging(logging.DEBUG)
    assert logger is restore_library_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, colorlog.ColoredFormatter)
    assert logging.getLogger("httpx").level == logging.WARNING


def test_file_handler_added(tmp_path, restore_library_logger) -> None:
    logger = setup_logging(log_dir=tmp_path / "logs")
    logger.info("hello catalog")
    for handler in logger.handlers:
        handler.flush()
    assert "hello catalog" in (tmp_path / "logs" / "catalog.log").read_text(encoding="utf-8")


def test_repeated_setup_does_not_duplicate_handlers(restore_library_logger) -> None:
    setup_logging()
    logger = setup_logging()
    assert len(logger.handlers) == 1
