"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers

from taskman_cli.utils.logger import close_logger, get_logger, log_file_path


def test_get_logger_creates_log_file(isolated_dirs):
    logger = get_logger()

    assert (isolated_dirs / "logs" / "taskman.log").exists()
    assert isinstance(logger, logging.Logger)


def test_get_logger_returns_singleton():
    assert get_logger() is get_logger()


def test_logger_does_not_propagate():
    assert get_logger().propagate is False


def test_messages_reach_the_file(isolated_dirs):
    get_logger().error("delete of #%s failed", 3)

    text = (isolated_dirs / "logs" / "taskman.log").read_text()
    assert "ERROR" in text
    assert "delete of #3 failed" in text


def test_file_handler_added_when_other_handlers_exist(isolated_dirs):
    app_logger = logging.getLogger("taskman_cli")
    capture = logging.NullHandler()
    app_logger.addHandler(capture)
    try:
        get_logger().warning("still written")

        text = (isolated_dirs / "logs" / "taskman.log").read_text()
        assert "still written" in text
        assert capture in app_logger.handlers
    finally:
        app_logger.removeHandler(capture)


def test_close_logger_keeps_foreign_handlers():
    app_logger = logging.getLogger("taskman_cli")
    capture = logging.NullHandler()
    app_logger.addHandler(capture)
    try:
        get_logger()
        close_logger()

        assert capture in app_logger.handlers
        assert not any(
            isinstance(h, logging.handlers.RotatingFileHandler)
            for h in app_logger.handlers
        )
    finally:
        app_logger.removeHandler(capture)


def test_log_file_path_uses_log_dir(isolated_dirs):
    assert log_file_path() == isolated_dirs / "logs" / "taskman.log"
