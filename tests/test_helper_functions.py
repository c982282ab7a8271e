"""Tests for logging configuration."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from toolchat.cli.helper_functions import configure_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_file_logging_creates_directory(tmp_path: Path, restore_root_logger) -> None:
    log_file = tmp_path / "logs" / "toolchat.log"

    configure_logging("debug", str(log_file))
    logging.getLogger("toolchat.test").info("connected")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
    for handler in root.handlers:
        handler.flush()
    assert "connected" in log_file.read_text(encoding="utf-8")
    assert logging.getLogger("mcp").level == logging.WARNING


def test_stdout_only_when_no_file(restore_root_logger) -> None:
    configure_logging("INFO", "")
    assert not any(isinstance(h, RotatingFileHandler) for h in restore_root_logger.handlers)
