# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `tedit.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels and log file name.
- Keeps console logging off unless `log_to_console` is set.
- Enables the key-event trace only through the environment variable.

Every test runs in a temporary working directory and restores the root logger
afterwards.
"""

import logging
import logging.handlers
from typing import Generator

import pytest

from tedit.utils import logging_config


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch) -> Generator[None, None, None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_config.KEYTRACE_ENV, raising=False)
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in saved_handlers:
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_setup_logging_creates_handlers() -> None:
    """`setup_logging` should add rotating file handlers with proper levels."""
    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    names = {type(h).__name__ for h in root.handlers}

    assert "RotatingFileHandler" in names
    # Exactly two handlers: main file + error file
    assert len(root.handlers) == 2
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR


def test_console_handler_is_opt_in() -> None:
    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "INFO"}})
    root = logging.getLogger()
    stream_handlers = [
        h for h in root.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]
    assert len(stream_handlers) == 1
    assert stream_handlers[0].level == logging.INFO


def test_log_file_location_is_configurable(tmp_path) -> None:
    target = tmp_path / "logs" / "custom.log"
    logging_config.setup_logging({"logging": {"log_file": str(target)}})
    file_handlers = [
        h for h in logging.getLogger().handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(target)
    assert target.parent.is_dir()


def test_defaults_without_config(tmp_path) -> None:
    logging_config.setup_logging(None)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert (tmp_path / "editor.log").exists()


def test_repeated_setup_replaces_handlers() -> None:
    logging_config.setup_logging({})
    logging_config.setup_logging({})
    assert len(logging.getLogger().handlers) == 1


def test_key_trace_disabled_by_default() -> None:
    logging_config.setup_logging({})
    assert logging_config.KEY_LOGGER.disabled is True


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(logging_config.KEYTRACE_ENV, "1")
    logging_config.setup_logging({})
    key_logger = logging_config.KEY_LOGGER
    assert key_logger.disabled is False
    assert key_logger.propagate is False
    key_logger.debug("trace line")
    for handler in key_logger.handlers:
        handler.flush()
    assert "trace line" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")
    for handler in key_logger.handlers:
        handler.close()
    key_logger.handlers = []
