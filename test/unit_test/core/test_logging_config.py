"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
scenarios including various log levels, formats, and file logging options.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from promptframe_ai.core import logging_config
from promptframe_ai.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    _get_logging_config,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    return next(h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler)


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("debug", logging.DEBUG),
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        """Test setup_logging configures correct log level."""
        setup_logging(log_level=log_level, enable_file=False)
        assert _console_handler().level == expected_level

    def test_root_logger_captures_everything(self):
        setup_logging(log_level="ERROR", enable_file=False)
        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    """Test setup_logging with different log formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        """Test setup_logging configures correct format."""
        setup_logging(log_format=log_format, enable_file=False)
        assert _console_handler().formatter._fmt == expected_format

    def test_handlers_are_replaced_not_duplicated(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        stream_handlers = [h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler]
        assert len(stream_handlers) == 1


class TestSetupLoggingFile:
    """Test file logging."""

    def test_file_handler_when_enabled(self, tmp_path: Path):
        log_dir = tmp_path / "logs"
        with patch.object(logging_config, "ENABLE_FILE_LOGGING", True), patch.object(
            logging_config, "LOG_FILE_DIR", str(log_dir)
        ):
            setup_logging(enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        try:
            assert len(file_handlers) == 1
            assert Path(file_handlers[0].baseFilename) == log_dir / "promptframe_ai.log"
            assert file_handlers[0].level == logging.DEBUG
        finally:
            for handler in file_handlers:
                logging.getLogger().removeHandler(handler)
                handler.close()

    def test_no_file_handler_when_disabled_by_caller(self, tmp_path: Path):
        with patch.object(logging_config, "ENABLE_FILE_LOGGING", True), patch.object(
            logging_config, "LOG_FILE_DIR", str(tmp_path)
        ):
            setup_logging(enable_file=False)
        assert not [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]


class TestModuleLogLevels:
    def test_module_levels_are_applied(self):
        setup_logging(enable_file=False)
        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_noisy_libraries_are_quieted(self):
        assert MODULE_LOG_LEVELS["sqlalchemy.engine"] == "WARNING"
        assert MODULE_LOG_LEVELS["openai"] == "WARNING"


class TestLoggingEnvironment:
    """Test reading the logging configuration from environment variables."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = _get_logging_config()
        assert config == {
            "log_level": "INFO",
            "log_format": "detailed",
            "log_file_dir": "logs",
            "enable_file_logging": False,
        }

    def test_overrides(self):
        env = {
            "PROMPTFRAME_AI_LOG_LEVEL": "debug",
            "LOG_FORMAT": "json",
            "LOG_FILE_DIR": "/var/log/promptframe",
            "ENABLE_FILE_LOGGING": "yes",
        }
        with patch.dict(os.environ, env, clear=True):
            config = _get_logging_config()
        assert config["log_level"] == "DEBUG"
        assert config["log_format"] == "json"
        assert config["log_file_dir"] == "/var/log/promptframe"
        assert config["enable_file_logging"] is True


def test_get_logger_returns_named_logger():
    logger = get_logger("promptframe_ai.studio.runner")
    assert logger is logging.getLogger("promptframe_ai.studio.runner")
