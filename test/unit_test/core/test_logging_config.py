"""Unit tests for logging configuration module.

Tests verify that the logging configuration functions work correctly with different
log levels, formats, and file logging options.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from studentos.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    return next(
        h
        for h in logging.getLogger().handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    )


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(enable_file=False)


class TestSetupLoggingLevels:
    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("error", logging.ERROR),
            ("critical", logging.CRITICAL),
        ],
    )
    def test_console_level(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)
        assert _console_handler().level == expected_level

    def test_root_captures_everything(self):
        setup_logging(log_level="ERROR", enable_file=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_module_levels_applied(self):
        setup_logging(enable_file=False)
        for module_name, module_level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(module_level)

    def test_noisy_libraries_quieted(self):
        assert MODULE_LOG_LEVELS["sqlalchemy.engine"] == "WARNING"
        assert MODULE_LOG_LEVELS["passlib"] == "ERROR"


class TestSetupLoggingFormats:
    @pytest.mark.parametrize(
        "log_format,expected_format",
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("json", JSON_FORMAT)],
    )
    def test_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)
        assert _console_handler().formatter._fmt == expected_format

    def test_unknown_format_falls_back_to_detailed(self):
        setup_logging(log_format="fancy", enable_file=False)
        assert _console_handler().formatter._fmt == DETAILED_FORMAT

    def test_date_format(self):
        setup_logging(enable_file=False)
        assert _console_handler().formatter.datefmt == "%Y-%m-%d %H:%M:%S"


class TestSetupLoggingHandlers:
    def test_repeated_setup_does_not_duplicate_handlers(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)
        assert len(logging.getLogger().handlers) == 1

    def test_file_logging(self, tmp_path: Path):
        with (
            patch("studentos.core.logging_config.LOG_FILE_DIR", str(tmp_path)),
            patch("studentos.core.logging_config.ENABLE_FILE_LOGGING", True),
        ):
            setup_logging(enable_file=True)

        file_handler = next(h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler))
        assert file_handler.level == logging.DEBUG
        assert Path(file_handler.baseFilename) == tmp_path / "studentos.log"
        file_handler.close()

    def test_file_logging_needs_env_switch(self, tmp_path: Path):
        with (
            patch("studentos.core.logging_config.LOG_FILE_DIR", str(tmp_path)),
            patch("studentos.core.logging_config.ENABLE_FILE_LOGGING", False),
        ):
            setup_logging(enable_file=True)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)


def test_get_logger_returns_named_logger():
    logger = get_logger("studentos.server.api.v1.jobs")
    assert logger.name == "studentos.server.api.v1.jobs"
    assert logger is logging.getLogger("studentos.server.api.v1.jobs")
