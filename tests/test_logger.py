"""Tests for logger module."""

import logging
from unittest.mock import patch

from franky.util.logger import (
    DATE_FORMAT,
    LOG_FORMAT,
    NOISY_LOGGERS,
    ColorFormatter,
    PromptToolkitHandler,
    get_log_filepath,
    get_logger,
    handle_exception,
    should_use_color,
)


class TestShouldUseColor:
    """Tests for should_use_color function."""

    @patch("sys.stderr.isatty")
    def test_should_use_color_tty(self, mock_isatty):
        mock_isatty.return_value = True
        assert should_use_color() is True

    @patch("sys.stderr.isatty")
    def test_should_use_color_exception(self, mock_isatty):
        """Color is disabled when the stream cannot be inspected."""
        mock_isatty.side_effect = Exception("Error")
        assert should_use_color() is False


class TestColorFormatter:
    def test_error_records_are_wrapped_in_red(self):
        formatter = ColorFormatter(LOG_FORMAT, datefmt=DATE_FORMAT)
        record = logging.LogRecord("test", logging.ERROR, "test.py", 10, "Error message", (), None, func="test_func")

        formatted = formatter.format(record)

        assert formatted.startswith("\033[31m")
        assert "Error message" in formatted


class TestGetLogger:
    def test_same_name_returns_same_logger(self):
        assert get_logger("test_same_logger") is get_logger("test_same_logger")

    def test_logger_has_console_and_file_handlers(self):
        logger = get_logger("test_handlers_logger")

        assert logger.propagate is False
        assert any(isinstance(handler, PromptToolkitHandler) for handler in logger.handlers)
        assert any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)

    def test_session_uses_one_log_file(self):
        assert get_log_filepath() == get_log_filepath()
        assert get_log_filepath().suffix == ".log"


def test_noisy_loggers_are_silenced():
    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR


def test_handle_exception_passes_keyboard_interrupt_through():
    with patch("sys.__excepthook__") as default_hook:
        handle_exception(KeyboardInterrupt, KeyboardInterrupt(), None)

    default_hook.assert_called_once()


def test_handle_exception_logs_other_errors():
    with patch("logging.error") as log_error:
        error = ValueError("bad")
        handle_exception(ValueError, error, None)

    log_error.assert_called_once()
