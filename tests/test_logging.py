"""
Tests for logging utilities.
"""

import json
import logging
import logging.handlers
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

import uncommitted_scanner.utils.logging as logging_module
from uncommitted_scanner.utils.logging import (
    ROOT_LOGGER_NAME,
    ComponentLogger,
    LoggingManager,
    LogLevel,
    get_logger,
    setup_logging,
)


class TestComponentLogger:
    """Test cases for ComponentLogger."""

    def test_component_logger_initialization(self):
        """Test component logger initialization."""
        logger = ComponentLogger("git.gateway", {"repo": "/repo"})

        assert logger.component_name == "git.gateway"
        assert logger.extra_context == {"repo": "/repo"}
        assert logger.logger.name == "uncommitted_scanner.git.gateway"

    def test_format_message(self):
        """Test message formatting."""
        logger = ComponentLogger("test_component", {"context_key": "context_value"})

        formatted = logger._format_message("Test message", {"extra_key": "extra_value"})

        assert formatted["component"] == "test_component"
        assert formatted["message"] == "Test message"
        assert formatted["context_key"] == "context_value"
        assert formatted["extra_key"] == "extra_value"
        assert "timestamp" in formatted

    def test_log_methods(self):
        """Test different log level methods."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = Mock()
            mock_get_logger.return_value = mock_logger

            logger = ComponentLogger("test_component")

            logger.debug("Debug message", {"key": "value"})
            mock_logger.debug.assert_called_once()

            logger.info("Info message")
            mock_logger.info.assert_called_once()

            logger.warning("Warning message")
            mock_logger.warning.assert_called_once()

            logger.error("Error message", exc_info=True)
            mock_logger.error.assert_called_once()

            logger.critical("Critical message")
            mock_logger.critical.assert_called_once()

    def test_debug_skipped_when_disabled(self):
        """Debug payloads are not built when debug logging is off."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = Mock()
            mock_logger.isEnabledFor.return_value = False
            mock_get_logger.return_value = mock_logger

            ComponentLogger("test_component").debug("Debug message")

            mock_logger.isEnabledFor.assert_called_once_with(logging.DEBUG)
            mock_logger.debug.assert_not_called()

    def test_non_serializable_values_are_stringified(self):
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = Mock()
            mock_get_logger.return_value = mock_logger

            ComponentLogger("test_component").info("Scanned", {"path": Path("/repo")})

            parsed = json.loads(mock_logger.info.call_args[0][0])
            assert parsed["path"] == "/repo"

    def test_exception_logging(self):
        """Test exception logging with structured format."""
        with patch("logging.getLogger") as mock_get_logger:
            mock_logger = Mock()
            mock_get_logger.return_value = mock_logger

            logger = ComponentLogger("test_component")
            logger.error("Error occurred", exc_info=True)

            mock_logger.error.assert_called_once()
            assert mock_logger.error.call_args[1].get("exc_info") is True

            parsed = json.loads(mock_logger.error.call_args[0][0])
            assert parsed["exception"] is True


class TestLoggingManager:
    """Test cases for LoggingManager."""

    def test_stderr_only_by_default(self):
        """Without a log directory nothing is written to disk."""
        manager = LoggingManager()

        root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        assert manager.log_dir is None
        assert manager.log_level == logging.WARNING
        assert root_logger.propagate is False
        assert len(root_logger.handlers) == 1
        assert root_logger.handlers[0].stream is sys.stderr

    @patch("logging.handlers.RotatingFileHandler")
    def test_log_directory_adds_rotating_files(self, mock_handler, tmp_path):
        log_dir = tmp_path / "logs"

        manager = LoggingManager(log_level="DEBUG", log_dir=str(log_dir))

        assert manager.log_dir == log_dir
        assert manager.log_level == logging.DEBUG
        assert log_dir.exists()
        assert mock_handler.call_count == 2
        created = [call[0][0] for call in mock_handler.call_args_list]
        assert created == [log_dir / "uncommitted_scanner.log", log_dir / "errors.log"]

    def test_repeated_setup_does_not_duplicate_handlers(self):
        LoggingManager()
        LoggingManager()

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_get_component_logger(self):
        """Test getting component loggers."""
        manager = LoggingManager()

        logger1 = manager.get_component_logger("test_component")
        logger2 = manager.get_component_logger("test_component")
        logger3 = manager.get_component_logger("other_component")

        assert logger1 is logger2
        assert logger1 is not logger3

    def test_get_component_logger_with_context(self):
        """Test getting component loggers with different contexts."""
        manager = LoggingManager()

        logger1 = manager.get_component_logger("test_component", {"key": "value1"})
        logger2 = manager.get_component_logger("test_component", {"key": "value2"})

        assert logger1 is not logger2

    def test_error_file_only_receives_errors(self, tmp_path):
        """The errors file keeps ERROR level whatever the configured level."""
        LoggingManager(log_level="DEBUG", log_dir=str(tmp_path))

        handlers = logging.getLogger(ROOT_LOGGER_NAME).handlers
        levels = {
            Path(handler.baseFilename).name: handler.level
            for handler in handlers
            if isinstance(handler, logging.handlers.RotatingFileHandler)
        }
        assert levels == {"uncommitted_scanner.log": logging.DEBUG, "errors.log": logging.ERROR}
        assert all(handler.formatter is not None for handler in handlers)


class TestGlobalFunctions:
    """Test cases for global logging functions."""

    def test_setup_logging(self):
        """Test global logging setup."""
        manager = setup_logging(log_level="INFO")

        assert isinstance(manager, LoggingManager)
        assert manager.log_level == logging.INFO
        assert logging_module._logging_manager is manager

    def test_get_logger(self):
        """Test getting logger through global function."""
        setup_logging()

        logger = get_logger("repository.scanner")

        assert isinstance(logger, ComponentLogger)
        assert logger.component_name == "repository.scanner"

    def test_get_logger_without_setup(self):
        """Test getting logger without explicit setup."""
        logging_module._logging_manager = None

        logger = get_logger("test_component")

        assert isinstance(logger, ComponentLogger)
        assert logging_module._logging_manager is not None


class TestLogLevel:
    """Test cases for LogLevel enum."""

    def test_log_level_values(self):
        """Test log level enum values."""
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.INFO.value == "INFO"
        assert LogLevel.WARNING.value == "WARNING"
        assert LogLevel.ERROR.value == "ERROR"
        assert LogLevel.CRITICAL.value == "CRITICAL"
