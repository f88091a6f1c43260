"""
Structured logging utilities for the uncommitted changes scanner.

Every component logs JSON payloads through a ComponentLogger. Handlers hang
off a single package logger: stderr always, so the report on stdout stays
clean, and rotating files only when a log directory is configured.
"""

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, Optional

ROOT_LOGGER_NAME = "uncommitted_scanner"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAIN_LOG_FILE = "uncommitted_scanner.log"
ERROR_LOG_FILE = "errors.log"
MEGABYTE = 1024 * 1024


class LogLevel(Enum):
    """Accepted names for the log_level setting."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ComponentLogger:
    """
    JSON logger bound to one scanner component.

    Each call produces a single line holding a timestamp, the component name,
    the message, the logger's fixed context and any per-call extras.
    """

    def __init__(self, component_name: str, extra_context: Optional[Dict[str, Any]] = None):
        """
        Args:
            component_name: Dotted component name, e.g. 'git.gateway'
            extra_context: Keys merged into every payload from this logger
        """
        self.component_name = component_name
        self.extra_context = extra_context or {}
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{component_name}")

    def _format_message(self, message: str, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        payload = {
            "timestamp": datetime.now().isoformat(),
            "component": self.component_name,
            "message": message,
        }
        payload.update(self.extra_context)
        payload.update(extra or {})
        return payload

    def _write(
        self,
        log_method: Callable[..., None],
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool = False,
    ):
        payload = self._format_message(message, extra)
        if exc_info:
            payload["exception"] = True
        # default=str covers paths, enums and datetimes in extras
        log_method(json.dumps(payload, default=str), exc_info=exc_info)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        # Skip payload serialization entirely when debug is off
        if self.logger.isEnabledFor(logging.DEBUG):
            self._write(self.logger.debug, message, extra)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._write(self.logger.info, message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self._write(self.logger.warning, message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self._write(self.logger.error, message, extra, exc_info)

    def critical(self, message: str, extra: Optional[Dict[str, Any]] = None, exc_info: bool = False):
        self._write(self.logger.critical, message, extra, exc_info)


class LoggingManager:
    """
    Owns the handlers of the package logger and caches component loggers.

    Building a manager replaces whatever handlers an earlier one installed,
    so repeated setup never duplicates output.
    """

    def __init__(self, log_level: str = "WARNING", log_dir: Optional[str] = None):
        """
        Args:
            log_level: Level name applied to the package logger
            log_dir: Directory for rotating log files; None writes nothing to disk
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = getattr(logging, log_level.upper())
        self.component_loggers: Dict[str, ComponentLogger] = {}

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._install_handlers()

    def _rotating_file(self, file_name: str, level: int, max_bytes: int, backup_count: int):
        handler = logging.handlers.RotatingFileHandler(
            self.log_dir / file_name, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setLevel(level)
        return handler

    def _install_handlers(self):
        package_logger = logging.getLogger(ROOT_LOGGER_NAME)
        package_logger.setLevel(self.log_level)
        package_logger.propagate = False

        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(self.log_level)
        handlers = [console]

        if self.log_dir is not None:
            handlers.append(self._rotating_file(MAIN_LOG_FILE, self.log_level, 5 * MEGABYTE, 3))
            handlers.append(self._rotating_file(ERROR_LOG_FILE, logging.ERROR, MEGABYTE, 2))

        formatter = logging.Formatter(LOG_FORMAT)
        for handler in handlers:
            handler.setFormatter(formatter)
            package_logger.addHandler(handler)

    def get_component_logger(self, component_name: str, extra_context: Optional[Dict[str, Any]] = None) -> ComponentLogger:
        """Return the cached logger for this component and context, creating it on first use."""
        cache_key = f"{component_name}_{hash(str(extra_context))}"

        if cache_key not in self.component_loggers:
            self.component_loggers[cache_key] = ComponentLogger(component_name, extra_context)

        return self.component_loggers[cache_key]


_logging_manager: Optional[LoggingManager] = None


def setup_logging(log_level: str = "WARNING", log_dir: Optional[str] = None) -> LoggingManager:
    """Install a fresh global LoggingManager and return it."""
    global _logging_manager
    _logging_manager = LoggingManager(log_level, log_dir)
    return _logging_manager


def get_logger(component_name: str, extra_context: Optional[Dict[str, Any]] = None) -> ComponentLogger:
    """
    Get a component logger from the global manager.

    Falls back to stderr-only WARNING logging when setup_logging has not run.
    """
    if _logging_manager is None:
        setup_logging()

    return _logging_manager.get_component_logger(component_name, extra_context)
