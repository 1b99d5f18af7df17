"""
Logging configuration for c8ctl.

This module handles the centralized logging configuration including:
- Console output on stderr, so stdout stays clean for JSON output
- Optional rotating file output
- Global debug flag mechanism
- Logger retrieval with consistent formatting
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Global debug flag
_DEBUG_MODE = False

# Component-specific log levels
_COMPONENT_LOG_LEVELS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
}

# Default log format with detailed context
_DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s"

# Simplified format for console
_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Color formatting for console output
_LOG_COLORS = {
    "DEBUG": "\033[94m",  # Blue
    "INFO": "\033[92m",  # Green
    "WARNING": "\033[93m",  # Yellow
    "ERROR": "\033[91m",  # Red
    "CRITICAL": "\033[91m\033[1m",  # Bold Red
    "RESET": "\033[0m",  # Reset
}


class ColorFormatter(logging.Formatter):
    """Formatter that adds colors to log levels for console output."""

    def format(self, record):
        levelname = record.levelname
        if levelname in _LOG_COLORS:
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = (
                f"{_LOG_COLORS[levelname]}{levelname}{_LOG_COLORS['RESET']}"
            )
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name and apply component-specific levels.

    Args:
        name: Logger name, typically __name__ of the calling module

    Returns:
        A configured logger instance
    """
    logger = logging.getLogger(name)

    for component, level in _COMPONENT_LOG_LEVELS.items():
        if name.startswith(component):
            logger.setLevel(level)
            break

    return logger


def set_debug_mode(enabled: bool) -> None:
    """
    Set the global debug mode flag.

    Args:
        enabled: True to enable debug mode, False to disable
    """
    global _DEBUG_MODE
    old_value = _DEBUG_MODE
    _DEBUG_MODE = enabled

    if old_value != _DEBUG_MODE:
        root_logger = logging.getLogger("c8ctl")
        if enabled:
            root_logger.setLevel(logging.DEBUG)
            root_logger.debug("Debug mode enabled")
        else:
            root_logger.setLevel(logging.WARNING)


def is_debug_mode() -> bool:
    """
    Check if debug mode is currently enabled.

    Returns:
        True if debug mode is enabled, False otherwise
    """
    return _DEBUG_MODE


def configure_logging(
    log_dir: Optional[Union[str, Path]] = None,
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
    max_file_size_mb: int = 10,
    backup_count: int = 5,
    config: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Configure the central logging system with console and file outputs.

    Args:
        log_dir: Directory to store log files; file logging is off when None
        console_level: Logging level for console output
        file_level: Logging level for file output
        max_file_size_mb: Maximum size of each log file in MB before rotation
        backup_count: Number of backup log files to keep
        config: Additional configuration options
    """
    if config is None:
        config = {}

    debug_mode = config.get("debug_mode", is_debug_mode())
    if debug_mode:
        console_level = logging.DEBUG

    c8ctl_logger = logging.getLogger("c8ctl")
    c8ctl_logger.setLevel(logging.DEBUG)
    c8ctl_logger.propagate = False

    # Clear any existing handlers to avoid duplicates if reconfigured
    for handler in c8ctl_logger.handlers[:]:
        c8ctl_logger.removeHandler(handler)
        handler.close()

    # Console Handler (with color)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_format = config.get("console_format", _CONSOLE_FORMAT)
    console_handler.setFormatter(ColorFormatter(console_format))
    c8ctl_logger.addHandler(console_handler)

    # File Handler (if log directory is provided)
    if log_dir:
        log_path = Path(log_dir) if isinstance(log_dir, str) else log_dir
        log_path.mkdir(exist_ok=True, parents=True)
        log_file = log_path / "c8ctl.log"

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(file_level)
        file_format = config.get("file_format", _DEFAULT_FORMAT)
        file_handler.setFormatter(logging.Formatter(file_format))
        c8ctl_logger.addHandler(file_handler)

    set_debug_mode(debug_mode)

    c8ctl_logger.debug(
        f"c8ctl logging initialized (console: {logging.getLevelName(console_level)}, "
        f"files: {log_dir or 'disabled'})"
    )
