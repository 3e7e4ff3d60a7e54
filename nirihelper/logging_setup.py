"""Logging setup and utilities."""

import logging
import os
import sys
from typing import TextIO

__all__ = [
    "LogObjects",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
]

_ESC = "\x1b["
RESET = f"{_ESC}0m"


class _DebugState:
    """Container for mutable debug state to avoid global statement."""

    value: bool = bool(os.environ.get("DEBUG"))


_debug_state = _DebugState()


def is_debug() -> bool:
    """Return the current debug state."""
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _debug_state.value = value


def should_colorize(stream: TextIO | None = None) -> bool:
    """Determine if ANSI colors should be used for the given stream.

    Respects NO_COLOR, FORCE_COLOR and TTY detection (no colors when piping).

    Args:
        stream: The output stream to check. Defaults to sys.stderr.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class LogStyles:
    """ANSI codes for log levels."""

    WARNING = "33;2"
    ERROR = "31;2"
    CRITICAL = "31;1"


class LogObjects:
    """Reusable objects for loggers."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """A custom formatter, adding colors based on log level."""

    def __init__(self, colors: bool) -> None:
        super().__init__()
        log_format = r"%(name)12s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"

        def style(code: str) -> logging.Formatter:
            if colors:
                return logging.Formatter(f"{_ESC}{code}m{log_format}{RESET}")
            return logging.Formatter(log_format)

        plain = logging.Formatter(log_format)
        self._formatters = {
            logging.DEBUG: plain,
            logging.INFO: plain,
            logging.WARNING: style(LogStyles.WARNING),
            logging.ERROR: style(LogStyles.ERROR),
            logging.CRITICAL: style(LogStyles.CRITICAL),
        }

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._formatters[logging.INFO]).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter(should_colorize()))
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "nirihelper", level: int | None = None) -> logging.Logger:
    """Return a named logger.

    Args:
        name (str): logger's name
        level (int): logger's level (auto if not set)

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        logger.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    else:
        logger.setLevel(level)
    logger.propagate = False
    logger.handlers = list(LogObjects.handlers)
    logger.debug('Logger "%s" initialized', name)
    return logger
