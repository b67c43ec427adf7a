"""Logging utilities for optlib.

Every module logs through a cached ``optlib.*`` logger writing to stderr.
The default level is WARNING and can be overridden with the
``OPTLIB_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

_LEVEL_ENV_VAR = "OPTLIB_LOG_LEVEL"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _parse_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return int(level)


_DEFAULT_LEVEL = _parse_level(os.getenv(_LEVEL_ENV_VAR, "WARNING"))
_default_format = _DEFAULT_FORMAT
_default_stream: Optional[TextIO] = None

# Module-level logger cache
_loggers: dict[str, logging.Logger] = {}


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(_default_stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_default_format))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached to avoid duplicate handlers. The logger name should
    typically be ``__name__`` from the calling module.

    Args:
        name: Logger name (typically ``__name__``). If None, returns the
            package logger ``optlib``.

    Returns:
        Configured logger instance.

    Example:
        >>> from optlib.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Starting line search")
    """
    if name is None:
        name = "optlib"

    logger_name = name if name == "optlib" or name.startswith("optlib.") else f"optlib.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)

    # Only configure if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the logging level for all optlib loggers.

    Args:
        level: Logging level (``logging.DEBUG``, ``logging.INFO``, ...) or its
            name as a string.

    Example:
        >>> import logging
        >>> from optlib.logging import set_log_level
        >>> set_log_level(logging.DEBUG)
    """
    level = _parse_level(level)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    global _DEFAULT_LEVEL
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure logging for optlib.

    Replaces the handlers of every existing optlib logger and sets the
    defaults used by loggers created afterwards.

    Args:
        level: Logging level (default: WARNING).
        format_string: Custom format string. If None, uses the default.
        stream: Output stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL, _default_format, _default_stream

    _DEFAULT_LEVEL = _parse_level(level)
    _default_format = format_string or _DEFAULT_FORMAT
    _default_stream = stream

    for logger in _loggers.values():
        logger.setLevel(_DEFAULT_LEVEL)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(_DEFAULT_LEVEL))


__all__ = ["configure_logging", "get_logger", "set_log_level"]
