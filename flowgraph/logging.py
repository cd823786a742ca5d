"""Centralized logging configuration for flowgraph.

Every module obtains its logger through :func:`get_logger` so that all output
flows through a single handler attached to the ``flowgraph`` logger.
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER_NAME = "flowgraph"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Set once the package logger has its handler attached.
_ROOT_LOGGER_CONFIGURED = False


def _level_from_env(default: int) -> int:
    """Resolve the initial level from ``FLOWGRAPH_LOG_LEVEL`` if it is set."""
    name = os.environ.get("FLOWGRAPH_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def setup_root_logger(
    level: Optional[int] = None,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Attach a single handler to the ``flowgraph`` logger.

    Subsequent calls are no-ops until :func:`reset_logging` is called.

    Args:
        level: Logging level. Defaults to ``FLOWGRAPH_LOG_LEVEL`` or WARNING.
        format_string: Custom format string (optional).
        handler: Custom handler (optional, defaults to a stdout StreamHandler).
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level if level is not None else _level_from_env(logging.WARNING))
    root_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    root_logger.addHandler(handler)

    # Keep propagation so pytest's caplog sees records.
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a child logger of ``flowgraph``.

    Args:
        name: Logger name, typically ``__name__`` of the calling module.

    Returns:
        Logger that inherits level and handler from the package logger.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the log level of the package logger and its handlers."""
    setup_root_logger()
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def enable_debug_logging() -> None:
    """Log algorithm phases and rounds."""
    set_global_log_level(logging.DEBUG)


def disable_debug_logging() -> None:
    """Return to the default WARNING level."""
    set_global_log_level(logging.WARNING)


def reset_logging() -> None:
    """Drop the package handler so the next call reconfigures (used by tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


setup_root_logger()
