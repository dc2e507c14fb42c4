"""Logging utilities for the tool server."""

import logging
import sys
from typing import Optional, TextIO

_LOGGER_NAME = "sample_users_mcp"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger inside the package namespace.

    Module names that already start with the package name are used as they are,
    so ``get_logger(__name__)`` does not double the prefix.
    """
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None, format_str: str = DEFAULT_FORMAT) -> None:
    """Attach the server's console handler to the package logger.

    Args:
        level: A level name as normalized by ``ServerConfig.log_level``.
        stream: Where records go. Defaults to stderr; stdout carries protocol
            frames on the stdio transport.
        format_str: Log format string.

    Calling it again replaces the handler installed by the previous call.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_sample_users_mcp", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(format_str))
    handler._sample_users_mcp = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


# Library default: stay silent unless the application configures logging.
logging.getLogger(_LOGGER_NAME).addHandler(logging.NullHandler())
