"""
Logging configuration and utilities.

Module loggers inside the package are children of ``bitstamp_client`` and
share the single stdout handler configured on it.
"""
import logging
import sys
from typing import Optional

from bitstamp_client.config import get_config

ROOT_LOGGER = "bitstamp_client"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_number(level: str) -> int:
    """Map a level name to its number; unknown names mean INFO."""
    value = getattr(logging, level.upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logger(
    name: str = ROOT_LOGGER,
    level: Optional[str] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    Setup and configure a logger.

    Args:
        name: Logger name (defaults to the package root)
        level: Log level (defaults to config value)
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    numeric_level = _level_number(level or get_config().log_level)

    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(numeric_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Package modules get a plain child logger, the package root being
    configured on first use; any other name is configured on its own.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        root = logging.getLogger(ROOT_LOGGER)
        if not root.handlers:
            setup_logger(ROOT_LOGGER)
        return logging.getLogger(name)
    return setup_logger(name)
