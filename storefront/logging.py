"""
Logging for storefront-core.

Every module logs under the ``storefront`` namespace:

    from storefront.logging import get_logger, log_safe
    logger = get_logger(__name__)

    logger.warning(f"Failed to persist cart {log_safe(name)}")

The package logger gets its own stderr handler only when the host
application has not configured logging; otherwise records propagate to
the host's handlers untouched.
"""

import logging
import os
import sys
from functools import cache

PACKAGE_LOGGER = "storefront"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Longest caller-supplied value written into a log line
MAX_LOGGED_LENGTH = 64


def _level_from_env() -> int:
    """STOREFRONT_LOG_LEVEL, then LOG_LEVEL, then INFO."""
    name = os.environ.get("STOREFRONT_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or "INFO"
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _configure_package_logger() -> logging.Logger:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(_level_from_env())

    if package_logger.handlers or logging.getLogger().handlers:
        return package_logger

    handler = logging.StreamHandler(sys.stderr)
    is_production = os.environ.get("STOREFRONT_ENV") == "production"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT))
    package_logger.addHandler(handler)
    return package_logger


_configure_package_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module, nested under the package logger.

    Names outside the ``storefront`` namespace (scripts, tests) are
    prefixed so they share its level and handler.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def log_safe(value: object, max_length: int = MAX_LOGGED_LENGTH) -> str:
    """
    Render a caller-supplied value (identity key, category id, storage error)
    for a log line.

    Control characters are escaped so a value can't forge extra log
    entries (CWE-117), and long values are cut with an ellipsis.
    """
    if value is None or value == "":
        return "N/A"
    text = (
        str(value)
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."
