"""Secure logging utilities to prevent information disclosure."""

import logging
import re
from functools import lru_cache

from records_api.config import get_settings


@lru_cache(maxsize=1)
def is_debug_mode() -> bool:
    """Check if application is running in debug mode."""
    return get_settings().debug


def sanitize_exception_message(error: Exception) -> str:
    """Sanitize an exception message for production logs.

    Removes connection strings and email addresses, and truncates long
    messages. Employee records carry personal data that must not end up in
    log aggregation.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized error message
    """
    error_msg = str(error)

    url_pattern = r"(postgresql|postgres|sqlite|redis|http|https)(\+\w+)?://[^\s]+"
    error_msg = re.sub(url_pattern, "[URL]", error_msg)

    error_msg = re.sub(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+", "[EMAIL]", error_msg)

    if len(error_msg) > 200:
        error_msg = error_msg[:197] + "..."

    return error_msg


def log_warning(logger: logging.Logger, message: str, error: Exception | None = None) -> None:
    """Log a warning, with full error detail only in debug mode.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no personal data)
        error: Optional exception to include
    """
    if error is None:
        logger.warning(message)
    elif is_debug_mode():
        logger.warning(f"{message}: {error}")
    else:
        logger.warning(f"{message}: {sanitize_exception_message(error)}")
