"""Secure logging utilities to keep personal data out of production logs."""

import logging
import re
from typing import Any

from payroll_api.config import get_settings

MAX_LOGGED_MESSAGE_LENGTH = 200

_REDACTIONS = (
    # Connection strings and URLs
    (re.compile(r"(postgresql|postgres|sqlite|smtp|http|https)(\+\w+)?://[^\s]+"), "[URL]"),
    # Email addresses
    (re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+"), "[EMAIL]"),
    # File paths (Unix and Windows)
    (re.compile(r"['\"]?(/[a-zA-Z0-9_./\-]+|[A-Z]:\\[^\s'\"]+)['\"]?"), "[PATH]"),
    # Long opaque tokens
    (re.compile(r"[a-zA-Z0-9_\-]{32,}"), "[TOKEN]"),
)


def sanitize_exception_message(error: Exception) -> str:
    """Strip addresses, paths and tokens from an exception message.

    Args:
        error: The exception to sanitize

    Returns:
        Sanitized, truncated message
    """
    error_msg = str(error)
    for pattern, replacement in _REDACTIONS:
        error_msg = pattern.sub(replacement, error_msg)

    if len(error_msg) > MAX_LOGGED_MESSAGE_LENGTH:
        error_msg = error_msg[: MAX_LOGGED_MESSAGE_LENGTH - 3] + "..."
    return error_msg


def log_error(
    logger: logging.Logger,
    message: str,
    error: Exception | None = None,
    **kwargs: Any,
) -> None:
    """Log an error with full detail in debug mode and sanitized otherwise.

    Args:
        logger: The logger instance to use
        message: The log message (should be generic, no personal data)
        error: Optional exception to include
        **kwargs: Extra context, only attached in debug mode
    """
    if get_settings().debug:
        if error:
            logger.error(f"{message}: {error}", exc_info=error, extra=kwargs)
        else:
            logger.error(message, extra=kwargs)
    elif error:
        logger.error(f"{message}: {sanitize_exception_message(error)}")
    else:
        logger.error(message)
