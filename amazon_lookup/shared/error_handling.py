"""
Shared error types and helpers for Lambda error results.

Errors leave the handler as raised exceptions. Their message starts with a
category token (``BadRequest: ...`` or ``InternalError: ...``) so the API
Gateway integration can map them to status codes with a regex.
"""

import logging
import re

logger = logging.getLogger(__name__)

BAD_REQUEST = "BadRequest"
INTERNAL_ERROR = "InternalError"


class ItemLookupError(Exception):
    """Base class for errors surfaced to the invoking host."""

    category = INTERNAL_ERROR

    def __init__(self, message: str):
        self.detail = message
        super().__init__(format_error_message(self.category, message))


class BadRequestError(ItemLookupError):
    """The inbound event does not carry a usable item id."""

    category = BAD_REQUEST


class InternalError(ItemLookupError):
    """The item could not be looked up or serialized."""

    category = INTERNAL_ERROR


class ConfigurationError(ValueError):
    """Raised when required environment configuration is missing or invalid."""


class EmptyResultError(LookupError):
    """Raised when a lookup response contains no item records."""


class MalformedItemError(ValueError):
    """Raised when an item record cannot be normalized."""


class AmazonLookupError(RuntimeError):
    """Raised when the Product Advertising API reports request errors."""


class CacheReadError(Exception):
    """Raised for cache read failures other than a missing entry."""


class CacheWriteError(Exception):
    """Raised when an item cannot be written to the cache."""


def format_error_message(category: str, message: str) -> str:
    """Prefix a message with its error category."""
    return f"{category}: {message}"


def sanitize_error_message(error: Exception) -> str:
    """
    Sanitize an unexpected error before it leaves the function.

    Args:
        error: Exception object

    Returns:
        Message with file paths and AWS resource ARNs removed
    """
    error_type = type(error).__name__
    error_msg = str(error)

    # Log full error details server-side
    logger.error(f"Error: {error_type}: {error_msg}", exc_info=error)

    error_msg = re.sub(r'arn:aws:[^\s]+', '[aws-resource]', error_msg)
    error_msg = re.sub(r'(?<![\w:/])/[^\s]+', '[path]', error_msg)

    if 'Traceback' in error_msg or 'File "' in error_msg:
        return f"{error_type}: an internal error occurred"

    return f"{error_type}: {error_msg}" if error_msg else error_type
