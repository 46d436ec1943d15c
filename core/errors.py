"""
Error Handling Module
---------------------
Typed errors with classification for the Hotellook client.
Nothing is retried: every error reaches the caller immediately.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional
import logging

import httpx
from pydantic import ValidationError


class ErrorCategory(Enum):
    """Categories of errors for handling decisions."""
    ACCESS_ERROR = auto()       # Missing or rejected credentials
    VALIDATION_ERROR = auto()   # Request failed a local check
    NETWORK_ERROR = auto()      # Transport failure
    DECODE_ERROR = auto()       # Body was not the expected JSON
    SYSTEM_ERROR = auto()       # Anything else


class HotellookError(Exception):
    """Base class for errors raised by the client itself."""

    category: ErrorCategory = ErrorCategory.SYSTEM_ERROR
    default_message: str = "Hotellook client error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class NoAccessError(HotellookError):
    """
    Raised for closed endpoints when credentials are missing.

    Also raised when a closed endpoint answers with a body that cannot be
    decoded: upstream replies to bad signatures with error pages, not JSON.
    """

    category = ErrorCategory.ACCESS_ERROR
    default_message = "You should specify valid token and marker to use this method"


class EmptySearchIdentifierError(HotellookError):
    category = ErrorCategory.VALIDATION_ERROR
    default_message = "Empty search ID"


class MissingParametersError(HotellookError):
    category = ErrorCategory.VALIDATION_ERROR
    default_message = "Missing required parameters"


class InvalidMarkerError(HotellookError, ValueError):
    category = ErrorCategory.VALIDATION_ERROR
    default_message = "Marker must be a non-zero partner identifier"


def classify_exception(exc: BaseException) -> ErrorCategory:
    """Map any exception raised by a client call to an error category."""
    if isinstance(exc, HotellookError):
        return exc.category
    if isinstance(exc, httpx.HTTPError):
        return ErrorCategory.NETWORK_ERROR
    # JSONDecodeError, UnicodeDecodeError and ValidationError are ValueErrors
    if isinstance(exc, (ValueError, ValidationError)):
        return ErrorCategory.DECODE_ERROR
    return ErrorCategory.SYSTEM_ERROR


@dataclass
class ErrorRecord:
    """An exception as seen by the error handler."""
    category: ErrorCategory
    message: str
    exception_type: str


class ErrorHandler:
    """
    Central error handler with logging.

    Turns exceptions from client calls into user-facing messages.
    """

    LEVELS: Dict[ErrorCategory, int] = {
        ErrorCategory.VALIDATION_ERROR: logging.WARNING,
        ErrorCategory.ACCESS_ERROR: logging.WARNING,
        ErrorCategory.DECODE_ERROR: logging.ERROR,
        ErrorCategory.NETWORK_ERROR: logging.ERROR,
        ErrorCategory.SYSTEM_ERROR: logging.CRITICAL,
    }

    def __init__(self):
        self._logger = logging.getLogger("hotellook.errors")

    def handle(self, exc: BaseException) -> str:
        """
        Log an exception and return a user-friendly message.
        """
        category = classify_exception(exc)
        record = ErrorRecord(
            category=category,
            message=str(exc),
            exception_type=type(exc).__name__,
        )

        level = self.LEVELS.get(category, logging.ERROR)
        self._logger.log(
            level,
            f"{category.name}: {record.exception_type}: {record.message}",
            exc_info=level >= logging.CRITICAL,
        )

        return self._get_user_message(record)

    def _get_user_message(self, record: ErrorRecord) -> str:
        messages = {
            ErrorCategory.ACCESS_ERROR: record.message,
            ErrorCategory.VALIDATION_ERROR: record.message,
            ErrorCategory.NETWORK_ERROR: "Could not reach the Hotellook API. Please check your connection.",
            ErrorCategory.DECODE_ERROR: "The Hotellook API returned an unexpected response.",
            ErrorCategory.SYSTEM_ERROR: "Something went wrong internally.",
        }
        return messages.get(record.category, "An error occurred.")

