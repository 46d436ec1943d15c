# Core module - error types shared by the client and the CLI

from .errors import (
    ErrorHandler, ErrorCategory, HotellookError,
    NoAccessError, EmptySearchIdentifierError, MissingParametersError,
    InvalidMarkerError, classify_exception,
)

__all__ = [
    "ErrorHandler", "ErrorCategory", "HotellookError",
    "NoAccessError", "EmptySearchIdentifierError", "MissingParametersError",
    "InvalidMarkerError", "classify_exception",
]
