"""Data models for crash-guard."""

from .category import ErrorCategory, ErrorSeverity, TransportErrorType
from .occurrence import ErrorOccurrence, FrameworkErrorDetails
from .record import ErrorRecord

__all__ = [
    # Classification enums
    "ErrorCategory",
    "ErrorSeverity",
    "TransportErrorType",
    # Input models
    "ErrorOccurrence",
    "FrameworkErrorDetails",
    # Output models
    "ErrorRecord",
]
