"""Exceptions raised by crash-guard and by the integrations it reports on."""

from typing import Any, Optional


class CrashGuardError(Exception):
    """Base class for crash-guard errors."""
    pass


class ReporterNotReadyError(CrashGuardError):
    """Raised when a backend is used before it has been initialized."""
    pass


class PlatformError(Exception):
    """
    Failure reported by a native bridge or platform integration.

    Args:
        code: Integration-specific error code
        message: Human readable message
        details: Optional extra payload returned by the integration
    """

    def __init__(self, code: str, message: Optional[str] = None, details: Any = None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(f"PlatformError({code}, {message}, {details})")


class MissingIntegrationError(Exception):
    """Raised when no handler is registered for an integration method."""

    def __init__(self, method: str, channel: Optional[str] = None):
        self.method = method
        self.channel = channel
        where = f" on channel {channel}" if channel else ""
        super().__init__(f"No implementation found for method {method}{where}")
