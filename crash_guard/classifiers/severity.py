"""Category to severity mapping."""

from typing import Any, Optional

from crash_guard.models.category import ErrorCategory, ErrorSeverity


SEVERITY_BY_CATEGORY = {
    # Unexpected errors, logic errors, security issues
    ErrorCategory.UNEXPECTED: ErrorSeverity.CRITICAL,
    ErrorCategory.LOGIC_ERROR: ErrorSeverity.CRITICAL,
    ErrorCategory.SECURITY: ErrorSeverity.CRITICAL,
    # Data parsing, server errors, permission issues
    ErrorCategory.PARSING: ErrorSeverity.HIGH,
    ErrorCategory.SERVER_ERROR: ErrorSeverity.HIGH,
    ErrorCategory.PERMISSION: ErrorSeverity.HIGH,
    ErrorCategory.DATABASE_ERROR: ErrorSeverity.HIGH,
    ErrorCategory.FILE_ERROR: ErrorSeverity.HIGH,
    # Network issues, client errors, auth failures
    ErrorCategory.TIMEOUT: ErrorSeverity.MEDIUM,
    ErrorCategory.NETWORK: ErrorSeverity.MEDIUM,
    ErrorCategory.API_ERROR: ErrorSeverity.MEDIUM,
    ErrorCategory.CLIENT_ERROR: ErrorSeverity.MEDIUM,
    ErrorCategory.AUTHENTICATION: ErrorSeverity.MEDIUM,
    ErrorCategory.AUTHORIZATION: ErrorSeverity.MEDIUM,
    ErrorCategory.PLATFORM_ERROR: ErrorSeverity.MEDIUM,
    # User cancellations
    ErrorCategory.USER_CANCELLED: ErrorSeverity.LOW,
}

DEFAULT_SEVERITY = ErrorSeverity.MEDIUM


def severity_for(category: Any) -> ErrorSeverity:
    """Map a category to its severity. Unknown values map to medium."""
    try:
        return SEVERITY_BY_CATEGORY.get(ErrorCategory(category), DEFAULT_SEVERITY)
    except ValueError:
        return DEFAULT_SEVERITY


def resolve_severity(
    category: ErrorCategory,
    override: Optional[ErrorSeverity] = None
) -> ErrorSeverity:
    """Severity for a category, unless the caller supplied one explicitly."""
    if override is not None:
        return override
    return severity_for(category)
