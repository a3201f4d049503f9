"""
crash-guard: error classification, severity assignment and crash reporting.

Typical setup:

    from crash_guard import CrashReportingService, SentryBackend, configure

    service = CrashReportingService(SentryBackend())
    await service.initialize()
    configure(service)

and wherever an error is caught:

    handle_error("load_user_data", e, endpoint="/users/42")
"""

from crash_guard.classifiers import (
    categorize,
    classify_by_pattern,
    classify_by_type,
    is_fatal,
    resolve_severity,
    severity_for,
)
from crash_guard.models import (
    ErrorCategory,
    ErrorOccurrence,
    ErrorRecord,
    ErrorSeverity,
    FrameworkErrorDetails,
    TransportErrorType,
)
from crash_guard.services import (
    CrashReportingService,
    ErrorHandler,
    ErrorRecordBuilder,
    InMemoryBackend,
    NavigationObserver,
    ReporterSink,
    SentryBackend,
    asyncio_exception_handler,
    configure,
    handle_error,
    install_exception_hooks,
)

__version__ = "0.1.0"

__all__ = [
    "categorize",
    "classify_by_pattern",
    "classify_by_type",
    "is_fatal",
    "resolve_severity",
    "severity_for",
    "ErrorCategory",
    "ErrorOccurrence",
    "ErrorRecord",
    "ErrorSeverity",
    "FrameworkErrorDetails",
    "TransportErrorType",
    "CrashReportingService",
    "ErrorHandler",
    "ErrorRecordBuilder",
    "InMemoryBackend",
    "NavigationObserver",
    "ReporterSink",
    "SentryBackend",
    "asyncio_exception_handler",
    "configure",
    "handle_error",
    "install_exception_hooks",
]
