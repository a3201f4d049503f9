"""Reporting services: record building, error handling and backends."""

from .backends import InMemoryBackend, SentryBackend
from .crash_reporting import CrashReportingService
from .error_handler import ErrorHandler, configure, get_error_handler, handle_error
from .hooks import asyncio_exception_handler, install_exception_hooks
from .navigation import NavigationObserver
from .record_builder import ErrorRecordBuilder, payload_preview
from .reporter import CrashBackend, ReporterSink

__all__ = [
    "CrashBackend",
    "ReporterSink",
    "SentryBackend",
    "InMemoryBackend",
    "CrashReportingService",
    "ErrorRecordBuilder",
    "payload_preview",
    "ErrorHandler",
    "configure",
    "get_error_handler",
    "handle_error",
    "install_exception_hooks",
    "asyncio_exception_handler",
    "NavigationObserver",
]
