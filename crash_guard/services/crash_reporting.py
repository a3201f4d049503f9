"""
Crash reporting service.

Wraps a crash-reporting backend behind a readiness flag and implements the
ReporterSink contract used by the error handler. It also hosts the adapters
that translate process-level error signals (framework hooks, worker thread
failures, uncaught exceptions) into backend calls.

Until ``initialize()`` succeeds every call degrades to a diagnostic log line.
"""

from typing import Any, Iterable, Optional

from crash_guard.classifiers.fatal import is_fatal
from crash_guard.classifiers.rendering import render_error, stack_of
from crash_guard.config import Settings, settings as default_settings
from crash_guard.models.occurrence import FrameworkErrorDetails
from crash_guard.services.reporter import CrashBackend
from crash_guard.utils.logging import get_logger, log_error_with_context

logger = get_logger(__name__)


def fatal_label(fatal: bool) -> str:
    return "Fatal" if fatal else "Non-Fatal"


class CrashReportingService:
    """
    Reporter sink backed by a crash-reporting backend.

    Args:
        backend: Backend receiving the reports (e.g. SentryBackend)
        settings: Settings; defaults to the global settings instance
    """

    def __init__(self, backend: CrashBackend, settings: Optional[Settings] = None):
        self.backend = backend
        self.settings = settings or default_settings
        self._ready = False

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """
        Set up the backend and mark the service ready.

        Collection is enabled outside debug mode, or in debug mode when
        ``enable_in_debug_mode`` is set. Failures are logged, and the
        service stays not ready.
        """
        try:
            collection_enabled = self.settings.collection_enabled
            self.backend.setup(collection_enabled=collection_enabled)

            if collection_enabled:
                if self.settings.app_version:
                    self.backend.set_custom_key("app_version", self.settings.app_version)
                if self.settings.build_number:
                    self.backend.set_custom_key("build_number", self.settings.build_number)

            self._ready = True
            logger.info(
                f"Crash reporting initialized. Collection enabled: {collection_enabled}"
            )
        except Exception as e:
            log_error_with_context(logger, "Crash reporting initialization failed", e)

    async def set_user_identifier(self, identifier: str) -> None:
        """Attach a user identifier to all subsequent reports."""
        if not self._ready:
            logger.debug("Crash reporting not ready, cannot set user identifier")
            return
        self.backend.set_user_identifier(identifier)
        self._log(f"User identifier set: {identifier}")

    async def set_custom_key(self, key: str, value: Any) -> None:
        """Set a key/value pair on upcoming reports. Non-scalar values are stringified."""
        self._set_custom_key(key, value)

    async def log(self, message: str) -> None:
        """Add a breadcrumb to upcoming reports."""
        self._log(message)

    async def record_error(
        self,
        exception: Any,
        stack: Any,
        *,
        fatal: bool = False,
        reason: Optional[str] = None,
        information: Iterable[str] = (),
    ) -> None:
        """
        Record a caught error.

        Args:
            exception: The error value
            stack: Stack trace for the error
            fatal: Whether the report is marked as a crash
            reason: Short human readable reason
            information: Extra lines attached to the report
        """
        self._log(
            f"GenericError recorded: {render_error(exception)} - Reason: {reason} - Fatal: {fatal}"
        )
        if not self._ready:
            logger.debug(f"Tried to record error before crash reporting was ready: {render_error(exception)}")
            return

        self._set_custom_key("error_type", "ManualRecord")
        self._set_custom_key("fatal_classification", fatal_label(fatal))
        if reason is not None:
            self._set_custom_key("record_reason", reason)

        self.backend.record_error(
            exception,
            stack,
            fatal=fatal,
            reason=reason,
            information=list(information),
        )

    def handle_framework_error(self, details: FrameworkErrorDetails) -> None:
        """
        Handle an error reported by a framework-level error hook.

        The error is always written to the diagnostic log, then recorded
        with a fatal verdict from the fatal heuristic.
        """
        exception = details.exception
        log_exc_info = (
            (type(exception), exception, exception.__traceback__)
            if isinstance(exception, BaseException) else None
        )
        logger.error(
            f"Framework error caught: {render_error(exception)}",
            extra={"library": details.library, "error_context": details.context},
            exc_info=log_exc_info,
        )
        self._log(f"FrameworkError caught: {render_error(exception)}")

        if not self._ready:
            logger.debug("Framework error occurred before crash reporting was ready")
            return

        fatal = is_fatal(details)
        self._set_custom_key("error_type", "FrameworkError")
        self._set_custom_key("fatal_classification", fatal_label(fatal))
        self._set_custom_key("framework_error_library", details.library or "unknown")
        self._set_custom_key("framework_error_context", details.context or "unknown")
        self._set_custom_key("framework_error_silent", details.silent)

        self.backend.record_error(
            exception,
            details.stack if details.stack is not None else stack_of(exception),
            fatal=fatal,
            reason=details.context or "Framework error",
            information=[f"Library: {details.library or 'unknown'}"],
        )

    def handle_platform_error(self, error: Any, stack: Any = None) -> bool:
        """
        Handle an error raised outside the main flow (e.g. a worker thread).

        Returns:
            Always True, to mark the error as handled
        """
        message = render_error(error).lower()
        self._log(f"PlatformError caught: {message}")
        logger.warning(f"Platform error caught: {render_error(error)}")

        if not self._ready:
            logger.debug("Platform error occurred before crash reporting was ready")
            return True

        fatal = is_fatal(error, stack)
        self._set_custom_key("error_type", "PlatformError")
        self._set_custom_key("fatal_classification", fatal_label(fatal))
        self.backend.record_error(
            error,
            stack,
            fatal=fatal,
            reason="PlatformError",
            information=[f"Platform error message: {message}"],
        )
        return True

    def handle_uncaught_error(self, error: Any, stack: Any = None) -> None:
        """Catch-all for uncaught errors. Recording failures are logged only."""
        self._log(f"UncaughtError caught: {render_error(error)}")
        logger.warning(f"Uncaught error caught: {render_error(error)}")

        if not self._ready:
            logger.debug("Uncaught error occurred before crash reporting was ready")
            return

        try:
            fatal = is_fatal(error, stack)
            self._set_custom_key("error_type", "UncaughtError")
            self._set_custom_key("fatal_classification", fatal_label(fatal))
            self._set_custom_key("uncaught_error_runtime_type", type(error).__name__)
            self.backend.record_error(
                error,
                stack,
                fatal=fatal,
                reason="Uncaught exception",
                information=[],
            )
        except Exception as e:
            log_error_with_context(
                logger,
                f"Failed to record uncaught error: {render_error(error)}",
                e
            )

    def flush(self, timeout: float = 2.0) -> None:
        """Flush pending backend events."""
        if self._ready:
            self.backend.flush(timeout)

    def _set_custom_key(self, key: str, value: Any) -> None:
        if not self._ready:
            logger.debug(f"Crash reporting not ready, cannot set custom key '{key}'")
            return
        self.backend.set_custom_key(key, value)

    def _log(self, message: str) -> None:
        if not self._ready:
            logger.debug(f"Crash reporting not ready, cannot log message: '{message}'")
            return
        self.backend.log(message)
