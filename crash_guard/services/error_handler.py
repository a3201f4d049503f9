"""
Caller-facing error handling entry point.

``ErrorHandler.handle_error`` classifies an error, builds its record and
hands it to the reporter sink without waiting. Nothing it does can raise
back into the code that caught the original error:

1. build the full record and report it
2. on failure, report a minimal fallback record (severity critical)
3. if that fails too, write to the diagnostic log and give up
"""

from typing import Any, Dict, Optional

from crash_guard.classifiers.rendering import render_error
from crash_guard.models.category import ErrorSeverity
from crash_guard.models.occurrence import ErrorOccurrence
from crash_guard.models.record import ErrorRecord
from crash_guard.services.record_builder import ErrorRecordBuilder
from crash_guard.services.reporter import ReporterSink
from crash_guard.utils.logging import get_logger, log_classification, log_error_with_context
from crash_guard.utils.resilience import FireAndForget

logger = get_logger(__name__)


class ErrorHandler:
    """
    Classifies caught errors and reports them through a sink.

    Args:
        sink: Reporter sink receiving the records
        builder: Record builder; a default one is created when omitted
        dispatcher: Fire-and-forget dispatcher for sink calls

    Example:
        handler = ErrorHandler(service)
        try:
            response.raise_for_status()
        except httpx.HTTPError as e:
            handler.handle_error("load_user_data", e)
    """

    def __init__(
        self,
        sink: ReporterSink,
        builder: Optional[ErrorRecordBuilder] = None,
        dispatcher: Optional[FireAndForget] = None
    ):
        self.sink = sink
        self.builder = builder or ErrorRecordBuilder()
        self.dispatcher = dispatcher or FireAndForget()

    def handle_error(
        self,
        operation: str,
        error: Any,
        stack_trace: Any = None,
        endpoint: Optional[str] = None,
        additional_context: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
        data_type: Optional[str] = None,
        raw_payload: Any = None,
    ) -> None:
        """
        Classify and report an error. Never raises.

        Args:
            operation: What was being attempted (e.g. 'load_user_data')
            error: The caught error
            stack_trace: Stack trace; defaults to the error's traceback
            endpoint: Network target; derived from httpx errors when omitted
            additional_context: Extra context, capped when building the record
            severity: Explicit severity, overriding the category mapping
            data_type: Type of data being processed, for parsing failures
            raw_payload: Raw data that failed to parse
        """
        try:
            occurrence = ErrorOccurrence(
                operation=operation,
                error=error,
                stack_trace=stack_trace,
                endpoint=endpoint,
                data_type=data_type,
                raw_payload=raw_payload,
                additional_context=additional_context or {},
                severity=severity,
            )
            self.report(self.builder.build(occurrence))
        except Exception as e:
            logger.warning(
                f"Failed to handle error in {operation}: {render_error(e)}",
                extra={"operation": operation}
            )
            try:
                record = self.builder.build_fallback(operation, error, stack_trace, failure=e)
                self.report(record)
            except Exception as fallback_error:
                log_error_with_context(
                    logger,
                    "Complete failure in error handling",
                    fallback_error,
                    operation=operation
                )

    def build_record(self, occurrence: ErrorOccurrence) -> ErrorRecord:
        """Classify an occurrence without reporting it."""
        return self.builder.build(occurrence)

    def report(self, record: ErrorRecord) -> None:
        """Hand a record to the sink without waiting for it."""
        log_classification(logger, record)

        if not self.sink.is_ready:
            logger.debug(
                f"Reporter sink not ready, dropping report for {record.operation}",
                extra={"operation": record.operation}
            )
            return

        information = record.information()
        self.dispatcher.submit(
            lambda: self.sink.record_error(
                record.error,
                record.stack_trace,
                fatal=record.fatal,
                reason=record.reason,
                information=information,
            ),
            f"record_error({record.operation})"
        )

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait for reports running on worker threads."""
        return self.dispatcher.flush(timeout)

    async def drain(self) -> None:
        """Wait for every pending report."""
        await self.dispatcher.drain()


_default_handler: Optional[ErrorHandler] = None


def configure(sink: ReporterSink, **kwargs: Any) -> ErrorHandler:
    """
    Install the process-wide default error handler.

    Args:
        sink: Reporter sink receiving the records
        **kwargs: Extra ErrorHandler arguments (builder, dispatcher)

    Returns:
        The new default handler
    """
    global _default_handler
    _default_handler = ErrorHandler(sink, **kwargs)
    return _default_handler


def get_error_handler() -> Optional[ErrorHandler]:
    """Return the default error handler, if one was configured."""
    return _default_handler


def handle_error(operation: str, error: Any, **kwargs: Any) -> None:
    """Report an error through the default handler. No-op until configured."""
    if _default_handler is None:
        logger.debug(
            f"No error handler configured, dropping error in {operation}",
            extra={"operation": operation}
        )
        return
    _default_handler.handle_error(operation, error, **kwargs)
