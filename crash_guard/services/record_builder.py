"""
Error record builder.

Turns an ErrorOccurrence into an immutable ErrorRecord: category, severity,
fatal verdict, reason and an enriched context mapping.
"""

from datetime import datetime, timezone
from itertools import islice
from typing import Any, Dict, Optional, Tuple

from crash_guard.classifiers.fatal import is_fatal
from crash_guard.classifiers.pattern_classifier import categorize
from crash_guard.classifiers.rendering import render_error, stack_of
from crash_guard.classifiers.severity import resolve_severity
from crash_guard.classifiers.type_classifier import (
    is_network_error,
    request_url,
    response_status_code,
    transport_error_type,
)
from crash_guard.config import settings
from crash_guard.models.category import ErrorCategory, ErrorSeverity
from crash_guard.models.occurrence import ErrorOccurrence
from crash_guard.models.record import ErrorRecord
from crash_guard.utils.logging import get_logger, log_error_with_context

logger = get_logger(__name__)

TRUNCATION_MARKER = "..."

FIXED_CONTEXT_KEYS = frozenset([
    "operation",
    "timestamp",
    "error_type",
    "error_category",
    "transport_type",
    "status_code",
    "endpoint",
    "data_type",
    "raw_data_sample",
    "raw_data_size",
])


def payload_preview(payload: Any, limit: int = 200) -> Tuple[str, Optional[int]]:
    """
    Render a raw payload for logging.

    Args:
        payload: Raw data that failed to parse
        limit: Maximum number of characters kept

    Returns:
        Tuple of (preview, size of the full rendering). The size is None when
        the payload cannot be rendered.
    """
    if payload is None:
        return "null", None

    try:
        text = str(payload)
    except Exception as e:
        return f"Failed to convert raw data: {render_error(e)}", None

    if len(text) <= limit:
        return text, len(text)
    return f"{text[:limit]}{TRUNCATION_MARKER}", len(text)


class ErrorRecordBuilder:
    """
    Builds classified error records.

    Stateless apart from its limits, so a single builder can be shared by
    concurrent callers.

    Args:
        max_context_entries: Caller context entries kept per record
        payload_preview_limit: Characters of raw payload kept in the preview
    """

    def __init__(
        self,
        max_context_entries: Optional[int] = None,
        payload_preview_limit: Optional[int] = None
    ):
        self.max_context_entries = (
            settings.max_context_entries if max_context_entries is None else max_context_entries
        )
        self.payload_preview_limit = (
            settings.payload_preview_limit if payload_preview_limit is None else payload_preview_limit
        )

    def build(self, occurrence: ErrorOccurrence) -> ErrorRecord:
        """
        Build the record for an occurrence. Never raises.

        When enriching the context fails, a minimal fallback record is
        returned instead.
        """
        try:
            return self._build(occurrence)
        except Exception as e:
            log_error_with_context(
                logger,
                f"Failed to build error record for {occurrence.operation}",
                e,
                operation=occurrence.operation
            )
            return self.build_fallback(
                occurrence.operation,
                occurrence.error,
                occurrence.stack_trace,
                failure=e
            )

    def build_fallback(
        self,
        operation: str,
        error: Any,
        stack_trace: Any = None,
        failure: Optional[BaseException] = None
    ) -> ErrorRecord:
        """
        Minimal record used when the full record cannot be built.

        Severity is forced to critical.
        """
        context: Dict[str, Any] = {"operation": operation}
        if failure is not None:
            context["fallback_error"] = render_error(failure)

        return ErrorRecord(
            operation=operation,
            error=error,
            stack_trace=stack_trace if stack_trace is not None else stack_of(error),
            category=ErrorCategory.UNEXPECTED,
            severity=ErrorSeverity.CRITICAL,
            fatal=True,
            reason=f"Error in {operation} (fallback)",
            context=context,
            fallback=True,
        )

    def _build(self, occurrence: ErrorOccurrence) -> ErrorRecord:
        error = occurrence.error
        stack_trace = occurrence.stack_trace
        if stack_trace is None:
            stack_trace = stack_of(error)

        category = categorize(error)
        severity = resolve_severity(category, occurrence.severity)
        fatal = is_fatal(error, stack_trace)

        context: Dict[str, Any] = {
            "operation": occurrence.operation,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error_type": type(error).__name__,
            "error_category": category.value,
        }

        transport_type = transport_error_type(error)
        if transport_type is not None:
            context["transport_type"] = transport_type.value
            status_code = response_status_code(error)
            if status_code is not None:
                context["status_code"] = status_code

        # Structured transport errors know their own target
        endpoint = occurrence.endpoint
        if endpoint is None and transport_type is not None:
            endpoint = request_url(error)
        if endpoint is not None:
            context["endpoint"] = endpoint

        if occurrence.data_type is not None:
            context["data_type"] = occurrence.data_type

        if occurrence.raw_payload is not None:
            preview, size = payload_preview(occurrence.raw_payload, self.payload_preview_limit)
            context["raw_data_sample"] = preview
            if size is not None:
                context["raw_data_size"] = size

        context.update(self._caller_context(occurrence.additional_context))

        return ErrorRecord(
            operation=occurrence.operation,
            error=error,
            stack_trace=stack_trace,
            category=category,
            severity=severity,
            fatal=fatal,
            reason=self._reason(occurrence),
            context=context,
            endpoint=endpoint,
        )

    def _caller_context(self, additional_context: Dict[str, Any]) -> Dict[str, Any]:
        """First caller entries that do not shadow a fixed key, capped."""
        entries = (
            (key, value)
            for key, value in additional_context.items()
            if key not in FIXED_CONTEXT_KEYS
        )
        return dict(islice(entries, self.max_context_entries))

    @staticmethod
    def _reason(occurrence: ErrorOccurrence) -> str:
        if occurrence.data_type is not None:
            return f"Parsing Error: {occurrence.data_type}"
        if is_network_error(occurrence.error):
            return f"Network Error: {occurrence.operation}"
        return f"Error in {occurrence.operation}"
