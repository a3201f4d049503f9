"""
Structured logging utilities with JSON formatting and context injection.

This module is the diagnostic channel of crash-guard. Anything that goes
wrong while classifying or reporting an error ends up here instead of
being raised back to the caller.

It provides:
- JSON formatted log output for machine-readable logs
- Context injection (operation, category, severity) via LoggerAdapter
- Helpers for logging classification results and swallowed failures
"""

import logging
import json
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional, MutableMapping, TYPE_CHECKING
from logging import LogRecord

if TYPE_CHECKING:
    from crash_guard.models.record import ErrorRecord


# Fields promoted to the top level of every JSON log line
PROMOTED_FIELDS = ("operation", "category", "severity", "fatal", "endpoint")

_RESERVED_ATTRS = frozenset([
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
]) | frozenset(PROMOTED_FIELDS)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON with standard fields:
    - timestamp: ISO 8601 formatted timestamp
    - level: Log level (INFO, WARNING, ERROR, etc.)
    - logger: Logger name
    - message: Log message
    - operation/category/severity/fatal/endpoint: when present in extra
    - context: Any other extra fields
    - error: Error details (when exc_info is attached)
    """

    def format(self, record: LogRecord) -> str:
        """
        Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted log string
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for field in PROMOTED_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_data["context"] = extra_fields

        if record.exc_info:
            log_data["error"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stack_trace": "".join(traceback.format_exception(*record.exc_info))
            }

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName
        }

        # Reported values are arbitrary objects; never let one break a log line
        return json.dumps(log_data, default=repr)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that injects context fields into all log records.

    Context set on the adapter (e.g. the operation being reported) is
    merged into the ``extra`` of every call.
    """

    def __init__(self, logger: logging.Logger, extra: Optional[Dict[str, Any]] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

    def with_context(self, **context: Any) -> "ContextLoggerAdapter":
        """
        Create a new logger adapter with additional context.

        Args:
            **context: Additional context fields

        Returns:
            New logger adapter with merged context
        """
        new_extra = dict(self.extra)
        new_extra.update(context)
        return ContextLoggerAdapter(self.logger, new_extra)


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging for the application.

    Installs a JSON formatted stdout handler on the root logger.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    formatter = JSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sentry_sdk").setLevel(logging.WARNING)


def get_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Get a context-aware logger for a module.

    Args:
        name: Logger name (typically __name__)
        **context: Initial context fields (operation, category, ...)

    Returns:
        Context logger adapter

    Example:
        logger = get_logger(__name__, operation="load_user_data")
        logger.info("Reporting error")  # Will include operation
    """
    base_logger = logging.getLogger(name)
    return ContextLoggerAdapter(base_logger, context)


def log_classification(logger: logging.LoggerAdapter, record: "ErrorRecord") -> None:
    """
    Log the outcome of classifying an error.

    Args:
        logger: Logger to use
        record: Classified error record
    """
    logger.debug(
        f"Classified error in {record.operation}: {record.category.value}",
        extra={
            "operation": record.operation,
            "category": record.category.value,
            "severity": record.severity.value,
            "fatal": record.fatal,
            "endpoint": record.endpoint,
            "fallback": record.fallback,
        }
    )


def log_error_with_context(
    logger: logging.LoggerAdapter,
    message: str,
    error: BaseException,
    **context: Any
) -> None:
    """
    Log a swallowed error with its stack trace and context.

    Args:
        logger: Logger to use
        message: Error message
        error: Exception object
        **context: Additional context fields
    """
    context.setdefault("error_type", type(error).__name__)
    logger.error(
        message,
        extra=context,
        exc_info=(type(error), error, error.__traceback__)
    )
