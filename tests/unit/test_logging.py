"""
Unit tests for structured logging utilities.
"""

import json
import logging
from io import StringIO

import pytest

from crash_guard.models.category import ErrorCategory, ErrorSeverity
from crash_guard.models.record import ErrorRecord
from crash_guard.utils.logging import (
    JSONFormatter,
    get_logger,
    log_classification,
    log_error_with_context,
    setup_logging,
)


@pytest.fixture
def captured():
    """Logger adapter writing JSON lines into a buffer."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger = get_logger("crash_guard.tests")
    logger.logger.addHandler(handler)
    logger.logger.setLevel(logging.DEBUG)
    yield logger, stream
    logger.logger.removeHandler(handler)


def test_json_formatter(captured):
    """Test JSON formatter produces valid JSON output."""
    logger, stream = captured

    logger.info("Test message", extra={"operation": "load_user_data", "attempt": 2})

    log_data = json.loads(stream.getvalue())
    assert "timestamp" in log_data
    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "crash_guard.tests"
    assert log_data["message"] == "Test message"
    assert log_data["operation"] == "load_user_data"
    assert log_data["context"]["attempt"] == 2
    assert "source" in log_data


def test_json_formatter_handles_unserializable_values(captured):
    logger, stream = captured

    logger.info("Odd value", extra={"payload": object()})

    log_data = json.loads(stream.getvalue())
    assert log_data["context"]["payload"].startswith("<object object")


def test_get_logger_with_context():
    """Test getting logger with context."""
    logger = get_logger("test_module", operation="sync_contacts")

    assert logger.extra["operation"] == "sync_contacts"


def test_with_context_merges_fields():
    logger = get_logger("test_module", operation="sync_contacts")

    child = logger.with_context(endpoint="/contacts")

    assert child.extra == {"operation": "sync_contacts", "endpoint": "/contacts"}
    assert logger.extra == {"operation": "sync_contacts"}


def test_log_classification(captured):
    logger, stream = captured
    record = ErrorRecord(
        operation="load_user_data",
        error=ValueError("x"),
        category=ErrorCategory.CLIENT_ERROR,
        severity=ErrorSeverity.MEDIUM,
        fatal=False,
        reason="Network Error: load_user_data",
        endpoint="/users/42",
    )

    log_classification(logger, record)

    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "DEBUG"
    assert log_data["category"] == "CLIENT_ERROR"
    assert log_data["severity"] == "medium"
    assert log_data["fatal"] is False
    assert log_data["endpoint"] == "/users/42"


def test_log_error_with_context(captured):
    logger, stream = captured

    try:
        raise ConnectionResetError("Connection reset")
    except ConnectionResetError as e:
        log_error_with_context(logger, "Sink call failed", e, call="record_error")

    log_data = json.loads(stream.getvalue())
    assert log_data["level"] == "ERROR"
    assert log_data["error"]["type"] == "ConnectionResetError"
    assert "Traceback" in log_data["error"]["stack_trace"]
    assert log_data["context"]["call"] == "record_error"
    assert log_data["context"]["error_type"] == "ConnectionResetError"


def test_setup_logging():
    root = logging.getLogger()
    previous_handlers = root.handlers[:]
    previous_level = root.level
    try:
        setup_logging("WARNING")

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = previous_handlers
        root.setLevel(previous_level)
