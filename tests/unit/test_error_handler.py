"""
Unit tests for the caller-facing error handler.
"""

import logging

import pytest

import crash_guard.services.error_handler as error_handler_module
from crash_guard.models.category import ErrorSeverity
from crash_guard.services.error_handler import ErrorHandler, configure, handle_error
from crash_guard.utils.resilience import FireAndForget


class Unprintable:
    def __str__(self):
        raise RuntimeError("cannot render")


@pytest.fixture
def handler(fake_sink) -> ErrorHandler:
    dispatcher = FireAndForget()
    yield ErrorHandler(fake_sink, dispatcher=dispatcher)
    dispatcher.shutdown()


class TestHandleError:
    """Reporting from synchronous code (worker thread dispatch)."""

    def test_end_to_end_client_error(self, handler, fake_sink, status_error):
        handler.handle_error(operation="load_user_data", error=status_error(404))
        assert handler.flush(timeout=5)

        assert len(fake_sink.records) == 1
        report = fake_sink.records[0]
        assert report["fatal"] is False
        assert report["reason"] == "Network Error: load_user_data"
        assert "Severity: MEDIUM" in report["information"]
        assert "Category: CLIENT_ERROR" in report["information"]
        assert "Endpoint: https://api.example.com/users/42" in report["information"]

    def test_returns_none(self, handler):
        assert handler.handle_error("load_user_data", ValueError("x")) is None

    def test_explicit_severity(self, handler, fake_sink):
        handler.handle_error("load_user_data", TypeError("bad"), severity=ErrorSeverity.LOW)
        handler.flush(timeout=5)

        assert "Severity: LOW" in fake_sink.records[0]["information"]

    def test_uses_error_traceback_as_stack(self, handler, fake_sink):
        try:
            raise KeyError("user_id")
        except KeyError as e:
            handler.handle_error("load_user_data", e)
        handler.flush(timeout=5)

        assert fake_sink.records[0]["stack"] is not None

    def test_unprintable_context_falls_back(self, handler, fake_sink):
        handler.handle_error(
            "load_user_data",
            ValueError("x"),
            additional_context={"payload": Unprintable()},
        )
        handler.flush(timeout=5)

        report = fake_sink.records[0]
        assert report["reason"] == "Error in load_user_data (fallback)"
        assert report["fatal"] is True
        assert "Severity: CRITICAL" in report["information"]

    def test_invalid_context_keys_fall_back(self, handler, fake_sink):
        handler.handle_error("load_user_data", ValueError("x"), additional_context={1: "one"})
        handler.flush(timeout=5)

        assert fake_sink.records[0]["reason"] == "Error in load_user_data (fallback)"

    def test_sink_not_ready_is_a_no_op(self, sink_factory):
        sink = sink_factory(ready=False)
        handler = ErrorHandler(sink)

        handler.handle_error("load_user_data", ValueError("x"))
        handler.flush(timeout=5)

        assert sink.records == []

    def test_sink_failure_is_swallowed(self, sink_factory, caplog):
        sink = sink_factory(fail=True)
        handler = ErrorHandler(sink)

        with caplog.at_level(logging.ERROR):
            handler.handle_error("load_user_data", ValueError("x"))
            assert handler.flush(timeout=5)

        assert any("Fire-and-forget call failed" in r.getMessage() for r in caplog.records)

    def test_total_failure_is_swallowed(self, handler, monkeypatch, caplog):
        def explode(record):
            raise RuntimeError("dispatch broken")

        monkeypatch.setattr(handler, "report", explode)

        with caplog.at_level(logging.ERROR):
            handler.handle_error("load_user_data", ValueError("x"))

        assert any("Complete failure in error handling" in r.getMessage() for r in caplog.records)


class TestAsyncDispatch:
    """Reporting from inside a running event loop."""

    @pytest.mark.asyncio
    async def test_report_runs_as_task(self, handler, fake_sink, status_error):
        handler.handle_error("load_user_data", status_error(500))

        # Not awaited by handle_error itself
        assert fake_sink.records == []
        await handler.drain()

        assert len(fake_sink.records) == 1
        assert "Category: SERVER_ERROR" in fake_sink.records[0]["information"]
        assert "Severity: HIGH" in fake_sink.records[0]["information"]

    @pytest.mark.asyncio
    async def test_sink_failure_does_not_reach_caller(self, sink_factory):
        handler = ErrorHandler(sink_factory(fail=True))

        handler.handle_error("load_user_data", ValueError("x"))
        await handler.drain()


class TestDefaultHandler:
    """Module-level entry point."""

    def test_handle_error_without_configuration(self, monkeypatch):
        monkeypatch.setattr(error_handler_module, "_default_handler", None)

        handle_error("load_user_data", ValueError("x"))

    def test_configure(self, monkeypatch, fake_sink):
        monkeypatch.setattr(error_handler_module, "_default_handler", None)

        handler = configure(fake_sink)
        handle_error("load_user_data", ValueError("x"), endpoint="/users/42")
        handler.flush(timeout=5)

        assert error_handler_module.get_error_handler() is handler
        assert "Endpoint: /users/42" in fake_sink.records[0]["information"]
