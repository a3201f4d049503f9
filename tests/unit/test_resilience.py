"""
Unit tests for fire-and-forget dispatch.
"""

import asyncio
import logging
import threading

import pytest

from crash_guard.utils.resilience import FireAndForget, contain


@pytest.fixture
def dispatcher():
    dispatcher = FireAndForget()
    yield dispatcher
    dispatcher.shutdown()


def test_runs_on_worker_thread_without_loop(dispatcher):
    calls = []

    async def work():
        calls.append(threading.current_thread().name)

    dispatcher.submit(work, "work")

    assert dispatcher.flush(timeout=5)
    assert len(calls) == 1
    assert calls[0].startswith("crash-guard")
    assert dispatcher.pending == 0


def test_failures_are_logged_not_raised(dispatcher, caplog):
    async def broken():
        raise RuntimeError("sink is down")

    with caplog.at_level(logging.ERROR):
        dispatcher.submit(broken, "broken sink")
        assert dispatcher.flush(timeout=5)

    assert any("Fire-and-forget call failed: broken sink" in r.getMessage() for r in caplog.records)


def test_factory_failure_is_contained(dispatcher):
    def factory():
        raise RuntimeError("could not build coroutine")

    dispatcher.submit(factory, "factory")

    assert dispatcher.flush(timeout=5)


def test_flush_with_nothing_pending(dispatcher):
    assert dispatcher.flush(timeout=0) is True


async def test_runs_as_task_inside_loop(dispatcher):
    started = asyncio.Event()

    async def work():
        started.set()

    dispatcher.submit(work, "work")
    assert dispatcher.pending == 1

    await dispatcher.drain()

    assert started.is_set()


def test_contain_returns_result():
    assert contain(lambda x: x * 2, 21, description="double") == 42


def test_contain_swallows_failure(caplog):
    def broken():
        raise ValueError("nope")

    with caplog.at_level(logging.ERROR):
        result = contain(broken, description="broken", default="fallback")

    assert result == "fallback"
    assert any("Contained failure in broken" in r.getMessage() for r in caplog.records)
