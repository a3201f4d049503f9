"""
Resilience utilities for reporting without affecting the caller.

This module provides:
- FireAndForget: schedules sink calls without waiting for them and drains
  their failures into the diagnostic log
- contain: runs a callable and logs, instead of raising, any failure
"""

import asyncio
import concurrent.futures
import threading
from typing import Any, Awaitable, Callable, Optional, Set, TypeVar

from crash_guard.utils.logging import get_logger, log_error_with_context

logger = get_logger(__name__)

T = TypeVar('T')


class FireAndForget:
    """
    Detached execution of coroutines whose outcome nobody awaits.

    Inside a running event loop the coroutine becomes a task on that loop.
    Without one (plain threads, sys.excepthook) it runs on a background
    worker thread with its own event loop. Either way, exceptions raised by
    the coroutine are logged and discarded.

    Args:
        max_workers: Worker threads used when no event loop is running
        thread_name_prefix: Name prefix of the worker threads

    Example:
        dispatcher = FireAndForget()
        dispatcher.submit(lambda: sink.log("hello"), "sink.log")
    """

    def __init__(self, max_workers: int = 1, thread_name_prefix: str = "crash-guard"):
        self.max_workers = max_workers
        self.thread_name_prefix = thread_name_prefix

        self._executor: Optional[concurrent.futures.ThreadPoolExecutor] = None
        self._tasks: Set[asyncio.Task] = set()
        self._futures: Set[concurrent.futures.Future] = set()
        self._lock = threading.Lock()

    def submit(self, coro_factory: Callable[[], Awaitable[Any]], description: str) -> None:
        """
        Schedule a coroutine and return immediately.

        Args:
            coro_factory: Zero-argument callable returning the awaitable to run
            description: Label used when logging a failure
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            task = loop.create_task(self._guard(coro_factory, description))
            # The loop only keeps weak references to tasks
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return

        future = self._get_executor().submit(self._run_in_thread, coro_factory, description)
        with self._lock:
            self._futures.add(future)
        future.add_done_callback(self._forget_future)

    @property
    def pending(self) -> int:
        """Number of submitted calls that have not finished yet."""
        with self._lock:
            threaded = len(self._futures)
        return threaded + len(self._tasks)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for calls running on worker threads.

        Args:
            timeout: Seconds to wait at most (None waits forever)

        Returns:
            True when nothing is left pending on the worker threads
        """
        with self._lock:
            futures = list(self._futures)
        if not futures:
            return True
        _, not_done = concurrent.futures.wait(futures, timeout=timeout)
        return not not_done

    async def drain(self) -> None:
        """Wait for every pending call, on the loop and on worker threads."""
        tasks = list(self._tasks)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        with self._lock:
            futures = list(self._futures)
        if futures:
            await asyncio.gather(
                *(asyncio.wrap_future(future) for future in futures),
                return_exceptions=True
            )

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker threads."""
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def _get_executor(self) -> concurrent.futures.ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = concurrent.futures.ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix=self.thread_name_prefix
                )
            return self._executor

    def _forget_future(self, future: concurrent.futures.Future) -> None:
        with self._lock:
            self._futures.discard(future)

    def _run_in_thread(self, coro_factory: Callable[[], Awaitable[Any]], description: str) -> None:
        asyncio.run(self._guard(coro_factory, description))

    @staticmethod
    async def _guard(coro_factory: Callable[[], Awaitable[Any]], description: str) -> None:
        try:
            await coro_factory()
        except Exception as e:
            log_error_with_context(
                logger,
                f"Fire-and-forget call failed: {description}",
                e,
                call=description
            )


def contain(func: Callable[..., T], *args: Any, description: str, default: Any = None, **kwargs: Any) -> Any:
    """
    Call ``func`` and log, rather than raise, any exception.

    Args:
        func: Callable to run
        *args: Positional arguments for func
        description: Label used when logging a failure
        default: Value returned when func raises
        **kwargs: Keyword arguments for func

    Returns:
        func's result, or default on failure
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        log_error_with_context(logger, f"Contained failure in {description}", e, call=description)
        return default
