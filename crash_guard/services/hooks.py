"""
Process-level error hook adapters.

Each adapter translates one kind of platform error signal into a call on
CrashReportingService:

- sys.excepthook        -> handle_uncaught_error
- threading.excepthook  -> handle_platform_error
- asyncio loop handler  -> handle_framework_error
"""

import asyncio
import sys
import threading
from typing import Any, Callable, Dict

from crash_guard.models.occurrence import FrameworkErrorDetails
from crash_guard.services.crash_reporting import CrashReportingService
from crash_guard.utils.logging import get_logger
from crash_guard.utils.resilience import contain

logger = get_logger(__name__)


def install_exception_hooks(service: CrashReportingService) -> Callable[[], None]:
    """
    Route uncaught exceptions of the process and its threads to ``service``.

    Previously installed hooks still run after reporting.

    Returns:
        Callable restoring the previous hooks
    """
    previous_excepthook = sys.excepthook
    previous_threading_hook = threading.excepthook

    def excepthook(exc_type, exc_value, exc_traceback):
        if not issubclass(exc_type, KeyboardInterrupt):
            contain(
                service.handle_uncaught_error,
                exc_value,
                exc_traceback,
                description="sys.excepthook"
            )
        previous_excepthook(exc_type, exc_value, exc_traceback)

    def threading_excepthook(args):
        if args.exc_type is not SystemExit:
            contain(
                service.handle_platform_error,
                args.exc_value,
                args.exc_traceback,
                description="threading.excepthook"
            )
        previous_threading_hook(args)

    sys.excepthook = excepthook
    threading.excepthook = threading_excepthook
    logger.info("Exception hooks installed")

    def restore() -> None:
        sys.excepthook = previous_excepthook
        threading.excepthook = previous_threading_hook
        logger.info("Exception hooks restored")

    return restore


def asyncio_exception_handler(
    service: CrashReportingService,
    call_default: bool = True
) -> Callable[[asyncio.AbstractEventLoop, Dict[str, Any]], None]:
    """
    Build an event loop exception handler reporting to ``service``.

    The loop's message (e.g. "Task exception was never retrieved") becomes
    the context of the reported FrameworkErrorDetails.

    Example:
        loop.set_exception_handler(asyncio_exception_handler(service))
    """

    def handler(loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        exception = context.get("exception")
        message = context.get("message", "")
        details = FrameworkErrorDetails(
            exception=exception if exception is not None else message,
            stack=getattr(exception, "__traceback__", None),
            library="asyncio",
            context=message,
        )
        contain(service.handle_framework_error, details, description="asyncio exception handler")
        if call_default:
            loop.default_exception_handler(context)

    return handler
