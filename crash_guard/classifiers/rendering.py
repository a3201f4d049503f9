"""Text rendering of errors and stack traces for pattern matching."""

import traceback
from types import TracebackType
from typing import Any


def render_error(error: Any) -> str:
    """
    Render an error the way it appears in a log line.

    Exceptions render as ``"<ClassName>: <message>"`` (just the class name
    when the message is empty); other values use ``str()``. Never raises.
    """
    try:
        if isinstance(error, BaseException):
            name = type(error).__name__
            message = str(error)
            return f"{name}: {message}" if message else name
        return str(error)
    except Exception:
        return f"<unprintable {type(error).__name__}>"


def render_stack(stack: Any) -> str:
    """
    Render a stack trace to text. Never raises.

    Accepts a traceback object, a ``traceback.StackSummary``, a sequence of
    frame summaries or strings, or an already rendered string.
    """
    if stack is None:
        return ""
    try:
        if isinstance(stack, str):
            return stack
        if isinstance(stack, TracebackType):
            return "".join(traceback.format_tb(stack))
        if isinstance(stack, traceback.StackSummary):
            return "".join(stack.format())
        if isinstance(stack, (list, tuple)):
            if all(isinstance(frame, traceback.FrameSummary) for frame in stack):
                return "".join(traceback.StackSummary.from_list(list(stack)).format())
            return "\n".join(str(frame) for frame in stack)
        return str(stack)
    except Exception:
        return ""


def stack_of(error: Any) -> Any:
    """Return the traceback attached to an exception, if any."""
    return getattr(error, "__traceback__", None)
