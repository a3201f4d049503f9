"""
Fatal / non-fatal verdict for crash reporting.

Independent of the category: decides whether a report is marked as a crash
or as a logged event. Rules run strictly in this order, first decisive rule
wins:

1. fatal message patterns            -> fatal
2. non-fatal message patterns        -> non-fatal
3. non-fatal stack origin patterns   -> non-fatal
4. non-fatal framework context       -> non-fatal
5. anything else                     -> fatal

Patterns are lower-case substrings, not regular expressions.
"""

from typing import Any, Optional

from crash_guard.models.occurrence import FrameworkErrorDetails

from .pattern_classifier import contains_any
from .rendering import render_error, render_stack, stack_of


# Severe, unrecoverable application state
FATAL_PATTERNS = (
    "assertion failed",
    "assertionerror",
    "null check operator used on a null value",
    "nullpointerexception",
    "'nonetype' object",
    "nosuchmethoderror",
    "typeerror",
    "rangeerror",
    "indexerror",
    "argumenterror",
    "stateerror",
    "unsupportederror",
    "concurrent modification",
    "changed size during iteration",
    "out of memory",
    "outofmemoryerror",
    "memoryerror",
    "failed to allocate",
    "deadsystemexception",
    "system died",
    "bad state",
    "cast error",
    "stackoverflowerror",
    "recursionerror",
    "maximum recursion depth exceeded",
    "cyclic initialization",
    "runtimeexception",
    "illegalargumentexception",
    "illegalstateexception",
    "arrayindexoutofboundsexception",
    "indexoutofboundsexception",
    "signal sigabrt",
    "signal sigsegv",
    "segmentation fault",
    "fatal error",
    "unrecognized selector sent to instance",
    "binding has not yet been initialized",
    "referenced before assignment",
)

# Recoverable or expected failures: network, images, layout, integrations
NON_FATAL_PATTERNS = (
    # Image loading
    "image codec",
    "networkimageloadexception",
    "resolving an image codec",
    "failed to load network image",
    "unidentifiedimageerror",
    "cannot identify image file",
    # Network
    "clientexception",
    "socketexception",
    "connectionerror",
    "connectionreseterror",
    "connectionrefusederror",
    "connectionabortederror",
    "brokenpipeerror",
    "connection closed",
    "connection reset",
    "connection refused",
    "connection timeout",
    "connection failed",
    "handshake exception",
    "certificate verify failed",
    "certificate_verify_failed",
    "sslerror",
    "httpsexception",
    "host lookup failed",
    "name or service not known",
    "gaierror",
    "no internet connection",
    "dioexception",
    "httpstatuserror",
    "connecterror",
    "remoteprotocolerror",
    "software caused connection abort",
    "timeout",
    "timed out",
    # Layout and rendering
    "renderbox was not laid out",
    "renderflex overflowed",
    "viewport was given unbounded height",
    "a renderwidget was told to layout",
    # Platform integrations
    "platformexception",
    "missingpluginexception",
    "platformerror",
    "missingintegrationerror",
    # Optional data and files
    "formatexception",
    "jsondecodeerror",
    "invalid literal for",
    "could not convert string to",
    "does not match format",
    "badly formed hexadecimal uuid string",
    "invalid isoformat string",
    "pathexception",
    "filenotfounderror",
)

# Frames that commonly produce recoverable errors
NON_FATAL_STACK_PATTERNS = (
    "imagestream",
    "image_stream",
    "network_image",
    "cached_network_image",
    "_loadasync",
    "imagecodec",
    "decodeimagefromlist",
    "render_object.dart",
    "pil/image.py",
    "pil/imagefile.py",
)

# Phases of a framework error context that do not take the app down
NON_FATAL_CONTEXT_PATTERNS = (
    "during build",
    "building widget",
    "laying out",
    "painting",
    "compositing",
    "widget",
    "render",
    "hot reload",
)


def matches_fatal_pattern(message: str) -> bool:
    return contains_any(message.lower(), FATAL_PATTERNS)


def matches_non_fatal_pattern(message: str) -> bool:
    return contains_any(message.lower(), NON_FATAL_PATTERNS)


def matches_non_fatal_stack(stack: str) -> bool:
    return contains_any(stack.lower(), NON_FATAL_STACK_PATTERNS)


def matches_non_fatal_context(context: Optional[str]) -> bool:
    return contains_any((context or "").lower(), NON_FATAL_CONTEXT_PATTERNS)


def is_fatal(error: Any, stack_trace: Any = None) -> bool:
    """
    Decide whether an error should be reported as fatal.

    Args:
        error: The error value, or FrameworkErrorDetails from a framework hook
        stack_trace: Optional stack trace; defaults to the error's traceback

    Returns:
        True when the report should be marked as a crash
    """
    details = error if isinstance(error, FrameworkErrorDetails) else None
    if details is not None:
        error = details.exception
        if stack_trace is None:
            stack_trace = details.stack

    if stack_trace is None:
        stack_trace = stack_of(error)

    message = render_error(error)
    if matches_fatal_pattern(message):
        return True
    if matches_non_fatal_pattern(message):
        return False

    if matches_non_fatal_stack(render_stack(stack_trace)):
        return False

    if details is not None and matches_non_fatal_context(details.context):
        return False

    return True
