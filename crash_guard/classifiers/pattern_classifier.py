"""
Text-based error classification.

Fallback used when the runtime type of an error is not recognized. The
lower-cased rendering of the error is checked against fixed phrase lists,
first hit wins.
"""

from typing import Any, Optional, Sequence, Tuple

from crash_guard.models.category import ErrorCategory

from .rendering import render_error
from .type_classifier import classify_by_type


CATEGORY_PATTERNS: Tuple[Tuple[ErrorCategory, Sequence[str]], ...] = (
    (
        ErrorCategory.LOGIC_ERROR,
        (
            "null check operator used on a null value",
            "type 'null' is not a subtype",
            "'nonetype' object has no attribute",
            "'nonetype' object is not subscriptable",
            "'nonetype' object is not callable",
            "'nonetype' object is not iterable",
        ),
    ),
    (ErrorCategory.PERMISSION, ("permission", "unauthorized")),
    (ErrorCategory.SECURITY, ("security", "forbidden")),
    (ErrorCategory.DATABASE_ERROR, ("database", "sqlite")),
)


def contains_any(haystack: str, needles: Sequence[str]) -> bool:
    return any(needle in haystack for needle in needles)


def classify_by_pattern(rendered: str) -> Optional[ErrorCategory]:
    """
    Classify a rendered error message by known phrases.

    Args:
        rendered: Text rendering of the error

    Returns:
        The category of the first matching phrase list, or None
    """
    text = (rendered or "").lower()
    for category, patterns in CATEGORY_PATTERNS:
        if contains_any(text, patterns):
            return category
    return None


def categorize(error: Any) -> ErrorCategory:
    """
    Resolve the category of an error.

    Type inspection first, then message patterns, then UNEXPECTED.
    """
    category = classify_by_type(error)
    if category is not None:
        return category

    category = classify_by_pattern(render_error(error))
    if category is not None:
        return category

    return ErrorCategory.UNEXPECTED
