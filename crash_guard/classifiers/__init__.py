"""
Error classifiers.

All functions here are pure: no I/O, no shared state, deterministic for a
given input.
"""

from .fatal import is_fatal
from .pattern_classifier import categorize, classify_by_pattern
from .rendering import render_error, render_stack
from .severity import resolve_severity, severity_for
from .type_classifier import classify_by_type, transport_error_type

__all__ = [
    "classify_by_type",
    "classify_by_pattern",
    "categorize",
    "is_fatal",
    "severity_for",
    "resolve_severity",
    "render_error",
    "render_stack",
    "transport_error_type",
]
