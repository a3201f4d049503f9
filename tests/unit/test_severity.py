"""
Unit tests for category to severity mapping.
"""

import pytest

from crash_guard.classifiers.severity import resolve_severity, severity_for
from crash_guard.models.category import ErrorCategory, ErrorSeverity


@pytest.mark.parametrize("category,expected", [
    (ErrorCategory.UNEXPECTED, ErrorSeverity.CRITICAL),
    (ErrorCategory.LOGIC_ERROR, ErrorSeverity.CRITICAL),
    (ErrorCategory.SECURITY, ErrorSeverity.CRITICAL),
    (ErrorCategory.PARSING, ErrorSeverity.HIGH),
    (ErrorCategory.SERVER_ERROR, ErrorSeverity.HIGH),
    (ErrorCategory.PERMISSION, ErrorSeverity.HIGH),
    (ErrorCategory.DATABASE_ERROR, ErrorSeverity.HIGH),
    (ErrorCategory.FILE_ERROR, ErrorSeverity.HIGH),
    (ErrorCategory.TIMEOUT, ErrorSeverity.MEDIUM),
    (ErrorCategory.NETWORK, ErrorSeverity.MEDIUM),
    (ErrorCategory.API_ERROR, ErrorSeverity.MEDIUM),
    (ErrorCategory.CLIENT_ERROR, ErrorSeverity.MEDIUM),
    (ErrorCategory.AUTHENTICATION, ErrorSeverity.MEDIUM),
    (ErrorCategory.AUTHORIZATION, ErrorSeverity.MEDIUM),
    (ErrorCategory.PLATFORM_ERROR, ErrorSeverity.MEDIUM),
    (ErrorCategory.USER_CANCELLED, ErrorSeverity.LOW),
])
def test_severity_for(category, expected):
    assert severity_for(category) == expected


def test_every_category_is_mapped():
    for category in ErrorCategory:
        assert isinstance(severity_for(category), ErrorSeverity)


def test_accepts_category_names():
    assert severity_for("LOGIC_ERROR") == ErrorSeverity.CRITICAL


def test_unknown_value_defaults_to_medium():
    assert severity_for("NOT_A_CATEGORY") == ErrorSeverity.MEDIUM
    assert severity_for(None) == ErrorSeverity.MEDIUM


def test_override_is_used_verbatim():
    assert resolve_severity(ErrorCategory.LOGIC_ERROR, ErrorSeverity.LOW) == ErrorSeverity.LOW
    assert resolve_severity(ErrorCategory.LOGIC_ERROR) == ErrorSeverity.CRITICAL


def test_severity_ordering():
    assert ErrorSeverity.LOW < ErrorSeverity.MEDIUM < ErrorSeverity.HIGH < ErrorSeverity.CRITICAL
    assert max(ErrorSeverity.HIGH, ErrorSeverity.LOW, ErrorSeverity.CRITICAL) == ErrorSeverity.CRITICAL
    assert sorted([ErrorSeverity.CRITICAL, ErrorSeverity.LOW]) == [ErrorSeverity.LOW, ErrorSeverity.CRITICAL]
