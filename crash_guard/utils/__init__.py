"""
Utility modules for crash-guard.
"""

from crash_guard.utils.logging import (
    get_logger,
    setup_logging,
    JSONFormatter,
    ContextLoggerAdapter,
    log_classification,
    log_error_with_context,
)
from crash_guard.utils.resilience import (
    FireAndForget,
    contain,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "JSONFormatter",
    "ContextLoggerAdapter",
    "log_classification",
    "log_error_with_context",
    "FireAndForget",
    "contain",
]
