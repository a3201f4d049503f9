"""Crash-reporting backends: Sentry and in-memory."""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import sentry_sdk

from crash_guard.classifiers.rendering import render_error, render_stack
from crash_guard.config import Settings, settings as default_settings
from crash_guard.errors import ReporterNotReadyError
from crash_guard.utils.logging import get_logger

logger = get_logger(__name__)


def _key_value(key: str, value: Any) -> Any:
    """Backends accept str, bool and numbers; everything else is stringified."""
    if isinstance(value, (str, bool, int, float)):
        return value
    logger.debug(
        f"Custom key '{key}' value of type {type(value).__name__} was converted to a string",
        extra={"custom_key": key}
    )
    return str(value)


class SentryBackend:
    """
    Crash-reporting backend on top of sentry-sdk.

    Custom keys become tags, log messages become breadcrumbs, and fatal
    reports are captured at the ``fatal`` level.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self._initialized = False

    def setup(self, collection_enabled: bool) -> None:
        """Initialize sentry-sdk. Idempotent."""
        if self._initialized:
            return

        kwargs: Dict[str, Any] = {
            "dsn": self.settings.sentry_dsn if collection_enabled else None,
            "environment": self.settings.environment,
            "sample_rate": self.settings.sample_rate,
            "traces_sample_rate": 0.0,
            "attach_stacktrace": True,
        }
        if self.settings.release:
            kwargs["release"] = self.settings.release

        sentry_sdk.init(**kwargs)
        self._initialized = True
        logger.info(
            f"Sentry initialized: environment={self.settings.environment}, "
            f"collection_enabled={collection_enabled}"
        )

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise ReporterNotReadyError("Sentry backend used before setup()")

    def set_custom_key(self, key: str, value: Any) -> None:
        self._require_initialized()
        sentry_sdk.set_tag(key, _key_value(key, value))

    def set_user_identifier(self, identifier: str) -> None:
        self._require_initialized()
        sentry_sdk.set_user({"id": identifier})

    def log(self, message: str) -> None:
        self._require_initialized()
        sentry_sdk.add_breadcrumb(message=message, category="log", level="info")

    def record_error(
        self,
        exception: Any,
        stack: Any,
        *,
        fatal: bool,
        reason: Optional[str],
        information: Iterable[str],
    ) -> None:
        self._require_initialized()
        level = "fatal" if fatal else "error"

        with sentry_sdk.push_scope() as scope:
            scope.level = level
            scope.set_tag("fatal", fatal)
            if reason:
                scope.set_extra("reason", reason)
            scope.set_extra("information", list(information))
            if stack is not None and stack is not getattr(exception, "__traceback__", None):
                scope.set_extra("stack_trace", render_stack(stack))

            if isinstance(exception, BaseException):
                sentry_sdk.capture_exception(exception)
            else:
                sentry_sdk.capture_message(render_error(exception), level=level)

    def flush(self, timeout: float = 2.0) -> None:
        if self._initialized:
            sentry_sdk.flush(timeout=timeout)


class InMemoryBackend:
    """
    Backend that keeps everything in memory.

    Useful in development and tests, where nothing should leave the process.
    """

    def __init__(self):
        self.initialized = False
        self.collection_enabled = False
        self.custom_keys: Dict[str, Any] = {}
        self.user_identifier: Optional[str] = None
        self.breadcrumbs: List[str] = []
        self.reports: List[Dict[str, Any]] = []

    def setup(self, collection_enabled: bool) -> None:
        self.initialized = True
        self.collection_enabled = collection_enabled

    def set_custom_key(self, key: str, value: Any) -> None:
        self.custom_keys[key] = _key_value(key, value)

    def set_user_identifier(self, identifier: str) -> None:
        self.user_identifier = identifier

    def log(self, message: str) -> None:
        self.breadcrumbs.append(message)

    def record_error(
        self,
        exception: Any,
        stack: Any,
        *,
        fatal: bool,
        reason: Optional[str],
        information: Iterable[str],
    ) -> None:
        if not self.initialized:
            raise ReporterNotReadyError("In-memory backend used before setup()")
        self.reports.append({
            "exception": exception,
            "stack": stack,
            "fatal": fatal,
            "reason": reason,
            "information": list(information),
            "recorded_at": datetime.now(timezone.utc),
        })

    def flush(self, timeout: float = 2.0) -> None:
        pass
