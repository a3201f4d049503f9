"""Contracts between crash-guard and the crash-reporting backend."""

from typing import Any, Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class ReporterSink(Protocol):
    """
    Narrow interface the error handler reports through.

    Category, severity and fatal verdict reach the sink only through the
    ``fatal`` flag and the ``information`` lines.
    """

    @property
    def is_ready(self) -> bool: ...

    async def initialize(self) -> None: ...

    async def record_error(
        self,
        exception: Any,
        stack: Any,
        *,
        fatal: bool = False,
        reason: Optional[str] = None,
        information: Iterable[str] = (),
    ) -> None: ...

    async def log(self, message: str) -> None: ...

    async def set_custom_key(self, key: str, value: Any) -> None: ...


@runtime_checkable
class CrashBackend(Protocol):
    """Synchronous crash-reporting backend wrapped by CrashReportingService."""

    def setup(self, collection_enabled: bool) -> None: ...

    def set_custom_key(self, key: str, value: Any) -> None: ...

    def set_user_identifier(self, identifier: str) -> None: ...

    def log(self, message: str) -> None: ...

    def record_error(
        self,
        exception: Any,
        stack: Any,
        *,
        fatal: bool,
        reason: Optional[str],
        information: Iterable[str],
    ) -> None: ...

    def flush(self, timeout: float) -> None: ...
