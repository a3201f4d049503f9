"""Shared fixtures for crash-guard tests."""

from typing import Any, Dict, Iterable, List, Optional

import httpx
import pytest


class FakeSink:
    """Reporter sink keeping every call in memory."""

    def __init__(self, ready: bool = True, fail: bool = False):
        self.ready = ready
        self.fail = fail
        self.records: List[Dict[str, Any]] = []
        self.messages: List[str] = []
        self.custom_keys: Dict[str, Any] = {}

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def initialize(self) -> None:
        self.ready = True

    async def record_error(
        self,
        exception: Any,
        stack: Any,
        *,
        fatal: bool = False,
        reason: Optional[str] = None,
        information: Iterable[str] = (),
    ) -> None:
        if self.fail:
            raise RuntimeError("sink is down")
        self.records.append({
            "exception": exception,
            "stack": stack,
            "fatal": fatal,
            "reason": reason,
            "information": list(information),
        })

    async def log(self, message: str) -> None:
        self.messages.append(message)

    async def set_custom_key(self, key: str, value: Any) -> None:
        self.custom_keys[key] = value


def make_status_error(status_code: int, url: str = "https://api.example.com/users/42") -> httpx.HTTPStatusError:
    """Build the error raised by ``Response.raise_for_status()``."""
    request = httpx.Request("GET", url)
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"Client error '{status_code}' for url '{url}'",
        request=request,
        response=response
    )


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def request_obj() -> httpx.Request:
    return httpx.Request("GET", "https://api.example.com/users/42")


@pytest.fixture
def sink_factory():
    """Factory for sinks in a given state."""
    return FakeSink


@pytest.fixture
def status_error():
    """Factory for httpx status errors."""
    return make_status_error
