"""
Unit tests for navigation breadcrumbs.
"""

from dataclasses import dataclass
from typing import Optional
from unittest.mock import MagicMock

import pytest

from crash_guard.services.navigation import NavigationObserver, route_name
from crash_guard.utils.resilience import FireAndForget


@dataclass
class Route:
    name: Optional[str] = None


@pytest.fixture
def observer(fake_sink):
    dispatcher = FireAndForget()
    yield NavigationObserver(fake_sink, dispatcher=dispatcher)
    dispatcher.shutdown()


def test_push_named_route(observer, fake_sink):
    observer.did_push(Route("profile"), Route("home"))
    observer.dispatcher.flush(timeout=5)

    assert fake_sink.messages == ["Navigation: Push to profile"]
    assert fake_sink.custom_keys["current_screen"] == "profile"


def test_pop_logs_previous_route(observer, fake_sink):
    observer.did_pop(Route("profile"), Route("home"))
    observer.dispatcher.flush(timeout=5)

    assert fake_sink.messages == ["Navigation: Pop to home"]
    assert fake_sink.custom_keys["current_screen"] == "home"


def test_replace_and_remove(observer, fake_sink):
    observer.did_replace(new_route="settings", old_route="profile")
    observer.did_remove(Route("settings"), "home")
    observer.dispatcher.flush(timeout=5)

    assert fake_sink.messages == ["Navigation: Replace to settings", "Navigation: Remove to home"]


def test_unnamed_route(observer, fake_sink):
    observer.did_push(Route())
    observer.dispatcher.flush(timeout=5)

    assert fake_sink.messages == ["Navigation: Push to unnamed route (Route)"]
    assert fake_sink.custom_keys["current_screen"] == "Unnamed Route: Route"


def test_dispatcher_failure_does_not_reach_caller(fake_sink):
    dispatcher = MagicMock(spec=FireAndForget)
    dispatcher.submit.side_effect = RuntimeError("cannot schedule new futures after interpreter shutdown")
    observer = NavigationObserver(fake_sink, dispatcher=dispatcher)

    observer.did_push(Route("home"))
    observer.did_pop(Route("profile"), Route("home"))

    assert dispatcher.submit.call_count == 4
    assert fake_sink.messages == []

def test_route_name():
    assert route_name("home") == "home"
    assert route_name(Route("home")) == "home"
    assert route_name(None) is None
    assert route_name(object()) is None
