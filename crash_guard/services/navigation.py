"""Navigation breadcrumbs for crash reports."""

from typing import Any, Optional

from crash_guard.services.reporter import ReporterSink
from crash_guard.utils.resilience import FireAndForget, contain


def route_name(route: Any) -> Optional[str]:
    """Name of a route: a string, or an object with a ``name`` attribute."""
    if route is None:
        return None
    if isinstance(route, str):
        return route
    return getattr(route, "name", None)


class NavigationObserver:
    """
    Records screen changes as breadcrumbs and as the ``current_screen`` key.

    Args:
        sink: Reporter sink receiving the breadcrumbs
        dispatcher: Fire-and-forget dispatcher for sink calls
    """

    def __init__(self, sink: ReporterSink, dispatcher: Optional[FireAndForget] = None):
        self.sink = sink
        self.dispatcher = dispatcher or FireAndForget()

    def did_push(self, route: Any, previous_route: Any = None) -> None:
        self._log_screen_change(route, "Push")

    def did_pop(self, route: Any, previous_route: Any = None) -> None:
        # The screen we are returning to
        self._log_screen_change(previous_route, "Pop")

    def did_replace(self, new_route: Any = None, old_route: Any = None) -> None:
        self._log_screen_change(new_route, "Replace")

    def did_remove(self, route: Any, previous_route: Any = None) -> None:
        self._log_screen_change(previous_route, "Remove")

    def _log_screen_change(self, route: Any, action: str) -> None:
        name = route_name(route)
        if name:
            message = f"Navigation: {action} to {name}"
            screen = name
        else:
            message = f"Navigation: {action} to unnamed route ({type(route).__name__})"
            screen = f"Unnamed Route: {type(route).__name__}"

        contain(
            self.dispatcher.submit,
            lambda: self.sink.log(message),
            "navigation log",
            description="navigation breadcrumb"
        )
        contain(
            self.dispatcher.submit,
            lambda: self.sink.set_custom_key("current_screen", screen),
            "navigation custom key",
            description="navigation breadcrumb"
        )
