"""
Global event loop - A process-wide Dispatcher with action/filter aliases.

Actions are callbacks run for their side effects, filters are callbacks
that transform a value in priority order:

    add_action("saved", notify)
    do_action("saved", document)

    add_filter("title", str.strip)
    add_filter("title", str.title, priority=20)
    apply_filters("title", "  hello world ")  # "Hello World"

The aliases always act on the current global dispatcher, so a test can
swap it out with set_event_bus().
"""

from __future__ import annotations

from typing import Any

from odin.core.events.base import Callback
from odin.core.events.dispatcher import Dispatcher
from odin.core.events.strategies import Strategy

_global_bus: Dispatcher = Dispatcher()


def get_event_bus() -> Dispatcher:
    """Get the global Dispatcher instance."""
    return _global_bus


def set_event_bus(bus: Dispatcher) -> None:
    """
    Set the global Dispatcher instance.

    Useful for testing or custom configurations.

    Args:
        bus: Dispatcher instance to use globally
    """
    global _global_bus
    _global_bus = bus


def add_action(events: str, fn: Callback, context: Any = None, priority: int | None = None) -> None:
    """Register an action on the global dispatcher."""
    _global_bus.on(events, fn, context=context, priority=priority)


def add_filter(events: str, fn: Callback, context: Any = None, priority: int | None = None) -> None:
    """Register a filter on the global dispatcher."""
    _global_bus.on(events, fn, context=context, priority=priority)


def remove_action(events: str, fn: Callback | None = None) -> None:
    """Remove actions from the global dispatcher."""
    _global_bus.off(events, fn)


def remove_filter(events: str, fn: Callback | None = None) -> None:
    """Remove filters from the global dispatcher."""
    _global_bus.off(events, fn)


def do_action(events: str, *args: Any) -> None:
    """Run every action registered for `events`."""
    _global_bus.trigger(events, *args, strategy=Strategy.EACH)


def apply_filters(events: str, value: Any, *args: Any) -> Any:
    """
    Pass `value` through every filter registered for a single event.

    Filters are called as filter(value, *args) and each return value is
    handed to the next filter.

    Returns:
        The filtered value, or `value` itself if no event was resolved
    """
    return _global_bus.trigger_one(events, value, *args, strategy=Strategy.REDUCE, default=value)


__all__ = [
    "add_action",
    "add_filter",
    "apply_filters",
    "do_action",
    "get_event_bus",
    "remove_action",
    "remove_filter",
    "set_event_bus",
]
