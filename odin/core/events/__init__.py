"""
Event System - Namespaced, priority-ordered dispatching.

Core Components:
- CallbackRegistry: Priority-ordered callbacks for one event
- Dispatcher: Event strings, namespaces, fan-out to registries
- Strategy: How callback results are combined (each, reduce, all, any)
- Emitter: Event capability for any object
- bus: Process-wide dispatcher with action/filter aliases

Design Philosophy:
- Dispatch is synchronous, callbacks run in the caller's thread
- Lower priority runs first, equal priorities run in registration order
- Namespaces filter, they never identify
- Malformed event strings match nothing instead of raising

Quick Start:
    from odin.core.events import Dispatcher

    dispatcher = Dispatcher()
    dispatcher.on("saved.audit", lambda doc: print("audit", doc), priority=5)
    dispatcher.on("saved", lambda doc: print("saved", doc))

    dispatcher.trigger("saved", "report.pdf")
    dispatcher.off(".audit")
"""

from .base import CallbackFilter, CallbackRecord, current_context
from .bus import (
    add_action,
    add_filter,
    apply_filters,
    do_action,
    get_event_bus,
    remove_action,
    remove_filter,
    set_event_bus,
)
from .dispatcher import Dispatcher, parse_event_string
from .emitter import Emitter
from .registry import CallbackRegistry
from .strategies import BUILTIN_STRATEGIES, Strategy, StrategyFunc, resolve_strategy

__all__ = [
    "BUILTIN_STRATEGIES",
    "CallbackFilter",
    "CallbackRecord",
    "CallbackRegistry",
    "Dispatcher",
    "Emitter",
    "Strategy",
    "StrategyFunc",
    "add_action",
    "add_filter",
    "apply_filters",
    "current_context",
    "do_action",
    "get_event_bus",
    "parse_event_string",
    "remove_action",
    "remove_filter",
    "resolve_strategy",
    "set_event_bus",
]
