"""
Odin - Namespaced, priority-ordered events with observable values.

Main Features:
- Named events with dotted namespace tags ("saved.audit")
- Priority ordering, stable for equal priorities
- Pluggable dispatch strategies (each, reduce, all, any)
- One-shot callbacks
- Observable values and property bags with pull/sync propagation

Quick Start:
    from odin import Dispatcher

    dispatcher = Dispatcher()
    dispatcher.on("title", str.strip)
    dispatcher.on("title", str.upper, priority=20)
    dispatcher.trigger_one("title", "  odin ", strategy="reduce")  # "ODIN"

Architecture:
    Caller → Dispatcher (event strings) → CallbackRegistry (filter) → Strategy
"""

__version__ = "0.1.0"

from odin.core.config import OdinConfig, get_config, set_config
from odin.core.events import (
    CallbackFilter,
    CallbackRecord,
    CallbackRegistry,
    Dispatcher,
    Emitter,
    Strategy,
    add_action,
    add_filter,
    apply_filters,
    current_context,
    do_action,
    get_event_bus,
    remove_action,
    remove_filter,
    set_event_bus,
)
from odin.core.exceptions import (
    ConfigurationError,
    DispatchError,
    OdinError,
    UnknownStrategyError,
    ValidationError,
)
from odin.reactive import Observable, Properties

__all__ = [
    "CallbackFilter",
    "CallbackRecord",
    "CallbackRegistry",
    "ConfigurationError",
    "DispatchError",
    "Dispatcher",
    "Emitter",
    "Observable",
    "OdinConfig",
    "OdinError",
    "Properties",
    "Strategy",
    "UnknownStrategyError",
    "ValidationError",
    "__version__",
    "add_action",
    "add_filter",
    "apply_filters",
    "current_context",
    "do_action",
    "get_config",
    "get_event_bus",
    "remove_action",
    "remove_filter",
    "set_config",
    "set_event_bus",
]
