"""
Dispatcher - Named events with namespaces, priorities and strategies.

Event strings:
- Events are separated by whitespace: "saved deleted"
- Namespace tags follow the event id after dots: "saved.audit.ui"
- Tags only filter callbacks, they never identify an event
- A token without an id (".audit") is ignored when registering or
  triggering, and applies to every existing event when removing

Malformed tokens ("", ".", "a..b") never raise; they match nothing or
drop their empty segments.

Usage:
    dispatcher = Dispatcher()
    dispatcher.on("saved.audit", write_audit_log, priority=5)
    dispatcher.trigger("saved", document)
    dispatcher.off(".audit")
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
import logging
from typing import Any

from odin.core.config import OdinConfig, get_config
from odin.core.events.base import Callback, CallbackFilter, to_namespace
from odin.core.events.registry import CallbackRegistry
from odin.core.events.strategies import Strategy, StrategyFunc
from odin.core.exceptions import DispatchError

logger = logging.getLogger(__name__)

PerEvent = Callable[[CallbackRegistry, CallbackFilter], Any]


def parse_event_string(events: str) -> list[tuple[str, frozenset[str]]]:
    """
    Split an event string into (id, namespace) pairs.

    Example:
        >>> parse_event_string("a.x b")
        [('a', frozenset({'x'})), ('b', frozenset())]
    """
    parsed = []
    for token in events.split():
        event_id, *tags = token.split(".")
        parsed.append((event_id, to_namespace(tags)))
    return parsed


class Dispatcher:
    """
    Registry of callback registries, keyed by event id.

    Registries are created on first reference and kept for the lifetime
    of the dispatcher, even once emptied.

    Every triggering method returns a list with one result per event
    resolved from the event string, in order. trigger_one() returns the
    single result directly.
    """

    def __init__(self, context: Any = None, config: OdinConfig | None = None):
        """
        Initialize Dispatcher.

        Args:
            context: Default invocation context for every event
            config: Settings for new registries (global config when None)
        """
        self.context = context
        self.config = config if config is not None else get_config()
        self._events: dict[str, CallbackRegistry] = {}

    def registry(self, name: str) -> CallbackRegistry | None:
        """Get the registry for an event id without creating it."""
        return self._events.get(name)

    def names(self) -> list[str]:
        """Ids of every event referenced so far."""
        return list(self._events)

    def _registry_for(self, name: str) -> CallbackRegistry:
        registry = self._events.get(name)
        if registry is None:
            registry = CallbackRegistry(
                name,
                context=self.context,
                default_priority=self.config.default_priority,
                default_strategy=self.config.default_strategy,
                log_dispatch=self.config.log_dispatch,
            )
            self._events[name] = registry
        return registry

    def process(self, events: str, per_event: PerEvent, id_required: bool = True) -> list[Any]:
        """
        Resolve an event string and call `per_event` for each event.

        Args:
            events: Whitespace separated event tokens
            per_event: Called as per_event(registry, filter) where filter
                carries the token's namespace tags
            id_required: When False, a token with tags but no id applies
                to every event that already has a registry

        Returns:
            The results of `per_event`, in order
        """
        targets: list[tuple[str, frozenset[str]]] = []
        for event_id, namespace in parse_event_string(events):
            if event_id:
                targets.append((event_id, namespace))
            elif not id_required and namespace:
                targets.extend((name, namespace) for name in self.names())

        if not targets:
            logger.debug(f"Event string {events!r} resolved to no events")

        return [
            per_event(self._registry_for(event_id), CallbackFilter(namespace=namespace))
            for event_id, namespace in targets
        ]

    def on(
        self,
        events: str,
        fn: Callback | None,
        context: Any = None,
        priority: int | None = None,
    ) -> Dispatcher:
        """
        Register `fn` on every event in `events`.

        Args:
            events: Event string; namespace tags become the callback's tags
            fn: Callable to register (None is ignored)
            context: Owning context `fn` is bound to
            priority: Lower runs first (config default_priority when None)
        """
        self.process(
            events,
            lambda registry, filter: registry.add(
                fn, context=context, namespace=filter.namespace, priority=priority
            ),
        )
        return self

    def once(
        self,
        events: str,
        fn: Callback | None,
        context: Any = None,
        priority: int | None = None,
    ) -> Dispatcher:
        """Register `fn` to run only the first time each event fires."""
        self.process(
            events,
            lambda registry, filter: registry.add_once(
                fn, context=context, namespace=filter.namespace, priority=priority
            ),
        )
        return self

    def off(self, events: str = "", fn: Callback | None = None) -> Dispatcher:
        """
        Remove callbacks.

        Args:
            events: Event string; ".tag" tokens apply to every existing event
            fn: Only remove this callable
        """
        self.process(
            events,
            lambda registry, filter: registry.remove(filter.narrow(fn=fn)),
            id_required=False,
        )
        return self

    def run(
        self,
        events: str,
        args: Sequence[Any] = (),
        strategy: str | Strategy | StrategyFunc | None = None,
        context: Any = None,
    ) -> list[Any]:
        """
        Run every event in `events`.

        Args:
            events: Event string; namespace tags select callbacks
            args: Arguments passed to the callbacks
            strategy: Strategy name, enum member or callable
            context: Invocation context overriding the dispatcher's

        Returns:
            One strategy result per resolved event
        """
        if context is None:
            context = self.context

        return self.process(
            events,
            lambda registry, filter: registry.run(
                args=args, strategy=strategy, context=context, filter=filter
            ),
        )

    def trigger(
        self,
        events: str,
        *args: Any,
        strategy: str | Strategy | StrategyFunc | None = None,
        context: Any = None,
    ) -> list[Any]:
        """Trigger `events`, passing `args` to every callback."""
        return self.run(events, args=args, strategy=strategy, context=context)

    def trigger_with(
        self,
        context: Any,
        events: str,
        *args: Any,
        strategy: str | Strategy | StrategyFunc | None = None,
    ) -> list[Any]:
        """Trigger `events` under an explicit invocation context."""
        return self.run(events, args=args, strategy=strategy, context=context)

    def trigger_one(
        self,
        events: str,
        *args: Any,
        strategy: str | Strategy | StrategyFunc | None = None,
        context: Any = None,
        default: Any = None,
    ) -> Any:
        """
        Trigger a single event and return its result directly.

        Returns `default` when the event string resolves to no event.

        Raises:
            DispatchError: If the event string resolves to several events
        """
        results = self.run(events, args=args, strategy=strategy, context=context)
        if len(results) > 1:
            raise DispatchError(f"Expected a single event, {events!r} resolved to {len(results)}")
        return results[0] if results else default

    def each(self, events: str, *args: Any) -> list[Any]:
        """Call every callback; results are None."""
        return self.run(events, args=args, strategy=Strategy.EACH)

    def action(self, events: str, *args: Any) -> list[Any]:
        """Alias of each()."""
        return self.run(events, args=args, strategy=Strategy.ACTION)

    def reduce(self, events: str, *args: Any) -> list[Any]:
        """Fold the first argument through the callbacks."""
        return self.run(events, args=args, strategy=Strategy.REDUCE)

    def filter(self, events: str, *args: Any) -> list[Any]:
        """Alias of reduce()."""
        return self.run(events, args=args, strategy=Strategy.FILTER)

    def all(self, events: str, *args: Any) -> list[Any]:
        """True per event when every callback returns a truthy value."""
        return self.run(events, args=args, strategy=Strategy.ALL)

    def any(self, events: str, *args: Any) -> list[Any]:
        """True per event when some callback returns a truthy value."""
        return self.run(events, args=args, strategy=Strategy.ANY)

    def each_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.run(events, args=args, strategy=Strategy.EACH, context=context)

    def action_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.run(events, args=args, strategy=Strategy.ACTION, context=context)

    def reduce_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.run(events, args=args, strategy=Strategy.REDUCE, context=context)

    def filter_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.run(events, args=args, strategy=Strategy.FILTER, context=context)

    def all_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.run(events, args=args, strategy=Strategy.ALL, context=context)

    def any_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.run(events, args=args, strategy=Strategy.ANY, context=context)

    def get_handler_count(self, name: str) -> int:
        """Get number of callbacks registered for an event id."""
        registry = self._events.get(name)
        return len(registry) if registry is not None else 0

    def get_stats(self) -> dict[str, Any]:
        """Get dispatcher statistics for monitoring."""
        return {
            "total_events": len(self._events),
            "total_callbacks": sum(len(registry) for registry in self._events.values()),
            "callbacks_by_event": {name: len(registry) for name, registry in self._events.items()},
        }

    def __contains__(self, name: object) -> bool:
        return name in self._events

    def __repr__(self) -> str:
        return f"Dispatcher(events={len(self._events)})"


__all__ = [
    "Dispatcher",
    "parse_event_string",
]
