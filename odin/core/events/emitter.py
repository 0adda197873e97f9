"""
Emitter - Event capability for any object.

Subclasses get a private Dispatcher, created on first use, that runs
callbacks with the object itself as the default invocation context.

Usage:
    class Document(Emitter):
        def save(self):
            self.trigger("saved", self)

    doc = Document()
    doc.on("saved", lambda d: print("saved", d))
"""

from __future__ import annotations

from typing import Any

from odin.core.events.base import Callback
from odin.core.events.dispatcher import Dispatcher
from odin.core.events.strategies import Strategy, StrategyFunc


class Emitter:
    """Mix-in delegating on/once/off/trigger to a lazily created Dispatcher."""

    _events: Dispatcher | None = None

    @property
    def events(self) -> Dispatcher:
        """The object's own dispatcher, bound to the object as context."""
        if self._events is None:
            self._events = Dispatcher(context=self)
        return self._events

    def on(
        self, events: str, fn: Callback | None, context: Any = None, priority: int | None = None
    ) -> Emitter:
        self.events.on(events, fn, context=context, priority=priority)
        return self

    def once(
        self, events: str, fn: Callback | None, context: Any = None, priority: int | None = None
    ) -> Emitter:
        self.events.once(events, fn, context=context, priority=priority)
        return self

    def off(self, events: str = "", fn: Callback | None = None) -> Emitter:
        self.events.off(events, fn)
        return self

    def trigger(
        self, events: str, *args: Any, strategy: str | Strategy | StrategyFunc | None = None
    ) -> list[Any]:
        """Trigger `events` on this object (config default_strategy when None)."""
        return self.events.trigger(events, *args, strategy=strategy)

    def trigger_with(self, context: Any, events: str, *args: Any) -> list[Any]:
        return self.events.trigger_with(context, events, *args)


__all__ = ["Emitter"]
