"""
Observable - A value that announces its changes.

Every Observable is an Emitter: setting a different value triggers a
"change" event with (new_value, old_value).

Propagation:
- pull(source): follow every change of `source`
- sync(peer): pull in both directions until unsync()

Usage:
    celsius = Observable(20)
    mirror = Observable().pull(celsius)
    celsius.set(25)
    mirror.get()  # 25
"""

from __future__ import annotations

from typing import Any

from odin.core.events.emitter import Emitter
from odin.core.events.strategies import Strategy


def _unchanged(old: Any, new: Any) -> bool:
    return old is new or (type(old) is type(new) and old == new)


class Observable(Emitter):
    """Holds a single value and triggers "change" when it changes."""

    def __init__(self, value: Any = None):
        self._value = value

    @property
    def value(self) -> Any:
        return self.get()

    def get(self) -> Any:
        return self._value

    def update(self, value: Any, *args: Any) -> Observable:
        """
        Store a new value without triggering anything.

        Subclasses can override this to coerce or validate values; set()
        reads the stored value back with get() before announcing it.
        """
        self._value = value
        return self

    def set(self, value: Any = None, *args: Any) -> Observable:
        """
        Set the value and trigger "change" with (new, old) if it differs.

        Extra arguments are handed to update() and otherwise ignored, so
        set() can itself be used as a "change" callback. Listeners always
        run with the each strategy, whatever the configured default, so
        every one of them receives (new, old).
        """
        old = self.get()
        if _unchanged(old, value):
            return self

        self.update(value, *args)
        self.trigger("change", self.get(), old, strategy=Strategy.EACH)
        return self

    def pull(self, *sources: Observable) -> Observable:
        """Follow the changes of every source."""
        for source in sources:
            source.on("change", self.set)
        return self

    def unpull(self, *sources: Observable) -> Observable:
        """Stop following the given sources."""
        for source in sources:
            source.off("change", self.set)
        return self

    def sync(self, *peers: Observable) -> Observable:
        """Keep the value equal to every peer's, in both directions."""
        for peer in peers:
            self.pull(peer)
            peer.pull(self)
        return self

    def unsync(self, *peers: Observable) -> Observable:
        for peer in peers:
            self.unpull(peer)
            peer.unpull(self)
        return self

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"


__all__ = ["Observable"]
