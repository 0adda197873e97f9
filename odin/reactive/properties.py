"""
Properties - A bag of named Observables.

Events triggered on the bag:
- "change:<key>" (new, old): whenever the observable for <key> changes,
  including changes made directly on the observable
- "change" (key, observable): after every set() call
- "add:<key>" / "add" (key, observable): when a key is added
- "remove:<key>" / "remove" (key, observable): when a key is removed

Keys become event ids, so they may not contain whitespace or dots.

Usage:
    props = Properties({"width": 10})
    props.on("change:width", lambda new, old: print(old, "->", new))
    props.set("width", 20)
    props.add("height").sync("height", "width")
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
import logging
from typing import Any

from odin.core.events.emitter import Emitter
from odin.core.events.strategies import Strategy
from odin.core.exceptions import ValidationError
from odin.reactive.observable import Observable

logger = logging.getLogger(__name__)


@dataclass
class _Property:
    observable: Observable
    change: Callable[..., Any]


def _validate_key(key: Any) -> str:
    if not isinstance(key, str) or not key:
        raise ValidationError(f"Property key must be a non-empty string, got {key!r}")
    if "." in key or any(char.isspace() for char in key):
        raise ValidationError(f"Property key {key!r} may not contain dots or whitespace")
    return key


class Properties(Emitter):
    """
    Named Observables that re-broadcast their changes on the bag.

    get/pull/unpull/sync/unsync take the key of the observable to act on;
    the remaining arguments may be Observables or keys of this bag.
    """

    def __init__(self, properties: Mapping[str, Any] | None = None):
        self._properties: dict[str, _Property] = {}
        if properties:
            self.set(properties)

    def observable(self, key: str) -> Observable | None:
        """The observable stored under `key`, or None."""
        prop = self._properties.get(key)
        return prop.observable if prop is not None else None

    def keys(self) -> list[str]:
        return list(self._properties)

    def add(self, key: str, observable: Observable | None = None) -> Properties:
        """
        Add a property, creating an empty Observable when none is given.

        An existing property is never replaced.
        """
        _validate_key(key)
        if key in self._properties:
            return self

        if observable is None:
            observable = Observable()

        def change(*args: Any) -> None:
            self.trigger(f"change:{key}", *args, strategy=Strategy.EACH)

        self._properties[key] = _Property(observable=observable, change=change)
        observable.on("change", change)
        logger.debug(f"Added property '{key}'")

        self.trigger(f"add:{key} add", key, observable, strategy=Strategy.EACH)
        return self

    def remove(self, key: str) -> Properties:
        """Remove a property and stop re-broadcasting its changes."""
        prop = self._properties.pop(key, None)
        if prop is None:
            return self

        prop.observable.off("change", prop.change)
        logger.debug(f"Removed property '{key}'")

        self.trigger(f"remove:{key} remove", key, prop.observable, strategy=Strategy.EACH)
        return self

    def set(self, key: str | Mapping[str, Any], *args: Any) -> Properties:
        """
        Set one property, or several from a mapping.

        Usage:
            props.set("a", 1)
            props.set({"a": 1, "b": 2})
            props.set("a")  # same as props.set("a", None)
        """
        if isinstance(key, Mapping):
            for name, value in key.items():
                self.set(name, value)
            return self

        observable = self.observable(key)
        if observable is None:
            observable = self.add(key).observable(key)

        observable.set(*args)
        self.trigger("change", key, observable, strategy=Strategy.EACH)
        return self

    def get(self, key: str) -> Any:
        return self._proxy("get", key)

    def pull(self, key: str, *sources: Observable | str) -> Any:
        return self._proxy("pull", key, *sources)

    def unpull(self, key: str, *sources: Observable | str) -> Any:
        return self._proxy("unpull", key, *sources)

    def sync(self, key: str, *peers: Observable | str) -> Any:
        return self._proxy("sync", key, *peers)

    def unsync(self, key: str, *peers: Observable | str) -> Any:
        return self._proxy("unsync", key, *peers)

    def _proxy(self, method: str, key: str, *others: Observable | str) -> Any:
        observable = self.observable(key)
        if observable is None:
            return None

        resolved = [
            other if isinstance(other, Observable) else self.observable(other) for other in others
        ]
        result = getattr(observable, method)(*[other for other in resolved if other is not None])
        return self if result is observable else result

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._properties)

    def __repr__(self) -> str:
        return f"Properties({', '.join(self._properties)})"


__all__ = ["Properties"]
