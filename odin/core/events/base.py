"""
Base Event Types - Callback records, filters and invocation context.

Core Concepts:
- CallbackRecord: One registered callback with its priority and namespaces
- CallbackFilter: Optional criteria used to select records
- current_context(): The context a callback is being invoked under

Python callables have no implicit receiver, so the invocation context of a
dispatch is published through a ContextVar for the duration of each call.
Callbacks registered with an owning context are pre-bound to it, and that
binding always wins over whatever context the dispatch resolved.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from contextvars import ContextVar
from dataclasses import dataclass, field
import functools
from typing import Any

Callback = Callable[..., Any]
Namespace = frozenset[str]

_invocation_context: ContextVar[Any] = ContextVar("odin_invocation_context", default=None)


def current_context() -> Any:
    """
    Context of the callback currently being dispatched.

    Returns None outside of a dispatch.
    """
    return _invocation_context.get()


def invoke(callback: Callback, context: Any, args: Sequence[Any]) -> Any:
    """Call `callback` with `args` while `context` is the current context."""
    token = _invocation_context.set(context)
    try:
        return callback(*args)
    finally:
        _invocation_context.reset(token)


def bind(fn: Callback, context: Any) -> Callback:
    """
    Pre-bind `fn` to `context`.

    The returned callable ignores the context of the dispatch invoking it.
    """

    @functools.wraps(fn)
    def bound(*args: Any) -> Any:
        return invoke(fn, context, args)

    return bound


def to_namespace(tags: Iterable[str] | None) -> Namespace:
    """Normalize tags to a namespace set, dropping empty tags."""
    if not tags:
        return frozenset()
    if isinstance(tags, str):
        tags = (tags,)
    return frozenset(tag for tag in tags if tag)


@dataclass(slots=True, eq=False)
class CallbackRecord:
    """
    A callback registered on one event.

    Attributes:
        fn: Callable stored in the registry (a one-shot wrapper for `once`)
        context: Owning context the callback is bound to, if any
        namespace: Tags used only for filtering
        priority: Lower runs first
        listener: The callable the caller registered
        bound: Callable actually invoked, computed once at registration
    """

    fn: Callback
    context: Any = None
    namespace: Namespace = field(default_factory=frozenset)
    priority: int = 10
    listener: Callback | None = None
    bound: Callback = field(init=False)

    def __post_init__(self) -> None:
        self.namespace = to_namespace(self.namespace)
        if self.listener is None:
            self.listener = self.fn
        self.bound = bind(self.fn, self.context) if self.context is not None else self.fn

    def __repr__(self) -> str:
        tags = ".".join(sorted(self.namespace))
        return (
            f"CallbackRecord(fn={_name_of(self.listener)}, "
            f"priority={self.priority}, namespace={tags!r})"
        )


@dataclass(frozen=True, slots=True)
class CallbackFilter:
    """
    Criteria for selecting callback records.

    Every field is optional; None acts as a wildcard, so CallbackFilter()
    matches every record.

    - fn: equal to the record's stored callable or to its listener
    - context: the very same owning context object
    - priority: equal priority
    - namespace: every tag present on the record
    """

    fn: Callback | None = None
    context: Any = None
    priority: int | None = None
    namespace: Namespace | None = None

    def __post_init__(self) -> None:
        if self.namespace is not None:
            object.__setattr__(self, "namespace", to_namespace(self.namespace))

    def matches(self, record: CallbackRecord) -> bool:
        if self.fn is not None and not (self.fn == record.fn or self.fn == record.listener):
            return False
        if self.context is not None and self.context is not record.context:
            return False
        if self.priority is not None and self.priority != record.priority:
            return False
        return not self.namespace or self.namespace <= record.namespace

    def narrow(self, **criteria: Any) -> CallbackFilter:
        """Copy of this filter with the given non-None criteria replaced."""
        values = {
            "fn": self.fn,
            "context": self.context,
            "priority": self.priority,
            "namespace": self.namespace,
        }
        values.update({key: value for key, value in criteria.items() if value is not None})
        return CallbackFilter(**values)


def _name_of(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


__all__ = [
    "Callback",
    "CallbackFilter",
    "CallbackRecord",
    "Namespace",
    "bind",
    "current_context",
    "invoke",
    "to_namespace",
]
