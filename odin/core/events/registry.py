"""
CallbackRegistry - Priority-ordered callbacks for a single event.

Responsibilities:
- Keep callbacks sorted by priority (stable for equal priorities)
- Add, add-once and remove callbacks
- Select callbacks with a CallbackFilter
- Run the selected callbacks through a dispatch strategy

Callbacks are snapshotted before a strategy sees them, so callbacks that
add or remove callbacks while running only affect later runs.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator, Sequence
import logging
from typing import Any

from odin.core.events.base import Callback, CallbackFilter, CallbackRecord, to_namespace
from odin.core.events.strategies import Strategy, StrategyFunc, resolve_strategy

logger = logging.getLogger(__name__)


class CallbackRegistry:
    """
    Ordered collection of the callbacks registered for one event.

    Usage:
        registry = CallbackRegistry("saved")
        registry.add(on_saved, priority=5)
        registry.run(args=[document])
    """

    def __init__(
        self,
        name: str = "",
        context: Any = None,
        default_priority: int = 10,
        default_strategy: str | Strategy = Strategy.EACH,
        log_dispatch: bool = False,
    ):
        """
        Initialize CallbackRegistry.

        Args:
            name: Event identifier this registry belongs to
            context: Default invocation context (the registry itself when None)
            default_priority: Priority for callbacks registered without one
            default_strategy: Strategy used when a run does not name one
            log_dispatch: Whether to log every run at DEBUG level
        """
        self.name = name
        self.context = context
        self.default_priority = default_priority
        self.default_strategy = default_strategy
        self.log_dispatch = log_dispatch
        self._callbacks: list[CallbackRecord] = []

    @property
    def callbacks(self) -> tuple[CallbackRecord, ...]:
        """Snapshot of the registered callback records, in run order."""
        return tuple(self._callbacks)

    def add(
        self,
        fn: Callback | None,
        context: Any = None,
        namespace: Iterable[str] | None = None,
        priority: int | None = None,
        listener: Callback | None = None,
    ) -> CallbackRegistry:
        """
        Register a callback.

        Does nothing when `fn` is None. Callbacks with equal priority run
        in registration order.

        Args:
            fn: Callable to register
            context: Owning context the callable is bound to
            namespace: Tags used to filter the callback
            priority: Lower runs first (default_priority when None)
            listener: Callable reported as registered, if it differs from `fn`

        Returns:
            The registry, for chaining
        """
        if fn is None:
            return self

        record = CallbackRecord(
            fn=fn,
            context=context,
            namespace=to_namespace(namespace),
            priority=self.default_priority if priority is None else priority,
            listener=listener,
        )
        index = bisect.bisect_right(self._callbacks, record.priority, key=_priority_of)
        self._callbacks.insert(index, record)
        logger.debug(f"Added {record!r} to event '{self.name}' at position {index}")
        return self

    def add_once(
        self,
        fn: Callback | None,
        context: Any = None,
        namespace: Iterable[str] | None = None,
        priority: int | None = None,
    ) -> CallbackRegistry:
        """
        Register a callback that removes itself after its first call.

        The callback runs at most once even if a strategy visits it
        several times during the same run.
        """
        if fn is None:
            return self

        fired = False

        def once(*args: Any) -> Any:
            nonlocal fired
            if fired:
                return None
            fired = True
            try:
                return fn(*args)
            finally:
                self.remove(CallbackFilter(fn=once))

        return self.add(once, context=context, namespace=namespace, priority=priority, listener=fn)

    def filter(self, filter: CallbackFilter | None = None) -> list[CallbackRecord]:
        """Records matching `filter`, in run order."""
        if filter is None:
            return list(self._callbacks)
        return [record for record in self._callbacks if filter.matches(record)]

    def remove(self, filter: CallbackFilter | None = None, **criteria: Any) -> CallbackRegistry:
        """
        Remove every callback matching the filter.

        Args:
            filter: Criteria to match; None matches every callback
            **criteria: fn, context, priority or namespace, narrowing `filter`

        Returns:
            The registry, for chaining
        """
        filter = (filter or CallbackFilter()).narrow(**criteria)
        before = len(self._callbacks)
        self._callbacks = [record for record in self._callbacks if not filter.matches(record)]
        removed = before - len(self._callbacks)
        if removed:
            logger.debug(f"Removed {removed} callback(s) from event '{self.name}'")
        return self

    def run(
        self,
        args: Sequence[Any] = (),
        strategy: str | Strategy | StrategyFunc | None = None,
        context: Any = None,
        filter: CallbackFilter | None = None,
    ) -> Any:
        """
        Run the matching callbacks through a strategy.

        Args:
            args: Arguments passed to every callback
            strategy: Strategy name, enum member or callable
            context: Invocation context; falls back to the registry's
                context, then to the registry itself
            filter: Criteria selecting which callbacks run

        Returns:
            Whatever the strategy returns

        Raises:
            UnknownStrategyError: If `strategy` names no built-in strategy
        """
        iterator = resolve_strategy(strategy, default=self.default_strategy)

        if context is None:
            context = self.context if self.context is not None else self

        callbacks = [record.bound for record in self.filter(filter)]

        if self.log_dispatch:
            logger.debug(
                f"Running event '{self.name}' with {len(callbacks)} callback(s) "
                f"via {getattr(iterator, '__name__', iterator)!s}"
            )

        return iterator(callbacks, list(args), context)

    def trigger(
        self,
        *args: Any,
        strategy: str | Strategy | StrategyFunc | None = None,
        filter: CallbackFilter | None = None,
    ) -> Any:
        """Shorthand for run() taking the callback arguments positionally."""
        return self.run(args=args, strategy=strategy, filter=filter)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __iter__(self) -> Iterator[CallbackRecord]:
        return iter(self.callbacks)

    def __repr__(self) -> str:
        return f"CallbackRegistry(name={self.name!r}, callbacks={len(self._callbacks)})"


def _priority_of(record: CallbackRecord) -> int:
    return record.priority


__all__ = ["CallbackRegistry"]
