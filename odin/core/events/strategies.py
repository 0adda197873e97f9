"""
Dispatch Strategies - Turn an ordered callback list into one result.

A strategy is any callable with the signature:

    strategy(callbacks: list[Callable], args: list, context: Any) -> Any

Built-in strategies (selectable by name):
- each / action: call every callback, return None
- reduce / filter: left fold, args[0] is the initial accumulator
- all: call every callback, True if every result is truthy
- any: call every callback, True if at least one result is truthy

`all` and `any` never skip callbacks once the outcome is known; every
callback runs because callbacks may have side effects.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import StrEnum
import logging
from typing import Any

from odin.core.events.base import Callback, invoke
from odin.core.exceptions import UnknownStrategyError

logger = logging.getLogger(__name__)

StrategyFunc = Callable[[list[Callback], list[Any], Any], Any]


class Strategy(StrEnum):
    """Names of the built-in strategies."""

    EACH = "each"
    ACTION = "action"
    REDUCE = "reduce"
    FILTER = "filter"
    ALL = "all"
    ANY = "any"


def each(callbacks: Sequence[Callback], args: Sequence[Any], context: Any) -> None:
    """Invoke every callback in order."""
    for callback in callbacks:
        invoke(callback, context, args)


def reduce(callbacks: Sequence[Callback], args: Sequence[Any], context: Any) -> Any:
    """
    Fold the callbacks over the first argument.

    Each callback is called as callback(accumulator, *rest) and its return
    value becomes the next accumulator.
    """
    memo = args[0] if args else None
    rest = list(args[1:])
    for callback in callbacks:
        memo = invoke(callback, context, [memo, *rest])
    return memo


def all_(callbacks: Sequence[Callback], args: Sequence[Any], context: Any) -> bool:
    results = [bool(invoke(callback, context, args)) for callback in callbacks]
    return all(results)


def any_(callbacks: Sequence[Callback], args: Sequence[Any], context: Any) -> bool:
    results = [bool(invoke(callback, context, args)) for callback in callbacks]
    return any(results)


BUILTIN_STRATEGIES: dict[Strategy, StrategyFunc] = {
    Strategy.EACH: each,
    Strategy.ACTION: each,
    Strategy.REDUCE: reduce,
    Strategy.FILTER: reduce,
    Strategy.ALL: all_,
    Strategy.ANY: any_,
}


def resolve_strategy(
    strategy: str | Strategy | StrategyFunc | None,
    default: str | Strategy = Strategy.EACH,
) -> StrategyFunc:
    """
    Resolve a strategy name, enum member or callable to a strategy function.

    Args:
        strategy: Strategy to resolve; None selects `default`
        default: Strategy used when none is given

    Returns:
        The strategy function

    Raises:
        UnknownStrategyError: If a name does not match a built-in strategy
    """
    if strategy is None:
        strategy = default

    if isinstance(strategy, str):
        try:
            return BUILTIN_STRATEGIES[Strategy(strategy)]
        except ValueError:
            logger.error(f"Unknown dispatch strategy {strategy!r}")
            raise UnknownStrategyError(
                f"Unknown strategy {strategy!r}, expected one of "
                f"{', '.join(member.value for member in Strategy)}",
                name=strategy,
            ) from None

    if callable(strategy):
        return strategy

    raise TypeError(f"Strategy must be a name or a callable, got {type(strategy).__name__}")


__all__ = [
    "BUILTIN_STRATEGIES",
    "Strategy",
    "StrategyFunc",
    "all_",
    "any_",
    "each",
    "reduce",
    "resolve_strategy",
]
