"""Tests for dispatch strategies."""

from __future__ import annotations

import pytest

from odin.core.events import (
    BUILTIN_STRATEGIES,
    CallbackRegistry,
    Strategy,
    current_context,
    resolve_strategy,
)
from odin.core.exceptions import UnknownStrategyError


def _counting(results: list, calls: list):
    """Callbacks returning `results` in order while counting their calls."""
    callbacks = []
    for index, result in enumerate(results):

        def callback(*args, index=index, result=result):
            calls.append(index)
            return result

        callbacks.append(callback)
    return callbacks


def test_each_calls_every_callback_and_returns_none():
    registry = CallbackRegistry("a")
    received = []
    registry.add(lambda value: received.append(("first", value)))
    registry.add(lambda value: received.append(("second", value)))

    assert registry.run(args=["x"], strategy="each") is None
    assert received == [("first", "x"), ("second", "x")]


def test_reduce_chains_return_values():
    registry = CallbackRegistry("gamut")
    seen = []

    def first(value):
        seen.append(value)
        return True

    def second(value):
        seen.append(value)
        return {"x": 20}

    def third(value):
        seen.append(dict(value))
        value["y"] = 10
        return value

    def fourth(value):
        seen.append(dict(value))
        return value["x"] + value["y"]

    for fn in (first, second, third, fourth):
        registry.add(fn)

    assert registry.run(args=[0], strategy=Strategy.REDUCE) == 30
    assert seen == [0, True, {"x": 20}, {"x": 20, "y": 10}]
    assert seen[1] is True


def test_reduce_passes_remaining_arguments():
    registry = CallbackRegistry("price")
    registry.add(lambda price, rate: price * rate)
    registry.add(lambda price, rate: price + rate)
    args = [10, 2]

    assert registry.run(args=args, strategy="filter") == 22
    assert args == [10, 2]


def test_reduce_without_callbacks_returns_initial_value():
    registry = CallbackRegistry("price")

    assert registry.run(args=[5], strategy="reduce") == 5
    assert registry.run(strategy="reduce") is None


@pytest.mark.parametrize(
    ("results", "expected_all", "expected_any"),
    [
        ([1, 0, "x"], False, True),
        ([1, "x", [0]], True, True),
        ([0, "", None], False, False),
        ([], True, False),
    ],
)
def test_all_and_any(results, expected_all, expected_any):
    registry = CallbackRegistry("check")
    calls = []
    for callback in _counting(results, calls):
        registry.add(callback)

    assert registry.run(strategy="all") is expected_all
    assert registry.run(strategy="any") is expected_any
    assert len(registry) == len(results)


def test_all_and_any_invoke_every_callback():
    registry = CallbackRegistry("check")
    calls = []
    for callback in _counting([0, 1, 0, 1], calls):
        registry.add(callback)

    registry.run(strategy="all")
    assert calls == [0, 1, 2, 3]

    calls.clear()
    registry.run(strategy="any")
    assert calls == [0, 1, 2, 3]


def test_builtin_strategies_set_invocation_context():
    registry = CallbackRegistry("a", context="registry-context")
    seen = []
    registry.add(lambda *args: seen.append(current_context()) or True)

    for strategy in Strategy:
        registry.run(args=[0], strategy=strategy)

    assert seen == ["registry-context"] * len(Strategy)


def test_custom_strategy_callable():
    registry = CallbackRegistry("a", context="ctx")
    registry.add(lambda value: value + 1)
    registry.add(lambda value: value * 10)

    def collect(callbacks, args, context):
        return [callback(*args) for callback in callbacks], context

    assert registry.run(args=[2], strategy=collect) == ([3, 20], "ctx")


def test_unknown_strategy_name_raises():
    registry = CallbackRegistry("a")

    with pytest.raises(UnknownStrategyError, match="nope") as exc_info:
        registry.run(strategy="nope")
    assert exc_info.value.name == "nope"


def test_resolve_strategy():
    assert resolve_strategy(None) is BUILTIN_STRATEGIES[Strategy.EACH]
    assert resolve_strategy(None, default="all") is BUILTIN_STRATEGIES[Strategy.ALL]
    assert resolve_strategy("action") is resolve_strategy("each")
    assert resolve_strategy(Strategy.FILTER) is resolve_strategy("reduce")
    assert resolve_strategy(len) is len

    with pytest.raises(TypeError):
        resolve_strategy(42)


def test_registry_default_strategy():
    registry = CallbackRegistry("a", default_strategy="any")
    registry.add(lambda: False)
    registry.add(lambda: True)

    assert registry.run() is True
