"""Tests for Observable."""

from __future__ import annotations

import pytest

from odin import Observable, OdinConfig, set_config


@pytest.fixture
def ob() -> Observable:
    return Observable()


def test_observable_sets_value(ob):
    ob.set("test")

    assert ob.get() == "test"
    assert ob.value == "test"


def test_observable_triggers_change_with_new_and_old(ob):
    changes = []
    ob.on("change", lambda new, old: changes.append((new, old)))

    ob.set("first").set("second")

    assert changes == [("first", None), ("second", "first")]


def test_setting_equal_value_does_not_trigger(ob):
    changes = []
    ob.set([1, 2])
    ob.on("change", lambda new, old: changes.append(new))

    ob.set([1, 2])
    assert changes == []

    ob.set([1, 2, 3])
    assert changes == [[1, 2, 3]]


def test_values_of_different_types_are_changes():
    ob = Observable(1)
    changes = []
    ob.on("change", lambda new, old: changes.append((new, old)))

    ob.set(True)

    assert changes == [(True, 1)]


def test_update_override_is_announced():
    class Upper(Observable):
        def update(self, value, *args):
            return super().update(value.upper(), *args)

    ob = Upper("")
    changes = []
    ob.on("change", lambda new, old: changes.append(new))

    ob.set("loud")

    assert ob.get() == "LOUD"
    assert changes == ["LOUD"]


def test_pull(ob):
    follower = Observable()

    follower.pull(ob)
    ob.set("test")

    assert follower.get() == "test"


def test_pull_is_one_way(ob):
    follower = Observable()
    follower.pull(ob)

    follower.set("local")

    assert ob.get() is None


def test_unpull(ob):
    follower = Observable()

    follower.pull(ob)
    follower.unpull(ob)
    ob.set("test")

    assert follower.get() is None
    assert ob.events.get_handler_count("change") == 0


def test_sync(ob):
    partner = Observable()

    partner.sync(ob)
    ob.set(1)
    assert partner.get() == 1
    assert ob.get() == 1

    partner.set(2)
    assert partner.get() == 2
    assert ob.get() == 2


def test_unsync(ob):
    partner = Observable()

    partner.sync(ob)
    ob.set(1)
    partner.set(2)
    assert ob.get() == 2

    partner.unsync(ob)
    partner.set(3)
    assert partner.get() == 3
    assert ob.get() == 2

    ob.set(4)
    assert partner.get() == 3


def test_sync_many_peers(ob):
    peers = [Observable(), Observable()]

    ob.sync(*peers)
    peers[0].set("shared")

    assert [ob.get(), peers[0].get(), peers[1].get()] == ["shared"] * 3


def test_change_listeners_all_receive_new_and_old_under_reduce_default():
    set_config(OdinConfig(default_strategy="reduce"))
    ob = Observable()
    first = []
    second = []
    ob.on("change", lambda new, old: first.append((new, old)) or "ignored")
    ob.on("change", lambda new, old: second.append((new, old)))

    ob.set(5)

    assert first == [(5, None)]
    assert second == [(5, None)]


def test_pull_and_sync_under_filter_default():
    set_config(OdinConfig(default_strategy="filter"))
    source = Observable()
    source.on("change", lambda new, old: "not a value")
    follower = Observable().pull(source)
    peer = Observable().sync(follower)

    source.set(3)

    assert follower.get() == 3
    assert peer.get() == 3


def test_set_without_value_sets_none(ob):
    changes = []
    ob.set(1)
    ob.on("change", lambda new, old: changes.append((new, old)))

    ob.set()
    ob.set()

    assert ob.get() is None
    assert changes == [(None, 1)]
