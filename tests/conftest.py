"""Shared fixtures for the Odin test suite."""

from __future__ import annotations

import pytest

from odin.core.config import OdinConfig, set_config
from odin.core.events import Dispatcher, get_event_bus, set_event_bus

_ODIN_ENV = ("ODIN_DEFAULT_PRIORITY", "ODIN_DEFAULT_STRATEGY", "ODIN_LOG_DISPATCH")


@pytest.fixture(autouse=True)
def isolated_globals(monkeypatch):
    """Give every test a clean environment, config and global event bus."""
    for key in _ODIN_ENV:
        monkeypatch.delenv(key, raising=False)
    set_config(None)

    previous = get_event_bus()
    set_event_bus(Dispatcher(config=OdinConfig()))
    yield
    set_event_bus(previous)
    set_config(None)


@pytest.fixture
def dispatcher() -> Dispatcher:
    return Dispatcher()
