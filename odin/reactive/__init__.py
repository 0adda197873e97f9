"""Reactive values built on the event system."""

from odin.reactive.observable import Observable
from odin.reactive.properties import Properties

__all__ = ["Observable", "Properties"]
