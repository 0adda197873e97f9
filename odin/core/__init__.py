"""Core module for Odin - dispatcher, configuration and errors."""

from odin.core.config import OdinConfig, get_config, set_config
from odin.core.exceptions import (
    ConfigurationError,
    DispatchError,
    OdinError,
    UnknownStrategyError,
    ValidationError,
)

__all__ = [
    "ConfigurationError",
    "DispatchError",
    "OdinConfig",
    "OdinError",
    "UnknownStrategyError",
    "ValidationError",
    "get_config",
    "set_config",
]
