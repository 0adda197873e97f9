"""Custom exceptions for Odin."""


class OdinError(Exception):
    """Base exception for all Odin errors."""


class ConfigurationError(OdinError):
    """Raised when configuration is invalid."""


class UnknownStrategyError(OdinError, LookupError):
    """Raised when a dispatch strategy name is not registered."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class DispatchError(OdinError):
    """Raised when a dispatch call is used with the wrong number of events."""


class ValidationError(OdinError, ValueError):
    """Raised when input validation fails."""
