"""Configuration management for Odin."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from odin.core.exceptions import ConfigurationError


class OdinConfig(BaseSettings):
    """
    Configuration for Odin dispatchers.

    Can be loaded from:
    - Environment variables (prefix: ODIN_)
    - YAML file
    - Direct initialization

    Example:
        >>> config = OdinConfig(default_priority=5)
        >>> config = OdinConfig.from_yaml("odin.yaml")
        >>> config = OdinConfig()
    """

    model_config = SettingsConfigDict(
        env_prefix="ODIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    default_priority: int = Field(
        default=10,
        description="Priority given to callbacks registered without one",
    )
    default_strategy: str = Field(
        default="each",
        description="Strategy used when a trigger does not name one (each, reduce, all, any)",
    )
    log_dispatch: bool = Field(
        default=False,
        description="Log every registry run at DEBUG level",
    )

    @field_validator("default_strategy")
    @classmethod
    def validate_default_strategy(cls, v: str) -> str:
        """Ensure the default strategy is one of the built-in names."""
        from odin.core.events.strategies import Strategy

        names = [member.value for member in Strategy]
        if v not in names:
            raise ValueError(f"Unknown strategy {v!r}, expected one of {', '.join(names)}")
        return v

    @classmethod
    def find_config_yaml(cls) -> Path | None:
        """
        Search for odin.yaml in standard locations.

        Search order:
        1. Current working directory
        2. User home directory (~/.odin/odin.yaml)

        Returns:
            Path to odin.yaml if found, None otherwise
        """
        search_paths = [
            Path.cwd() / "odin.yaml",
            Path.home() / ".odin" / "odin.yaml",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> OdinConfig:
        """
        Load configuration from YAML file.

        Environment variables take precedence over values found in the file.

        Args:
            path: Path to YAML configuration file. If None, searches standard locations.

        Returns:
            OdinConfig instance

        Raises:
            FileNotFoundError: If no configuration file can be found
            ConfigurationError: If the file does not hold a mapping
        """
        if path is None:
            path = cls.find_config_yaml()
            if path is None:
                raise FileNotFoundError(
                    "Config file not found. Searched:\n"
                    "  1. ./odin.yaml\n"
                    "  2. ~/.odin/odin.yaml"
                )
        else:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        result_data = {}

        for key, value in yaml_data.items():
            env_key = f"ODIN_{str(key).upper()}"
            if env_key in os.environ:
                continue
            result_data[key] = value

        return cls(**result_data)

    def to_yaml(self, path: Path | str) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save YAML configuration
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def __repr__(self) -> str:
        return (
            f"OdinConfig(default_priority={self.default_priority}, "
            f"default_strategy={self.default_strategy!r}, log_dispatch={self.log_dispatch})"
        )


_global_config: OdinConfig | None = None


def get_config() -> OdinConfig:
    """
    Get the global OdinConfig instance.

    Created from the environment on first call.
    Can be overridden for testing via set_config().
    """
    global _global_config
    if _global_config is None:
        _global_config = OdinConfig()
    return _global_config


def set_config(config: OdinConfig | None) -> None:
    """
    Set the global OdinConfig instance.

    Passing None drops the current instance so the next get_config()
    reloads it from the environment.
    """
    global _global_config
    _global_config = config
