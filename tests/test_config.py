"""Tests for OdinConfig."""

from __future__ import annotations

import pydantic
import pytest

from odin import ConfigurationError, Dispatcher, OdinConfig, get_config, set_config


def test_defaults():
    config = OdinConfig()

    assert config.default_priority == 10
    assert config.default_strategy == "each"
    assert config.log_dispatch is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ODIN_DEFAULT_PRIORITY", "5")
    monkeypatch.setenv("ODIN_LOG_DISPATCH", "true")

    config = get_config()

    assert config.default_priority == 5
    assert config.log_dispatch is True


def test_invalid_default_strategy():
    with pytest.raises(pydantic.ValidationError, match="Unknown strategy"):
        OdinConfig(default_strategy="nope")


def test_get_config_is_cached_until_reset():
    config = get_config()
    assert get_config() is config

    custom = OdinConfig(default_priority=1)
    set_config(custom)
    assert get_config() is custom

    set_config(None)
    assert get_config() is not custom


def test_dispatcher_uses_configured_defaults():
    dispatcher = Dispatcher(config=OdinConfig(default_priority=3, default_strategy="reduce"))
    dispatcher.on("a", lambda value: value * 2)
    dispatcher.on("a", lambda value: value + 1, priority=5)

    assert [record.priority for record in dispatcher.registry("a")] == [3, 5]
    assert dispatcher.trigger("a", 3) == [7]


def test_dispatcher_reads_global_config_at_construction(monkeypatch):
    monkeypatch.setenv("ODIN_DEFAULT_PRIORITY", "7")
    dispatcher = Dispatcher()
    dispatcher.on("a", print)

    assert dispatcher.registry("a").callbacks[0].priority == 7


def test_from_yaml(tmp_path):
    path = tmp_path / "odin.yaml"
    path.write_text("default_priority: 3\nlog_dispatch: true\n", encoding="utf-8")

    config = OdinConfig.from_yaml(path)

    assert config.default_priority == 3
    assert config.log_dispatch is True


def test_environment_wins_over_yaml(tmp_path, monkeypatch):
    path = tmp_path / "odin.yaml"
    path.write_text("default_priority: 3\n", encoding="utf-8")
    monkeypatch.setenv("ODIN_DEFAULT_PRIORITY", "9")

    assert OdinConfig.from_yaml(path).default_priority == 9


def test_from_yaml_searches_working_directory(tmp_path, monkeypatch):
    (tmp_path / "odin.yaml").write_text("default_strategy: any\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert OdinConfig.from_yaml().default_strategy == "any"


def test_from_yaml_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        OdinConfig.from_yaml(tmp_path / "missing.yaml")

    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        OdinConfig.from_yaml(path)


def test_to_yaml_round_trip(tmp_path):
    path = tmp_path / "odin.yaml"
    OdinConfig(default_priority=4, default_strategy="all").to_yaml(path)

    loaded = OdinConfig.from_yaml(path)

    assert loaded.default_priority == 4
    assert loaded.default_strategy == "all"
