"""Тесты SettingsRegistry."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from dockerapi.settings.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from dockerapi.settings.registry import SettingsRegistry


@pytest.fixture
def registry(tmp_path: Path) -> SettingsRegistry:
    return SettingsRegistry(tmp_path / "config.json")


def test_defaults(registry: SettingsRegistry) -> None:
    assert registry.get_value("engine", "base_url") == ""
    assert registry.get_value("engine", "timeout_sec") == 60
    assert registry.get_value("logging", "level") == "INFO"


def test_get_value_with_default(registry: SettingsRegistry) -> None:
    assert registry.get_value("engine", "unknown", default="fallback") == "fallback"


def test_unknown_group_raises(registry: SettingsRegistry) -> None:
    with pytest.raises(SettingsNotFoundError):
        registry.get_value("unknown", "key")


def test_set_value_invalid_raises(registry: SettingsRegistry) -> None:
    with pytest.raises(SettingsValidationError):
        registry.set_value("engine", "timeout_sec", 0)
    with pytest.raises(SettingsValidationError):
        registry.set_value("engine", "timeout_sec", True)
    with pytest.raises(SettingsValidationError):
        registry.set_value("logging", "level", "TRACE")


def test_load_creates_defaults_if_missing(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.json"
    registry = SettingsRegistry(config_path)
    registry.load_from_disk()
    content = json.loads(config_path.read_text(encoding="utf-8"))
    assert content["version"] == "1.0.0"
    assert content["engine"]["api_version"] == "auto"


def test_save_and_load_persists_data(tmp_path: Path, registry: SettingsRegistry) -> None:
    registry.set_value("engine", "base_url", "tcp://10.0.0.5:2375")
    registry.save_to_disk()

    loaded = SettingsRegistry(tmp_path / "config.json")
    loaded.load_from_disk()
    assert loaded.get_value("engine", "base_url") == "tcp://10.0.0.5:2375"


def test_partial_file_is_merged_with_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"logging": {"level": "DEBUG"}}), encoding="utf-8")

    registry = SettingsRegistry(config_path)
    registry.load_from_disk()

    assert registry.get_value("logging", "level") == "DEBUG"
    assert registry.get_value("logging", "max_archived_files") == 5
    assert registry.get_value("engine", "timeout_sec") == 60


def test_invalid_file_values_raise(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"engine": {"timeout_sec": 9999}}), encoding="utf-8")
    with pytest.raises(SettingsValidationError):
        SettingsRegistry(config_path).load_from_disk()


def test_broken_json_raises_io_error(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SettingsIOError):
        SettingsRegistry(config_path).load_from_disk()
    assert "Cannot use settings file" in caplog.text
