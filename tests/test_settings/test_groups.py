"""Тесты групп настроек и валидаторов."""

from __future__ import annotations

import pytest

from dockerapi.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from dockerapi.settings.groups import EngineSettings, LoggingSettings
from dockerapi.settings.validators import int_between, of_type, one_of, optional_path


def test_engine_settings_tls_paths() -> None:
    settings = EngineSettings()
    assert settings.get("tls_ca_cert") is None
    settings.set("tls_ca_cert", "/certs/ca.pem")
    assert settings.get("tls_ca_cert") == "/certs/ca.pem"
    with pytest.raises(SettingsValidationError):
        settings.set("tls_client_cert", 42)


def test_logging_settings_ranges() -> None:
    settings = LoggingSettings()
    settings.set("max_file_size_mb", 100)
    with pytest.raises(SettingsValidationError):
        settings.set("max_archived_files", 0)


def test_from_dict_and_reset() -> None:
    settings = EngineSettings()
    settings.from_dict({"base_url": "unix:///run/docker.sock", "ignored": True})
    assert settings.get("base_url") == "unix:///run/docker.sock"
    settings.reset_to_defaults()
    assert settings.get("base_url") == ""


def test_unknown_key_raises_not_found() -> None:
    with pytest.raises(SettingsNotFoundError):
        EngineSettings().get("unknown")


def test_checks() -> None:
    assert optional_path(None) is None
    assert optional_path("/certs/ca.pem") is None
    assert optional_path(1) == "expected path string or null, got int"
    assert of_type(str, int)(1.5) == "expected str or int, got float"
    assert int_between(1, 10)(10) is None
    assert int_between(1, 10)(11) == "11 is outside 1..10"
    assert int_between(1, 10)("5") == "expected integer, got str"
    assert int_between(0, 1)(True) == "expected integer, got bool"
    assert one_of("INFO")("TRACE") == "'TRACE' is not one of INFO"
    assert one_of("INFO")(1) is not None


def test_group_validate_reports_reason() -> None:
    assert LoggingSettings().validate("level", "TRACE") == (
        False,
        "'TRACE' is not one of DEBUG, INFO, WARNING, ERROR",
    )
    assert EngineSettings().validate("timeout_sec", 30) == (True, "")
