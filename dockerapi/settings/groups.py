"""Группы настроек с валидацией значений."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from dockerapi.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from dockerapi.settings.validators import (
    LOG_LEVELS,
    Check,
    int_between,
    of_type,
    one_of,
    optional_path,
)


class SettingsGroup(ABC):
    """Абстрактная база для конкретных групп настроек."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Check] = {}
        self._values: Dict[str, Any] = {}
        self._initialize_defaults()
        self._setup_validators()
        self.reset_to_defaults()

    @abstractmethod
    def _initialize_defaults(self) -> None:
        """Задаёт значения по умолчанию для группы."""

    @abstractmethod
    def _setup_validators(self) -> None:
        """Привязывает проверки к ключам группы."""

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._defaults.keys())

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._values.get(key, default)

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        check = self._validators.get(key)
        error = check(value) if check else None
        return error is None, error or ""

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение, выбрасывая ошибку при невалидных данных."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет значениями из словаря; неизвестные ключи игнорируются."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)


class EngineSettings(SettingsGroup):
    """Подключение к Docker engine."""

    group_name = "engine"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "base_url": "",  # пусто - берём DOCKER_HOST и прочее из окружения
            "api_version": "auto",
            "timeout_sec": 60,
            "tls_enabled": False,
            "tls_verify": True,
            "tls_ca_cert": None,
            "tls_client_cert": None,
            "tls_client_key": None,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "base_url": of_type(str),
            "api_version": of_type(str),
            "timeout_sec": int_between(1, 600),
            "tls_enabled": of_type(bool),
            "tls_verify": of_type(bool),
            "tls_ca_cert": optional_path,
            "tls_client_cert": optional_path,
            "tls_client_key": optional_path,
        }


class LoggingSettings(SettingsGroup):
    """Настройки логирования."""

    group_name = "logging"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "enabled": True,
            "level": "INFO",
            "max_file_size_mb": 10,
            "max_archived_files": 5,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": of_type(bool),
            "level": one_of(*LOG_LEVELS),
            "max_file_size_mb": int_between(1, 1000),
            "max_archived_files": int_between(1, 50),
        }
