"""Ошибки файла настроек.

Все они являются ``ConfigurationError``, поэтому вызывающему коду достаточно
одного обработчика для ошибок конфигурации контейнеров и настроек.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from dockerapi.exceptions import ConfigurationError

LOGGER = logging.getLogger(__name__)


class SettingsError(ConfigurationError):
    """Ошибка настроек; пишется в лог при создании."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, context=context)
        LOGGER.error("Settings error: %s %s", message, self.context)


class SettingsNotFoundError(SettingsError):
    def __init__(self, group: str, key: Optional[str] = None) -> None:
        self.group = group
        self.key = key
        target = f"setting {group}.{key}" if key else f"settings group {group}"
        super().__init__(f"Unknown {target}", context={"group": group, "key": key})


class SettingsValidationError(SettingsError):
    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid value {value!r} for {key}: {reason}",
            context={"key": key, "value": value},
        )


class SettingsIOError(SettingsError):
    """config.json не читается, не пишется или содержит не JSON объект."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Cannot use settings file {path}: {reason}",
            context={"path": str(path)},
        )
