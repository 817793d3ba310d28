"""Различные вспомогательные функции."""

from __future__ import annotations

from typing import Final

SHORT_ID_LENGTH: Final[int] = 12

_SOCKET_SCHEMES = ("unix://", "tcp://", "npipe://", "http://", "https://", "ssh://")


def normalize_socket_path(raw_value: str) -> str:
    """Возвращает путь сокета с корректным префиксом unix://."""

    value = raw_value.strip()
    if not value:
        return value
    lowered = value.lower()
    if lowered.startswith(_SOCKET_SCHEMES):
        return value
    if value.startswith("/"):
        return f"unix://{value}"
    return value


def sub_string(value: str, size: int) -> str:
    """Безопасно обрезает строку до size символов."""

    if size >= 0 and value and len(value) >= size:
        return value[:size]
    return value


def short_id(identifier: str) -> str:
    """Короткое представление идентификатора Docker (как в docker ps)."""

    return sub_string(identifier, SHORT_ID_LENGTH)


def strip_name(name: str) -> str:
    """Убирает ведущий '/' из имени контейнера, который добавляет Docker."""

    if name.startswith("/"):
        return name[1:]
    return name
