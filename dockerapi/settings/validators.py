"""Проверки значений настроек.

Проверка - это функция ``value -> Optional[str]``: ``None``, если значение
подходит, иначе текст ошибки для ``SettingsValidationError``.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

Check = Callable[[Any], Optional[str]]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def of_type(*types: type) -> Check:
    names = " or ".join(t.__name__ for t in types)

    def check(value: Any) -> Optional[str]:
        if isinstance(value, types):
            return None
        return f"expected {names}, got {type(value).__name__}"

    return check


def int_between(low: int, high: int) -> Check:
    """Целое число в диапазоне [low, high]."""

    def check(value: Any) -> Optional[str]:
        # bool - подкласс int
        if isinstance(value, bool) or not isinstance(value, int):
            return f"expected integer, got {type(value).__name__}"
        if not low <= value <= high:
            return f"{value} is outside {low}..{high}"
        return None

    return check


def one_of(*allowed: str) -> Check:
    def check(value: Any) -> Optional[str]:
        if isinstance(value, str) and value in allowed:
            return None
        return f"{value!r} is not one of {', '.join(allowed)}"

    return check


def optional_path(value: Any) -> Optional[str]:
    """Путь к PEM файлу: строка или None, если файл не задан."""

    if value is None or isinstance(value, str):
        return None
    return f"expected path string or null, got {type(value).__name__}"
