"""Функции для работы с образами Docker."""

from __future__ import annotations

import logging
from typing import Optional

from dockerapi.engine.gateway import EngineGateway, ProgressSink
from dockerapi.exceptions import EngineError, NotFoundError

LOGGER = logging.getLogger(__name__)


def image_exists(gateway: EngineGateway, image: str) -> bool:
    """Проверяет, что образ уже есть на engine."""

    try:
        gateway.inspect_image(image)
    except NotFoundError:
        return False
    except EngineError as exc:
        # Отсутствие ответа не мешает попытаться скачать образ
        LOGGER.warning("Cannot inspect image %s: %s", image, exc)
        return False
    return True


def pull_image(gateway: EngineGateway, image: str, progress: Optional[ProgressSink] = None) -> None:
    """Скачивает образ; прогресс можно отслеживать через progress."""

    LOGGER.debug("Pulling image %s", image)
    gateway.pull_image(image, progress)


def remove_image(gateway: EngineGateway, image: str, force: bool = False) -> None:
    """Удаляет образ."""

    gateway.remove_image(image, force=force)
