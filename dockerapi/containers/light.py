"""Облегчённое представление контейнеров из docker ps."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Sequence

from dockerapi.containers.container import Container, inspect_container
from dockerapi.engine.gateway import EngineGateway
from dockerapi.utils.helpers import short_id, strip_name


class ContainerView(Protocol):
    """Общий набор возможностей полного и облегчённого контейнера."""

    @property
    def id(self) -> str: ...  # pragma: no cover - протокол

    @property
    def short_id(self) -> str: ...  # pragma: no cover - протокол

    @property
    def image(self) -> str: ...  # pragma: no cover - протокол

    @property
    def name(self) -> str: ...  # pragma: no cover - протокол

    def is_running(self) -> bool: ...  # pragma: no cover - протокол

    def exec_sh(self, cmd: Sequence[str]) -> List[str]: ...  # pragma: no cover - протокол


class LightContainer:
    """Запись из списка контейнеров; за состоянием обращается к engine."""

    def __init__(self, gateway: EngineGateway, summary: Dict[str, Any]) -> None:
        self._gateway = gateway
        self.summary = summary

    def __repr__(self) -> str:
        return f"<LightContainer name={self.name!r} id={self.short_id!r}>"

    @property
    def id(self) -> str:
        return self.summary.get("Id") or ""

    @property
    def short_id(self) -> str:
        return short_id(self.id)

    @property
    def image(self) -> str:
        return self.summary.get("Image") or ""

    @property
    def name(self) -> str:
        names = self.summary.get("Names") or []
        return strip_name(names[0]) if names else ""

    def promote(self) -> Container:
        """Полный контейнер по свежему inspect."""

        return inspect_container(self._gateway, self.id)

    def is_running(self) -> bool:
        return self.promote().is_running()

    def exec_sh(self, cmd: Sequence[str]) -> List[str]:
        return self.promote().exec_sh(cmd)


class LightContainers(List[LightContainer]):
    """Список облегчённых контейнеров."""

    def get_ids(self) -> List[str]:
        return [container.id for container in self]

    def find(self, name: str) -> Optional[LightContainer]:
        """Ищет контейнер по имени (без ведущего '/')."""

        target = strip_name(name)
        for container in self:
            if container.name == target:
                return container
        return None


def list_containers(gateway: EngineGateway, *, all: bool = True) -> LightContainers:
    """Возвращает все контейнеры engine, включая остановленные."""

    return LightContainers(
        LightContainer(gateway, summary) for summary in gateway.list_containers(all=all)
    )


def list_running_containers(gateway: EngineGateway) -> LightContainers:
    """Возвращает только запущенные контейнеры."""

    return list_containers(gateway, all=False)
