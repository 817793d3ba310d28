"""Контейнер: желаемая конфигурация плюс последний снимок состояния из engine.

Снимок хранится в формате ``docker inspect`` (``Id``, ``Name``, ``Config``,
``HostConfig``, ``State``, ``NetworkSettings``). До ``create`` в нём есть
только желаемая конфигурация и пустой ``Id``. Обновляют снимок только
``create`` и ``refresh`` (его вызывают start/stop/rename).
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Final, List, Optional, Sequence

from dockerapi.containers.executor import CommandExecutor
from dockerapi.containers.models import ContainerOptions, LogsOptions
from dockerapi.engine import images
from dockerapi.engine.gateway import EngineGateway, ProgressSink
from dockerapi.exceptions import (
    ConfigurationError,
    DockerAPIError,
    LogsError,
    NotFoundError,
    RemoveError,
    RenameError,
    RunError,
    StartError,
    StopError,
    ValidationError,
)
from dockerapi.utils.helpers import short_id, strip_name

LOGGER = logging.getLogger(__name__)

# Период корректного завершения, который engine ждёт перед SIGKILL
STOP_TIMEOUT_SECONDS: Final[int] = 30


class Container:
    """Один контейнер на одном Docker engine."""

    def __init__(self, gateway: EngineGateway, attrs: Dict[str, Any]) -> None:
        self._gateway = gateway
        self.attrs = attrs
        self._executor = CommandExecutor(gateway)

    def __repr__(self) -> str:
        return f"<Container name={self.name!r} id={self.short_id!r} image={self.image!r}>"

    # ---------------------------------------------------------------- identity
    @property
    def id(self) -> str:
        return self.attrs.get("Id") or ""

    @property
    def short_id(self) -> str:
        return short_id(self.id)

    @property
    def name(self) -> str:
        return strip_name(self.attrs.get("Name") or "")

    @property
    def image(self) -> str:
        return self.config.get("Image") or ""

    @property
    def config(self) -> Dict[str, Any]:
        return self.attrs.setdefault("Config", {})

    @property
    def host_config(self) -> Dict[str, Any]:
        return self.attrs.setdefault("HostConfig", {})

    @property
    def envs(self) -> List[str]:
        return list(self.config.get("Env") or [])

    def is_running(self) -> bool:
        """Флаг из последнего снимка; актуальность обеспечивает refresh."""

        state = self.attrs.get("State") or {}
        return bool(state.get("Running", False))

    def host_ports(self) -> Dict[str, List[str]]:
        """Порты хоста, которые engine назначил портам контейнера."""

        network = self.attrs.get("NetworkSettings") or {}
        result: Dict[str, List[str]] = {}
        for port, mappings in (network.get("Ports") or {}).items():
            if mappings:
                result[port] = [mapping.get("HostPort", "") for mapping in mappings]
        return result

    # --------------------------------------------------------------- lifecycle
    def create(self) -> None:
        """Создаёт контейнер на engine и сохраняет полученный снимок."""

        if not self.image:
            raise ConfigurationError("Image is required", context={"name": self.name})
        if not self.name:
            raise ConfigurationError("Name is required", context={"image": self.image})
        self.attrs = self._gateway.create_container(
            self.name,
            copy.deepcopy(self.config),
            copy.deepcopy(self.host_config),
        )

    def start(self) -> None:
        self._require_id("start")
        try:
            self._gateway.start_container(self.id)
        except DockerAPIError as exc:
            raise StartError(self.short_id, str(exc)) from exc
        self._refresh_quietly()

    def stop(self) -> None:
        self._require_id("stop")
        try:
            self._gateway.stop_container(self.id, STOP_TIMEOUT_SECONDS)
        except DockerAPIError as exc:
            raise StopError(self.short_id, str(exc)) from exc
        self._refresh_quietly()

    def remove(self, remove_volumes: bool = False) -> None:
        """Удаляет контейнер: сначала мягко, затем принудительно.

        Если удаление по ID не удалось целиком, та же последовательность
        повторяется по имени контейнера. После успеха ID сбрасывается.
        """

        self._require_id("remove")
        try:
            self._remove_escalating(self.id, remove_volumes)
        except DockerAPIError as id_exc:
            if not self.name:
                raise RemoveError(self.short_id, str(id_exc)) from id_exc
            LOGGER.warning(
                "Removal of %s by id failed, retrying by name %s: %s",
                self.short_id,
                self.name,
                id_exc,
            )
            try:
                self._remove_escalating(self.name, remove_volumes)
            except DockerAPIError as name_exc:
                raise RemoveError(f"{self.name} ({self.short_id})", str(name_exc)) from name_exc
        self._invalidate()

    def stop_and_remove(self, remove_volumes: bool = False) -> None:
        """Останавливает и удаляет контейнер; при ошибке stop удаление не выполняется."""

        self.stop()
        self.remove(remove_volumes)

    def run(self, progress: Optional[ProgressSink] = None) -> None:
        """Скачивает образ при необходимости, создаёт и запускает контейнер."""

        if images.image_exists(self._gateway, self.image):
            LOGGER.info("Image %s already present, skipping pull", self.image)
        else:
            LOGGER.info("Pulling %s image", self.image)
            try:
                images.pull_image(self._gateway, self.image, progress)
            except DockerAPIError as exc:
                LOGGER.error("Pull of %s failed: %s", self.image, exc)
                raise self._run_error("download", exc) from exc

        LOGGER.info("Creating container %s", self.name)
        try:
            self.create()
        except DockerAPIError as exc:
            LOGGER.error("Create of %s failed: %s", self.name, exc)
            raise self._run_error("create", exc) from exc

        LOGGER.info("Starting container %s", self.name)
        try:
            self.start()
        except DockerAPIError as exc:
            LOGGER.error("Start of %s failed: %s", self.name, exc)
            raise self._run_error("start", exc) from exc

        LOGGER.info("Container %s is started with id %s", self.name, self.short_id)

    def refresh(self) -> None:
        """Перечитывает снимок контейнера из engine целиком."""

        self._require_id("refresh")
        self.attrs = self._gateway.inspect_container(self.id)

    def rename(self, new_name: str) -> None:
        new_name = strip_name(new_name or "")
        if not new_name:
            raise ValidationError("New name is empty", context={"container": self.name})
        self._require_id("rename")
        try:
            self._gateway.rename_container(self.id, new_name)
        except DockerAPIError as exc:
            raise RenameError(self.name, f"{exc} (new name {new_name})") from exc
        self.refresh()

    def clone(self, name: Optional[str] = None) -> "Container":
        """Независимая копия конфигурации без ID и без наблюдаемого состояния."""

        attrs = copy.deepcopy(self.attrs)
        attrs["Id"] = ""
        attrs["State"] = {}
        attrs.pop("NetworkSettings", None)
        if name:
            attrs["Name"] = strip_name(name)
        return Container(self._gateway, attrs)

    # -------------------------------------------------------------------- exec
    def exec(self, cmd: Sequence[str]) -> List[str]:
        """Выполняет команду и возвращает строки её вывода."""

        return self._executor.execute(self.id, cmd)

    def exec_sh(self, cmd: Sequence[str]) -> List[str]:
        return self._executor.execute_sh(self.id, cmd)

    def logs(self, options: LogsOptions) -> None:
        """Пишет логи контейнера в options.output_stream."""

        self._require_id("read logs of")
        try:
            self._gateway.logs(
                self.id,
                options.output_stream,
                stdout=options.stdout,
                stderr=options.stderr,
                tail=options.tail,
                follow=options.follow,
                timestamps=options.timestamps,
            )
        except DockerAPIError as exc:
            raise LogsError(self.short_id, str(exc)) from exc

    # ----------------------------------------------------------------- helpers
    def _require_id(self, action: str) -> None:
        if not self.id:
            raise NotFoundError(
                f"Can't {action} container {self.name or '<unnamed>'}: it does not exist",
                context={"name": self.name, "action": action},
            )

    def _remove_escalating(self, target: str, remove_volumes: bool) -> None:
        try:
            self._gateway.remove_container(target, force=False, remove_volumes=remove_volumes)
            return
        except DockerAPIError as exc:
            LOGGER.debug("Graceful removal of %s failed, forcing: %s", target, exc)
        self._gateway.remove_container(target, force=True, remove_volumes=remove_volumes)

    def _refresh_quietly(self) -> None:
        try:
            self.refresh()
        except DockerAPIError as exc:
            LOGGER.warning("Cannot refresh container %s: %s", self.short_id, exc)

    def _invalidate(self) -> None:
        self.attrs["Id"] = ""
        self.attrs["State"] = {}
        self.attrs.pop("NetworkSettings", None)

    def _run_error(self, step: str, exc: DockerAPIError) -> RunError:
        return RunError(step, container=self.name, image=self.image, reason=str(exc))


def new_container(gateway: EngineGateway, options: ContainerOptions) -> Container:
    """Готовит контейнер к созданию по желаемой конфигурации."""

    options.validate()
    attrs: Dict[str, Any] = {
        "Id": "",
        "Name": options.name,
        "Config": options.to_config(),
        "HostConfig": options.to_host_config(),
        "State": {},
    }
    return Container(gateway, attrs)


def inspect_container(gateway: EngineGateway, container_id: str) -> Container:
    """Загружает существующий контейнер по ID или имени."""

    return Container(gateway, gateway.inspect_container(container_id))
