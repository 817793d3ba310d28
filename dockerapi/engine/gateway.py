"""Шлюз к Docker engine: набор примитивов, которыми пользуются контейнеры.

Модуль описывает протокол ``EngineGateway`` и его реализацию поверх
низкоуровневого ``docker.APIClient``. Все ошибки docker-py переводятся в
``NotFoundError`` (объект отсутствует) и ``EngineError`` (любой другой сбой),
поэтому код уровнем выше не зависит от исключений SDK.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, BinaryIO, Callable, Dict, Iterator, List, Optional, Protocol, Sequence

from docker.errors import DockerException, NotFound, StreamParseError
from requests.exceptions import RequestException

from dockerapi.engine.client import DockerClientWrapper
from dockerapi.exceptions import EngineError, NotFoundError

LOGGER = logging.getLogger(__name__)

ProgressSink = Callable[[Dict[str, Any]], None]


class EngineGateway(Protocol):
    """Примитивы одного Docker engine, необходимые для жизненного цикла контейнера."""

    def inspect_container(self, container_id: str) -> Dict[str, Any]:  # pragma: no cover
        """Возвращает полный снимок контейнера (docker inspect)."""

    def create_container(
        self, name: str, config: Dict[str, Any], host_config: Dict[str, Any]
    ) -> Dict[str, Any]:  # pragma: no cover
        """Создаёт контейнер и возвращает его полный снимок."""

    def start_container(self, container_id: str) -> None:  # pragma: no cover
        """Запускает контейнер."""

    def stop_container(self, container_id: str, timeout: int) -> None:  # pragma: no cover
        """Останавливает контейнер с периодом ожидания timeout секунд."""

    def remove_container(
        self, container_id: str, *, force: bool, remove_volumes: bool
    ) -> None:  # pragma: no cover
        """Удаляет контейнер."""

    def rename_container(self, container_id: str, new_name: str) -> None:  # pragma: no cover
        """Переименовывает контейнер."""

    def exec_create(
        self,
        container_id: str,
        cmd: Sequence[str],
        *,
        stdout: bool = True,
        stderr: bool = True,
        stdin: bool = False,
        tty: bool = False,
    ) -> str:  # pragma: no cover
        """Создаёт exec сессию и возвращает её идентификатор."""

    def exec_start(
        self, exec_id: str, output: BinaryIO, started: threading.Event
    ) -> None:  # pragma: no cover
        """Запускает exec сессию, пишет объединённый вывод в output.

        Блокирует до завершения команды; ``started`` выставляется, как только
        поток вывода подключён.
        """

    def exec_inspect(self, exec_id: str) -> int:  # pragma: no cover
        """Возвращает код завершения exec сессии."""

    def list_containers(self, *, all: bool = False) -> List[Dict[str, Any]]:  # pragma: no cover
        """Краткий список контейнеров (docker ps)."""

    def inspect_image(self, reference: str) -> Dict[str, Any]:  # pragma: no cover
        """Возвращает описание образа."""

    def pull_image(
        self, reference: str, progress: Optional[ProgressSink] = None
    ) -> None:  # pragma: no cover
        """Скачивает образ, передавая события прогресса в progress."""

    def remove_image(self, reference: str, *, force: bool = False) -> None:  # pragma: no cover
        """Удаляет образ."""

    def logs(
        self,
        container_id: str,
        output: BinaryIO,
        *,
        stdout: bool,
        stderr: bool,
        tail: str,
        follow: bool,
        timestamps: bool,
    ) -> None:  # pragma: no cover
        """Пишет логи контейнера в output, пока поток не закончится."""


class DockerGateway:
    """Реализация ``EngineGateway`` поверх docker-py APIClient."""

    def __init__(self, client: DockerClientWrapper) -> None:
        self._client = client
        self._api = client.get_api_client()

    @property
    def connection_name(self) -> str:
        return self._client.connection.name

    # --------------------------------------------------------------- containers
    def inspect_container(self, container_id: str) -> Dict[str, Any]:
        with _engine_call("inspect_container", container_id):
            return self._api.inspect_container(container_id)

    def create_container(
        self, name: str, config: Dict[str, Any], host_config: Dict[str, Any]
    ) -> Dict[str, Any]:
        payload = dict(config)
        payload["HostConfig"] = host_config
        with _engine_call("create_container", name):
            created = self._api.create_container_from_config(payload, name=name)
        for warning in created.get("Warnings") or []:
            LOGGER.warning("Engine warning while creating %s: %s", name, warning)
        return self.inspect_container(created["Id"])

    def start_container(self, container_id: str) -> None:
        with _engine_call("start_container", container_id):
            self._api.start(container_id)

    def stop_container(self, container_id: str, timeout: int) -> None:
        with _engine_call("stop_container", container_id):
            self._api.stop(container_id, timeout=timeout)

    def remove_container(self, container_id: str, *, force: bool, remove_volumes: bool) -> None:
        with _engine_call("remove_container", container_id):
            self._api.remove_container(container_id, v=remove_volumes, force=force)

    def rename_container(self, container_id: str, new_name: str) -> None:
        with _engine_call("rename_container", container_id):
            self._api.rename(container_id, new_name)

    def list_containers(self, *, all: bool = False) -> List[Dict[str, Any]]:
        with _engine_call("list_containers"):
            return list(self._api.containers(all=all))

    # --------------------------------------------------------------------- exec
    def exec_create(
        self,
        container_id: str,
        cmd: Sequence[str],
        *,
        stdout: bool = True,
        stderr: bool = True,
        stdin: bool = False,
        tty: bool = False,
    ) -> str:
        with _engine_call("exec_create", container_id):
            created = self._api.exec_create(
                container_id,
                list(cmd),
                stdout=stdout,
                stderr=stderr,
                stdin=stdin,
                tty=tty,
            )
        return created["Id"]

    def exec_start(self, exec_id: str, output: BinaryIO, started: threading.Event) -> None:
        with _engine_call("exec_start", exec_id):
            stream = self._api.exec_start(exec_id, detach=False, tty=False, stream=True)
            started.set()
            for chunk in stream:
                output.write(chunk)

    def exec_inspect(self, exec_id: str) -> int:
        with _engine_call("exec_inspect", exec_id):
            details = self._api.exec_inspect(exec_id)
        exit_code = details.get("ExitCode")
        if exit_code is None:
            raise EngineError("exec_inspect", "exec session has no exit code yet", target=exec_id)
        return int(exit_code)

    # ------------------------------------------------------------------- images
    def inspect_image(self, reference: str) -> Dict[str, Any]:
        with _engine_call("inspect_image", reference):
            return self._api.inspect_image(reference)

    def pull_image(self, reference: str, progress: Optional[ProgressSink] = None) -> None:
        with _engine_call("pull_image", reference):
            for event in self._api.pull(reference, stream=True, decode=True):
                # Ошибка скачивания приходит событием в потоке, а не HTTP статусом
                if "error" in event:
                    raise EngineError("pull_image", str(event["error"]), target=reference)
                if progress is not None:
                    progress(event)

    def remove_image(self, reference: str, *, force: bool = False) -> None:
        with _engine_call("remove_image", reference):
            self._api.remove_image(reference, force=force)

    # --------------------------------------------------------------------- logs
    def logs(
        self,
        container_id: str,
        output: BinaryIO,
        *,
        stdout: bool,
        stderr: bool,
        tail: str,
        follow: bool,
        timestamps: bool,
    ) -> None:
        with _engine_call("logs", container_id):
            stream = self._api.logs(
                container_id,
                stdout=stdout,
                stderr=stderr,
                stream=True,
                follow=follow,
                timestamps=timestamps,
                tail=_parse_tail(tail),
            )
            for chunk in stream:
                output.write(chunk)


@contextmanager
def _engine_call(operation: str, target: str = "") -> Iterator[None]:
    """Переводит исключения docker-py и requests в исключения библиотеки."""

    try:
        yield
    except NotFound as exc:
        raise NotFoundError(
            f"{target or 'object'} not found ({operation})",
            context={"operation": operation, "target": target},
        ) from exc
    except (DockerException, StreamParseError, RequestException) as exc:
        LOGGER.debug("Engine call %s failed for %s: %s", operation, target, exc)
        raise EngineError(operation, str(exc), target=target) from exc


def _parse_tail(tail: str) -> str | int:
    value = tail.strip()
    if value.isdigit():
        return int(value)
    return "all"
