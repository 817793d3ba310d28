"""Синхронное выполнение команд внутри запущенного контейнера.

Exec сессия запускается в отдельном потоке, который пишет объединённый
stdout+stderr в pipe. Вызывающий поток ждёт сигнала ``started`` (поток вывода
подключён или запуск не удался), затем построчно читает pipe до его закрытия и
только после этого запрашивает код завершения.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, List, Sequence

from dockerapi.engine.gateway import EngineGateway
from dockerapi.exceptions import CommandError, NotFoundError

LOGGER = logging.getLogger(__name__)

SHELL_PREFIX = ("/bin/sh", "-c")


class CommandExecutor:
    """Выполняет команду через exec create -> start -> inspect."""

    def __init__(self, gateway: EngineGateway) -> None:
        self._gateway = gateway

    def execute(self, container_id: str, cmd: Sequence[str]) -> List[str]:
        """Возвращает строки вывода команды или бросает CommandError."""

        if not container_id:
            raise NotFoundError(
                f"Container for command {' '.join(cmd)!r} does not exist",
                context={"command": list(cmd)},
            )

        exec_id = self._gateway.exec_create(
            container_id,
            cmd,
            stdout=True,
            stderr=True,
            stdin=False,
            tty=False,
        )
        LOGGER.debug("Exec %s created in %s: %s", exec_id, container_id, cmd)

        read_fd, write_fd = os.pipe()
        started = threading.Event()
        with os.fdopen(read_fd, "rb") as reader, ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="exec-start"
        ) as pool:
            future = pool.submit(self._start_session, exec_id, write_fd, started)
            started.wait()
            lines = _drain(reader)
            # Ошибка запуска сессии пробрасывается вызывающему
            future.result()

        exit_code = self._gateway.exec_inspect(exec_id)
        if exit_code != 0:
            raise CommandError(cmd, exit_code, lines)
        return lines

    def execute_sh(self, container_id: str, cmd: Sequence[str]) -> List[str]:
        """То же, что execute, но через /bin/sh -c."""

        return self.execute(container_id, [*SHELL_PREFIX, *cmd])

    def _start_session(self, exec_id: str, write_fd: int, started: threading.Event) -> None:
        try:
            with os.fdopen(write_fd, "wb") as writer:
                self._gateway.exec_start(exec_id, writer, started)
        finally:
            # Закрытый writer даёт читателю EOF, а сигнал освобождает ожидание
            started.set()


def _drain(reader: BinaryIO) -> List[str]:
    return [line.decode("utf-8", errors="replace").rstrip("\r\n") for line in reader]
