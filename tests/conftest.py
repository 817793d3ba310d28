"""Общие фикстуры: фейковый Docker engine без реального демона."""

from __future__ import annotations

import copy
import threading
from collections import Counter
from typing import Any, BinaryIO, Callable, Dict, List, Optional, Sequence

import pytest

from dockerapi.exceptions import EngineError, NotFoundError


class FakeGateway:
    """Записывает вызовы и хранит контейнеры в памяти."""

    def __init__(self) -> None:
        self.calls: List[tuple[str, tuple[Any, ...]]] = []
        self.containers: Dict[str, Dict[str, Any]] = {}
        self.images: set[str] = set()
        self.summaries: List[Dict[str, Any]] = []
        # operation -> функция, которая решает, бросать ли ошибку для аргументов
        self.failures: Dict[str, Callable[..., bool]] = {}
        self.exec_output: bytes = b""
        self.exec_exit_code = 0
        self.exec_start_error: Optional[Exception] = None
        self.log_output: bytes = b""
        self._lock = threading.Lock()
        self._counter = 0

    # ----------------------------------------------------------------- helpers
    def count(self, operation: str) -> int:
        return Counter(name for name, _ in self.calls)[operation]

    def args_of(self, operation: str) -> List[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == operation]

    def fail(self, operation: str, when: Callable[..., bool] = lambda *args, **kwargs: True) -> None:
        self.failures[operation] = when

    def _record(self, operation: str, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            self.calls.append((operation, args + tuple(sorted(kwargs.items()))))
        predicate = self.failures.get(operation)
        if predicate is not None and predicate(*args, **kwargs):
            raise EngineError(operation, "boom", target=str(args[0]) if args else "")

    def add_container(self, container_id: str, name: str, *, running: bool = False) -> None:
        self.containers[container_id] = {
            "Id": container_id,
            "Name": f"/{name}",
            "Config": {"Image": "busybox:latest", "Env": []},
            "HostConfig": {},
            "State": {"Running": running},
        }

    # -------------------------------------------------------------- containers
    def inspect_container(self, container_id: str) -> Dict[str, Any]:
        self._record("inspect_container", container_id)
        if container_id not in self.containers:
            raise NotFoundError(f"{container_id} not found")
        return copy.deepcopy(self.containers[container_id])

    def create_container(
        self, name: str, config: Dict[str, Any], host_config: Dict[str, Any]
    ) -> Dict[str, Any]:
        self._record("create_container", name, config, host_config)
        with self._lock:
            self._counter += 1
            container_id = f"{self._counter:064x}"
        self.containers[container_id] = {
            "Id": container_id,
            "Name": f"/{name}",
            "Config": copy.deepcopy(config),
            "HostConfig": copy.deepcopy(host_config),
            "State": {"Running": False},
        }
        return copy.deepcopy(self.containers[container_id])

    def start_container(self, container_id: str) -> None:
        self._record("start_container", container_id)
        self.containers[container_id]["State"]["Running"] = True

    def stop_container(self, container_id: str, timeout: int) -> None:
        self._record("stop_container", container_id, timeout)
        self.containers[container_id]["State"]["Running"] = False

    def remove_container(self, container_id: str, *, force: bool, remove_volumes: bool) -> None:
        self._record(
            "remove_container", container_id, force=force, remove_volumes=remove_volumes
        )
        self.containers.pop(container_id, None)

    def rename_container(self, container_id: str, new_name: str) -> None:
        self._record("rename_container", container_id, new_name)
        self.containers[container_id]["Name"] = f"/{new_name}"

    def list_containers(self, *, all: bool = False) -> List[Dict[str, Any]]:
        self._record("list_containers", all=all)
        if all:
            return list(self.summaries)
        return [summary for summary in self.summaries if summary.get("State") == "running"]

    # -------------------------------------------------------------------- exec
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
        self._record(
            "exec_create", container_id, list(cmd), stdout=stdout, stderr=stderr, stdin=stdin, tty=tty
        )
        return "exec-1"

    def exec_start(self, exec_id: str, output: BinaryIO, started: threading.Event) -> None:
        self._record("exec_start", exec_id)
        if self.exec_start_error is not None:
            raise self.exec_start_error
        started.set()
        output.write(self.exec_output)

    def exec_inspect(self, exec_id: str) -> int:
        self._record("exec_inspect", exec_id)
        return self.exec_exit_code

    # ------------------------------------------------------------------ images
    def inspect_image(self, reference: str) -> Dict[str, Any]:
        self._record("inspect_image", reference)
        if reference not in self.images:
            raise NotFoundError(f"{reference} not found")
        return {"Id": f"sha256:{reference}", "RepoTags": [reference]}

    def pull_image(self, reference: str, progress: Any = None) -> None:
        self._record("pull_image", reference)
        if progress is not None:
            progress({"status": "Downloaded newer image", "id": reference})
        self.images.add(reference)

    def remove_image(self, reference: str, *, force: bool = False) -> None:
        self._record("remove_image", reference, force=force)
        self.images.discard(reference)

    # -------------------------------------------------------------------- logs
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
        self._record(
            "logs",
            container_id,
            stdout=stdout,
            stderr=stderr,
            tail=tail,
            follow=follow,
            timestamps=timestamps,
        )
        output.write(self.log_output)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()
