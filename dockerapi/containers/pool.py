"""Пул контейнеров: массовые операции, выполняемые параллельно."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional

from dockerapi.containers.container import Container
from dockerapi.exceptions import DockerAPIError, EngineError, PoolError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PoolOutcome:
    """Результат операции для одного контейнера пула."""

    container: Container
    error: Optional[DockerAPIError] = None

    @property
    def name(self) -> str:
        return self.container.name

    @property
    def ok(self) -> bool:
        return self.error is None


class ContainerPool:
    """Упорядоченный набор контейнеров.

    Каждая операция запускает по одному потоку на контейнер и дожидается всех.
    Ошибки отдельных контейнеров не прерывают остальные: они пишутся в лог,
    а после завершения поднимается ``PoolError`` со всеми результатами.
    """

    def __init__(self, containers: Iterable[Container] = ()) -> None:
        self._containers: List[Container] = list(containers)

    def __len__(self) -> int:
        return len(self._containers)

    def __iter__(self) -> Iterator[Container]:
        return iter(self._containers)

    def __getitem__(self, index: int) -> Container:
        return self._containers[index]

    def append(self, container: Container) -> None:
        self._containers.append(container)

    def run_all(self) -> List[PoolOutcome]:
        """Выполняет run для каждого контейнера."""

        return self._fan_out("run", lambda container: container.run())

    def remove_all(self, remove_volumes: bool = False) -> List[PoolOutcome]:
        """Выполняет remove для каждого контейнера."""

        return self._fan_out("remove", lambda container: container.remove(remove_volumes))

    def _fan_out(self, operation: str, action: Callable[[Container], None]) -> List[PoolOutcome]:
        if not self._containers:
            return []

        outcomes = [PoolOutcome(container) for container in self._containers]
        last_error: Optional[DockerAPIError] = None
        with ThreadPoolExecutor(
            max_workers=len(self._containers), thread_name_prefix=f"pool-{operation}"
        ) as executor:
            futures = {
                executor.submit(action, outcome.container): outcome for outcome in outcomes
            }
            # Порядок завершения недетерминирован: last_error - последняя пришедшая ошибка
            for future in as_completed(futures):
                outcome = futures[future]
                try:
                    future.result()
                except DockerAPIError as exc:
                    LOGGER.error("Pool %s failed for %s: %s", operation, outcome.name, exc)
                    outcome.error = exc
                    last_error = exc
                except Exception as exc:
                    # Чужое исключение не должно прерывать сбор результатов остальных
                    LOGGER.exception("Pool %s failed for %s", operation, outcome.name)
                    wrapped = EngineError(
                        operation, f"{type(exc).__name__}: {exc}", target=outcome.name
                    )
                    wrapped.__cause__ = exc
                    outcome.error = wrapped
                    last_error = wrapped

        if last_error is not None:
            raise PoolError(operation, outcomes, last_error) from last_error
        return outcomes
