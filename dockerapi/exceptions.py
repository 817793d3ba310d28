"""Исключения библиотеки: ошибки конфигурации, Docker engine и команд."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from dockerapi.containers.pool import PoolOutcome


class DockerAPIError(Exception):
    """Базовое исключение с текстом и словарём контекста."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ConfigurationError(DockerAPIError):
    """Некорректные параметры контейнера (нет образа, имени и т.п.)."""


class ValidationError(ConfigurationError):
    """Некорректный аргумент операции, например пустое новое имя."""


class NotFoundError(DockerAPIError):
    """Контейнер (или объект engine) не существует либо ещё не создан."""


class EngineError(DockerAPIError):
    """Docker engine вернул ошибку при выполнении операции."""

    def __init__(self, operation: str, reason: str, *, target: str = "") -> None:
        self.operation = operation
        self.reason = reason
        self.target = target
        suffix = f" for {target}" if target else ""
        super().__init__(
            f"Engine call '{operation}' failed{suffix}: {reason}",
            context={"operation": operation, "target": target, "reason": reason},
        )


class ContainerError(DockerAPIError):
    """Ошибка операции над конкретным контейнером."""

    action = "handle"

    def __init__(self, container: str, reason: str) -> None:
        self.container = container
        self.reason = reason
        super().__init__(
            f"Can't {self.action} container {container} because {reason}",
            context={"container": container, "reason": reason},
        )


class StartError(ContainerError):
    action = "start"


class StopError(ContainerError):
    action = "stop"


class RemoveError(ContainerError):
    action = "remove"


class RenameError(ContainerError):
    action = "rename"


class LogsError(ContainerError):
    action = "get logs from"


class RunError(DockerAPIError):
    """Сбой одного из шагов run: download, create или start."""

    _MESSAGES = {
        "download": "Unable to download {image} image",
        "create": "Can't create container {container}",
        "start": "Can't start {container}",
    }

    def __init__(self, step: str, *, container: str, image: str, reason: str) -> None:
        self.step = step
        self.container = container
        self.image = image
        self.reason = reason
        template = self._MESSAGES.get(step, "Can't run {container}")
        super().__init__(
            f"{template.format(container=container, image=image)}: {reason}",
            context={"step": step, "container": container, "image": image, "reason": reason},
        )


class CommandError(DockerAPIError):
    """Команда выполнилась внутри контейнера, но вернула ненулевой код."""

    def __init__(self, command: Sequence[str], exit_code: int, output: Sequence[str] = ()) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        # Вывод сохраняется, чтобы вызывающий код мог показать причину сбоя
        self.output: List[str] = list(output)
        joined = " ".join(self.command)
        super().__init__(
            f"Command {joined!r} failed: {exit_code}",
            context={"command": joined, "exit_code": exit_code},
        )


class PoolError(DockerAPIError):
    """Хотя бы один контейнер пула завершил операцию с ошибкой."""

    def __init__(
        self,
        operation: str,
        outcomes: Sequence["PoolOutcome"],
        last_error: BaseException,
    ) -> None:
        self.operation = operation
        self.outcomes = list(outcomes)
        self.last_error = last_error
        failed = self.failed
        super().__init__(
            f"Pool {operation} failed for {len(failed)} of {len(self.outcomes)} containers: "
            f"{last_error}",
            context={"operation": operation, "failed": [outcome.name for outcome in failed]},
        )

    @property
    def failed(self) -> List["PoolOutcome"]:
        """Только неуспешные результаты."""

        return [outcome for outcome in self.outcomes if outcome.error is not None]
