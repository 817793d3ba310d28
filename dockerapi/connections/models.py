"""Модели данных для описания подключения к Docker engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from dockerapi.utils.helpers import normalize_socket_path


@dataclass(slots=True)
class TLSFiles:
    """Пути к PEM файлам для TLS подключения к engine."""

    client_cert: str
    client_key: str
    ca_cert: Optional[str] = None
    verify: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует конфигурацию в словарь."""

        return {
            "client_cert": self.client_cert,
            "client_key": self.client_key,
            "ca_cert": self.ca_cert,
            "verify": self.verify,
        }


@dataclass(slots=True)
class Connection:
    """Одна точка подключения к Docker engine.

    Пустой ``socket`` означает, что адрес берётся из окружения
    (``DOCKER_HOST``, ``DOCKER_TLS_VERIFY``, ``DOCKER_CERT_PATH``).
    """

    identifier: str
    name: str
    socket: str = ""
    tls: Optional[TLSFiles] = None
    api_version: str = "auto"
    timeout_sec: int = 60

    def __post_init__(self) -> None:
        self.socket = normalize_socket_path(self.socket)

    @property
    def from_environment(self) -> bool:
        return not self.socket

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует модель в dict."""

        return {
            "id": self.identifier,
            "name": self.name,
            "socket": self.socket,
            "tls": self.tls.to_dict() if self.tls else None,
            "api_version": self.api_version,
            "timeout_sec": self.timeout_sec,
        }
