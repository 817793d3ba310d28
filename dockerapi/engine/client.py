"""Обёртка над docker-py: создание клиента для одного engine."""

from __future__ import annotations

import logging
from typing import Any

import docker
from docker.errors import DockerException
from docker.tls import TLSConfig
from requests.exceptions import RequestException

from dockerapi.connections.models import Connection
from dockerapi.exceptions import ConfigurationError, EngineError

LOGGER = logging.getLogger(__name__)


class DockerClientWrapper:
    """Управляет созданием и использованием docker API client."""

    def __init__(self, connection: Connection, raw_client: Any | None = None) -> None:
        self.connection = connection  # Сохраняем описание соединения
        self._client = raw_client or self._create_client()  # Создаём docker client

    def _create_client(self) -> Any:
        if self.connection.from_environment and self.connection.tls is not None:
            # docker.from_env читает TLS только из DOCKER_CERT_PATH
            raise ConfigurationError(
                "TLS files require an explicit engine address",
                context={"connection": self.connection.identifier},
            )
        try:
            if self.connection.from_environment:
                return docker.from_env(
                    version=self.connection.api_version,
                    timeout=self.connection.timeout_sec,
                )
            return docker.DockerClient(
                base_url=self.connection.socket,
                version=self.connection.api_version,
                timeout=self.connection.timeout_sec,
                tls=self._build_tls(),
            )
        except DockerException as exc:
            LOGGER.error(
                "Docker client init error for connection %s (%s) via %s: %s",
                self.connection.identifier,
                self.connection.name,
                self.connection.socket or "environment",
                exc,
            )
            raise EngineError("connect", str(exc), target=self.connection.name) from exc

    def _build_tls(self) -> TLSConfig | bool:
        tls = self.connection.tls
        if tls is None:
            return False
        return TLSConfig(
            client_cert=(tls.client_cert, tls.client_key),
            ca_cert=tls.ca_cert,
            verify=tls.ca_cert if (tls.verify and tls.ca_cert) else tls.verify,
        )

    def get_api_client(self) -> Any:
        """Низкоуровневый APIClient, с которым работает шлюз."""

        return self._client.api

    def ping(self) -> bool:
        """Проверяет доступность Docker."""

        try:
            self._client.ping()
            return True
        except (DockerException, RequestException) as exc:
            LOGGER.error("Docker ping failed: %s", exc)
            return False

    def close(self) -> None:
        self._client.close()
