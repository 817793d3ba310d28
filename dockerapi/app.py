"""Инициализация: настройки -> логирование -> подключение -> шлюз к engine."""

from __future__ import annotations

import logging
from pathlib import Path

from dockerapi import __version__
from dockerapi.connections.models import Connection, TLSFiles
from dockerapi.engine.client import DockerClientWrapper
from dockerapi.engine.gateway import DockerGateway
from dockerapi.exceptions import ConfigurationError
from dockerapi.settings.registry import SettingsRegistry
from dockerapi.utils.logger import configure_logging

LOGGER = logging.getLogger(__name__)


def initialize_settings(config_path: Path) -> SettingsRegistry:
    """Создаёт реестр настроек и загружает config.json."""

    registry = SettingsRegistry(config_path)
    registry.load_from_disk()
    return registry


def setup_logging_from_settings(base_dir: Path, settings: SettingsRegistry) -> None:
    """Настраивает логирование в соответствии с группой logging."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        log_dir=base_dir / "logs",
        level_name=logging_settings.get("level", "INFO"),
        max_bytes=logging_settings.get("max_file_size_mb", 10) * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files", 5),
    )


def connection_from_settings(settings: SettingsRegistry) -> Connection:
    """Собирает описание подключения из группы engine."""

    engine = settings.get_group("engine")
    base_url = engine.get("base_url")
    tls = None
    if engine.get("tls_enabled"):
        if not base_url:
            raise ConfigurationError(
                "TLS is enabled but engine base_url is empty",
                context={"tls_enabled": True, "base_url": base_url},
            )
        client_cert = engine.get("tls_client_cert")
        client_key = engine.get("tls_client_key")
        if not client_cert or not client_key:
            raise ConfigurationError(
                "TLS is enabled but client certificate or key is missing",
                context={"tls_client_cert": client_cert, "tls_client_key": client_key},
            )
        tls = TLSFiles(
            client_cert=client_cert,
            client_key=client_key,
            ca_cert=engine.get("tls_ca_cert"),
            verify=engine.get("tls_verify"),
        )
    return Connection(
        identifier="default",
        name=base_url or "environment",
        socket=base_url,
        tls=tls,
        api_version=engine.get("api_version"),
        timeout_sec=engine.get("timeout_sec"),
    )


def create_gateway(settings: SettingsRegistry) -> DockerGateway:
    """Подключается к engine, описанному в настройках."""

    connection = connection_from_settings(settings)
    LOGGER.info("dockerapi %s connecting to %s", __version__, connection.name)
    return DockerGateway(DockerClientWrapper(connection))
