"""Модели желаемой конфигурации контейнера и её перевод в формат Docker engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, List

from dockerapi.exceptions import ConfigurationError

DEFAULT_HOST_IP = "0.0.0.0"
DEFAULT_BIND_MODE = "rw"


def effective_protocol(protocol: str) -> str:
    """Всё, что не udp, считается tcp."""

    return "udp" if protocol == "udp" else "tcp"


def normalize_bind(spec: str) -> str:
    """external:internal -> external:internal:rw, остальные строки без изменений."""

    if len(spec.split(":")) == 2:
        return f"{spec}:{DEFAULT_BIND_MODE}"
    return spec


@dataclass(slots=True)
class PortBinding:
    """Проброс порта контейнера на порт хоста."""

    container_port: str
    host_port: str
    protocol: str = "tcp"  # tcp или udp

    @property
    def port_key(self) -> str:
        """Ключ вида "6379/tcp", которым engine описывает порт."""

        return f"{self.container_port}/{effective_protocol(self.protocol)}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "container_port": self.container_port,
            "host_port": self.host_port,
            "protocol": effective_protocol(self.protocol),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PortBinding":
        return cls(
            container_port=str(data.get("container_port", "")),
            host_port=str(data.get("host_port", "")),
            protocol=data.get("protocol", "tcp") or "tcp",
        )


@dataclass(slots=True)
class Parameters:
    """Ограничения ресурсов контейнера."""

    memory: int = 0
    memory_swap: int = 0
    cpu_shares: int = 0
    cpu_set: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "memory": self.memory,
            "memory_swap": self.memory_swap,
            "cpu_shares": self.cpu_shares,
            "cpu_set": self.cpu_set,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Parameters":
        return cls(
            memory=int(data.get("memory", 0)),
            memory_swap=int(data.get("memory_swap", 0)),
            cpu_shares=int(data.get("cpu_shares", 0)),
            cpu_set=data.get("cpu_set", ""),
        )


@dataclass(slots=True)
class ContainerOptions:
    """Желаемая конфигурация контейнера до его создания."""

    image: str  # образ в registry, например redis:latest
    name: str
    port_bindings: List[PortBinding] = field(default_factory=list)
    cmd: List[str] = field(default_factory=list)
    binds: List[str] = field(default_factory=list)  # external:internal[:ro|rw]
    links: List[str] = field(default_factory=list)  # external:internal
    env: List[str] = field(default_factory=list)  # KEY=value
    hostname: str = ""
    parameters: Parameters = field(default_factory=Parameters)

    def validate(self) -> None:
        """Проверяет обязательные поля."""

        if not self.image:
            raise ConfigurationError("Image is required", context={"name": self.name})
        if not self.name:
            raise ConfigurationError("Name is required", context={"image": self.image})

    def to_config(self) -> Dict[str, Any]:
        """Секция Config для запроса создания контейнера."""

        return {
            "Image": self.image,
            "Cmd": list(self.cmd) or None,
            "Env": list(self.env),
            "Hostname": self.hostname,
            "ExposedPorts": {binding.port_key: {} for binding in self.port_bindings},
        }

    def to_host_config(self) -> Dict[str, Any]:
        """Секция HostConfig: порты, тома, ссылки и лимиты."""

        return {
            "PortBindings": {
                binding.port_key: [{"HostIp": DEFAULT_HOST_IP, "HostPort": binding.host_port}]
                for binding in self.port_bindings
            },
            "Binds": [normalize_bind(spec) for spec in self.binds],
            "Links": list(self.links),
            "Memory": self.parameters.memory,
            "MemorySwap": self.parameters.memory_swap,
            "CpuShares": self.parameters.cpu_shares,
            "CpusetCpus": self.parameters.cpu_set,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "image": self.image,
            "name": self.name,
            "port_bindings": [binding.to_dict() for binding in self.port_bindings],
            "cmd": list(self.cmd),
            "binds": list(self.binds),
            "links": list(self.links),
            "env": list(self.env),
            "hostname": self.hostname,
            "parameters": self.parameters.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContainerOptions":
        return cls(
            image=data.get("image", ""),
            name=data.get("name", ""),
            port_bindings=[
                PortBinding.from_dict(entry)
                for entry in data.get("port_bindings", [])
                if isinstance(entry, dict)
            ],
            cmd=list(data.get("cmd", [])),
            binds=list(data.get("binds", [])),
            links=list(data.get("links", [])),
            env=list(data.get("env", [])),
            hostname=data.get("hostname", ""),
            parameters=Parameters.from_dict(data.get("parameters") or {}),
        )


@dataclass(slots=True)
class LogsOptions:
    """Параметры чтения логов контейнера."""

    output_stream: BinaryIO
    stdout: bool = True
    stderr: bool = True
    tail: str = "all"
    follow: bool = True
    timestamps: bool = True
