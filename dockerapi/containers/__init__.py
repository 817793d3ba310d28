"""Контейнеры, их пулы и облегчённые представления."""

from __future__ import annotations

from dockerapi.containers.container import (
    STOP_TIMEOUT_SECONDS,
    Container,
    inspect_container,
    new_container,
)
from dockerapi.containers.executor import CommandExecutor
from dockerapi.containers.light import (
    ContainerView,
    LightContainer,
    LightContainers,
    list_containers,
    list_running_containers,
)
from dockerapi.containers.models import ContainerOptions, LogsOptions, Parameters, PortBinding
from dockerapi.containers.pool import ContainerPool, PoolOutcome

__all__ = [
    "STOP_TIMEOUT_SECONDS",
    "CommandExecutor",
    "Container",
    "ContainerOptions",
    "ContainerPool",
    "ContainerView",
    "LightContainer",
    "LightContainers",
    "LogsOptions",
    "Parameters",
    "PoolOutcome",
    "PortBinding",
    "inspect_container",
    "list_containers",
    "list_running_containers",
    "new_container",
]
