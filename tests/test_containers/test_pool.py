"""Тесты массовых операций пула контейнеров."""

from __future__ import annotations

import threading

import pytest

from dockerapi.containers.container import new_container
from dockerapi.containers.models import ContainerOptions
from dockerapi.containers.pool import ContainerPool
from dockerapi.exceptions import EngineError, PoolError, RunError


def make_pool(gateway, names=("web1", "web2", "web3")) -> ContainerPool:
    return ContainerPool(
        new_container(gateway, ContainerOptions(image="nginx:latest", name=name))
        for name in names
    )


def test_run_all_success(gateway) -> None:
    pool = make_pool(gateway)

    outcomes = pool.run_all()

    assert [outcome.name for outcome in outcomes] == ["web1", "web2", "web3"]
    assert all(outcome.ok for outcome in outcomes)
    assert all(container.is_running() for container in pool)


def test_run_all_attempts_every_member(gateway, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")
    gateway.fail("create_container", lambda name, config, host_config: name == "web2")
    pool = make_pool(gateway)

    with pytest.raises(PoolError) as exc_info:
        pool.run_all()

    created = sorted(args[0] for args in gateway.args_of("create_container"))
    assert created == ["web1", "web2", "web3"]
    error = exc_info.value
    assert isinstance(error.last_error, RunError)
    assert error.__cause__ is error.last_error
    assert [outcome.name for outcome in error.failed] == ["web2"]
    assert len(error.outcomes) == 3
    assert "Pool run failed for web2" in caplog.text


def test_run_all_collects_foreign_exceptions(gateway, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")
    original_pull = gateway.pull_image

    def pull_image(reference: str, progress=None) -> None:
        if reference == "alpha:latest":
            raise RuntimeError("Invalid JSON in pull stream")
        original_pull(reference, progress)

    gateway.pull_image = pull_image  # type: ignore[method-assign]
    gateway.fail("create_container", lambda name, config, host_config: name == "b")
    pool = ContainerPool(
        new_container(gateway, ContainerOptions(image=f"{image}:latest", name=name))
        for name, image in (("a", "alpha"), ("b", "beta"), ("c", "gamma"))
    )

    with pytest.raises(PoolError) as exc_info:
        pool.run_all()

    error = exc_info.value
    assert sorted(outcome.name for outcome in error.failed) == ["a", "b"]
    foreign = error.outcomes[0].error
    assert isinstance(foreign, EngineError)
    assert isinstance(foreign.__cause__, RuntimeError)
    assert "Invalid JSON in pull stream" in str(foreign)
    assert error.outcomes[2].ok
    assert pool[2].is_running() is True
    assert "Pool run failed for a" in caplog.text
    assert "Pool run failed for b" in caplog.text


def test_run_all_runs_members_concurrently(gateway) -> None:
    barrier = threading.Barrier(3, timeout=5)
    original_start = gateway.start_container

    def start_container(container_id: str) -> None:
        # Все три потока должны одновременно дойти до start
        barrier.wait()
        original_start(container_id)

    gateway.start_container = start_container  # type: ignore[method-assign]
    pool = make_pool(gateway)

    outcomes = pool.run_all()

    assert all(outcome.ok for outcome in outcomes)


def test_remove_all(gateway) -> None:
    pool = make_pool(gateway)
    pool.run_all()

    outcomes = pool.remove_all(remove_volumes=True)

    assert all(outcome.ok for outcome in outcomes)
    assert all(container.id == "" for container in pool)
    assert gateway.count("remove_container") == 3


def test_remove_all_reports_failures(gateway) -> None:
    pool = make_pool(gateway, names=("a", "b"))
    pool.run_all()
    pool.append(new_container(gateway, ContainerOptions(image="nginx:latest", name="never")))

    with pytest.raises(PoolError) as exc_info:
        pool.remove_all()

    assert [outcome.name for outcome in exc_info.value.failed] == ["never"]
    assert pool[0].id == "" and pool[1].id == ""


def test_empty_pool(gateway) -> None:
    pool = ContainerPool()
    assert pool.run_all() == []
    assert pool.remove_all() == []
    assert len(pool) == 0
