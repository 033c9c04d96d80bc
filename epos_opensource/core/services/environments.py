"""
Environment services — register, look up and tear down environments.

The installer records a finished install through ``register_*``. The
delete flows stop the running stack first and only drop the registry
row once teardown succeeded, so a half-removed environment stays listed
and can be deleted again.

Teardown callables are injectable; the defaults call docker compose
and kubectl.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Union
from urllib.parse import urlsplit

from epos_opensource.adapters.cluster import kubectl
from epos_opensource.adapters.containers import docker
from epos_opensource.adapters.display import Display
from epos_opensource.core.models.environment import ClusterEnvironment, ContainerEnvironment
from epos_opensource.core.persistence.registry import Registry
from epos_opensource.core.services.existence import (
    cluster_does_not_exist,
    cluster_exists,
    container_does_not_exist,
    container_exists,
)
from epos_opensource.core.validation import validate_host, validate_path

logger = logging.getLogger(__name__)

Environment = Union[ContainerEnvironment, ClusterEnvironment]

ContainerTeardown = Callable[[ContainerEnvironment, Display], None]
ClusterTeardown = Callable[[ClusterEnvironment, str, Display], None]


# ── Register ────────────────────────────────────────────────────


def register_container(registry: Registry, env: ContainerEnvironment) -> ContainerEnvironment:
    """Record an installed container environment.

    Raises:
        InvalidInputError: Bad name, URL host or missing directory.
        DuplicateEnvironmentError: The name is taken.
    """
    container_does_not_exist(registry, env.name)
    _check_install(env)
    return registry.insert_container(env)


def register_cluster(registry: Registry, env: ClusterEnvironment) -> ClusterEnvironment:
    """Record an installed cluster environment."""
    cluster_does_not_exist(registry, env.name)
    _check_install(env)
    return registry.insert_cluster(env)


def _check_install(env: Environment) -> None:
    validate_path(env.directory)
    for url in (env.api_url, env.gui_url, env.backoffice_url):
        if url:
            validate_host(urlsplit(url).hostname or "")


# ── Read ────────────────────────────────────────────────────────


def list_environments(registry: Registry) -> list[Environment]:
    """All environments of both platforms, sorted by platform then name."""
    envs: list[Environment] = [*registry.list_container(), *registry.list_cluster()]
    return sorted(envs, key=lambda e: (e.platform, e.name))


def get_container(registry: Registry, name: str) -> ContainerEnvironment:
    container_exists(registry, name)
    return registry.get_container_by_name(name)


def get_cluster(registry: Registry, name: str) -> ClusterEnvironment:
    cluster_exists(registry, name)
    return registry.get_cluster_by_name(name)


# ── Delete ──────────────────────────────────────────────────────


def _default_container_teardown(env: ContainerEnvironment, display: Display) -> None:
    docker.compose_down(env, display=display)


def _default_cluster_teardown(env: ClusterEnvironment, context: str, display: Display) -> None:
    kubectl.delete_namespace(env.name, context, display=display)


def delete_containers(
    registry: Registry,
    names: Sequence[str],
    display: Display,
    teardown: ContainerTeardown | None = None,
) -> None:
    """Stop and remove container environments.

    Every name is checked before anything is torn down. For each
    environment: compose down, remove its directory, drop the row.

    Raises:
        EnvironmentNotFoundError: A name is not registered (nothing removed).
        CommandError: Teardown failed; that environment stays registered.
    """
    teardown = teardown or _default_container_teardown
    # a name given twice is deleted once
    names = list(dict.fromkeys(names))
    for name in names:
        container_exists(registry, name)

    for name in names:
        display.step(f"Deleting environment: {name}")
        env = registry.get_container_by_name(name)
        display.debug(f"loaded docker environment directory: {env.directory}")

        display.step(f"Stopping stack for environment: {name}")
        teardown(env, display)
        display.done(f"Stopped environment: {name}")

        _remove_directory(env.directory, display)
        registry.delete_container(name)
        display.done(f"Deleted environment: {name}")


def delete_clusters(
    registry: Registry,
    names: Sequence[str],
    display: Display,
    context: str | None = None,
    teardown: ClusterTeardown | None = None,
) -> None:
    """Remove cluster environments.

    The namespace is deleted on *context* when given, otherwise on the
    context recorded at install time.

    Raises:
        EnvironmentNotFoundError: A name is not registered (nothing removed).
        CommandError: Teardown failed; that environment stays registered.
    """
    teardown = teardown or _default_cluster_teardown
    # a name given twice is deleted once
    names = list(dict.fromkeys(names))
    for name in names:
        cluster_exists(registry, name)

    for name in names:
        display.step(f"Deleting environment: {name}")
        env = registry.get_cluster_by_name(name)
        target = context or env.context
        display.debug(f"using kubernetes context: {target}")

        display.step(f"Deleting namespace: {name}")
        teardown(env, target, display)
        display.done(f"Deleted namespace: {name}")

        _remove_directory(env.directory, display)
        registry.delete_cluster(name)
        display.done(f"Deleted environment: {name}")


def _remove_directory(directory: str, display: Display) -> None:
    path = Path(directory)
    if not path.exists():
        display.warn(f"Environment directory {path} is already gone")
        return
    logger.debug("Removing environment directory %s", path)
    shutil.rmtree(path)
