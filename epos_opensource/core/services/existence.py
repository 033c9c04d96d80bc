"""
Existence predicates — is this name already taken on this platform?

Each predicate validates the name, looks it up in the registry and
translates the registry's not-found into a verdict. Any other registry
failure propagates as a ``StoreError``, never as a verdict.
"""

from __future__ import annotations

from epos_opensource.core.errors import DuplicateEnvironmentError, EnvironmentNotFoundError
from epos_opensource.core.models.environment import ClusterEnvironment, ContainerEnvironment
from epos_opensource.core.persistence.registry import Registry
from epos_opensource.core.validation import validate_name


def container_does_not_exist(registry: Registry, name: str) -> None:
    """Raise DuplicateEnvironmentError if a container environment *name* exists."""
    validate_name(name)
    try:
        registry.get_container_by_name(name)
    except EnvironmentNotFoundError:
        return
    raise DuplicateEnvironmentError(ContainerEnvironment.platform, name)


def container_exists(registry: Registry, name: str) -> None:
    """Raise EnvironmentNotFoundError unless a container environment *name* exists."""
    validate_name(name)
    registry.get_container_by_name(name)


def cluster_does_not_exist(registry: Registry, name: str) -> None:
    """Raise DuplicateEnvironmentError if a cluster environment *name* exists."""
    validate_name(name)
    try:
        registry.get_cluster_by_name(name)
    except EnvironmentNotFoundError:
        return
    raise DuplicateEnvironmentError(ClusterEnvironment.platform, name)


def cluster_exists(registry: Registry, name: str) -> None:
    """Raise EnvironmentNotFoundError unless a cluster environment *name* exists."""
    validate_name(name)
    registry.get_cluster_by_name(name)
