"""
Tests for the existence predicates.
"""

from pathlib import Path

import pytest

from conftest import make_cluster, make_container
from epos_opensource.core.errors import (
    DuplicateEnvironmentError,
    EnvironmentNotFoundError,
    InvalidNameError,
    StoreError,
)
from epos_opensource.core.persistence.registry import Registry
from epos_opensource.core.services.existence import (
    cluster_does_not_exist,
    cluster_exists,
    container_does_not_exist,
    container_exists,
)


class TestContainerPredicates:

    def test_absent(self, registry: Registry):
        container_does_not_exist(registry, "dev")
        with pytest.raises(EnvironmentNotFoundError):
            container_exists(registry, "dev")

    def test_present(self, registry: Registry):
        registry.insert_container(make_container("dev"))
        container_exists(registry, "dev")
        with pytest.raises(DuplicateEnvironmentError, match="docker environment with name 'dev'"):
            container_does_not_exist(registry, "dev")

    def test_cluster_row_does_not_count(self, registry: Registry):
        registry.insert_cluster(make_cluster("dev"))
        container_does_not_exist(registry, "dev")

    def test_invalid_name_checked_first(self, registry: Registry):
        with pytest.raises(InvalidNameError):
            container_exists(registry, "bad name")
        with pytest.raises(InvalidNameError):
            container_does_not_exist(registry, "")


class TestClusterPredicates:

    def test_absent(self, registry: Registry):
        cluster_does_not_exist(registry, "prod")
        with pytest.raises(EnvironmentNotFoundError):
            cluster_exists(registry, "prod")

    def test_present(self, registry: Registry):
        registry.insert_cluster(make_cluster("prod"))
        cluster_exists(registry, "prod")
        with pytest.raises(DuplicateEnvironmentError):
            cluster_does_not_exist(registry, "prod")


class TestStoreFailure:
    """A broken registry is an error, never a verdict."""

    def test_store_error_propagates(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        registry = Registry(blocker / "db.db")
        with pytest.raises(StoreError):
            container_does_not_exist(registry, "dev")
        with pytest.raises(StoreError):
            cluster_exists(registry, "dev")
