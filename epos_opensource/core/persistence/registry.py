"""
Environment registry — the fixed verb set over the registry database.

Two kinds of rows live here: container (Docker Compose) environments in
the ``docker`` table and cluster (Kubernetes) environments in the
``kubernetes`` table. Each verb opens a fresh connection, does one
thing and closes it again.

Verbs:
    insert_container / insert_cluster      → stored record
    delete_container / delete_cluster      → True if a row was removed
    get_container_by_name / get_cluster_by_name
                                           → record, or EnvironmentNotFoundError
    list_container / list_cluster          → every record, ordered by name
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy import Table, delete, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from epos_opensource.core.errors import (
    DuplicateEnvironmentError,
    EnvironmentNotFoundError,
    StoreError,
)
from epos_opensource.core.models.environment import ClusterEnvironment, ContainerEnvironment
from epos_opensource.core.persistence.database import open_database
from epos_opensource.core.persistence.schema import docker_table, kubernetes_table
from epos_opensource.core.platform import Platform

logger = logging.getLogger(__name__)

EnvT = TypeVar("EnvT", bound=BaseModel)


class Registry:
    """Name-keyed CRUD over installed environments."""

    def __init__(self, db_file: Path):
        self._db_file = db_file

    @classmethod
    def for_platform(cls, platform: Platform) -> Registry:
        return cls(platform.db_path)

    @contextmanager
    def connect(self) -> Iterator[Connection]:
        """Open a migrated connection for the duration of the block."""
        conn = open_database(self._db_file)
        try:
            yield conn
        finally:
            conn.close()

    # ── Container (docker) ──────────────────────────────────────

    def insert_container(self, env: ContainerEnvironment) -> ContainerEnvironment:
        return self._insert(docker_table, ContainerEnvironment, env)

    def delete_container(self, name: str) -> bool:
        return self._delete(docker_table, ContainerEnvironment.platform, name)

    def get_container_by_name(self, name: str) -> ContainerEnvironment:
        return self._get(docker_table, ContainerEnvironment, name)

    def list_container(self) -> list[ContainerEnvironment]:
        return self._list(docker_table, ContainerEnvironment)

    # ── Cluster (kubernetes) ────────────────────────────────────

    def insert_cluster(self, env: ClusterEnvironment) -> ClusterEnvironment:
        return self._insert(kubernetes_table, ClusterEnvironment, env)

    def delete_cluster(self, name: str) -> bool:
        return self._delete(kubernetes_table, ClusterEnvironment.platform, name)

    def get_cluster_by_name(self, name: str) -> ClusterEnvironment:
        return self._get(kubernetes_table, ClusterEnvironment, name)

    def list_cluster(self) -> list[ClusterEnvironment]:
        return self._list(kubernetes_table, ClusterEnvironment)

    # ── Shared implementation ───────────────────────────────────

    def _insert(self, table: Table, model: type[EnvT], env: EnvT) -> EnvT:
        kind = model.platform
        values = env.model_dump()
        stmt = insert(table).values(**values).returning(*table.c)
        with self.connect() as conn:
            try:
                row = conn.execute(stmt).one()
                conn.commit()
            except IntegrityError as e:
                conn.rollback()
                raise DuplicateEnvironmentError(kind, values["name"]) from e
            except SQLAlchemyError as e:
                raise StoreError(
                    f"error inserting {kind} {values['name']} (dir: {values['directory']}) "
                    f"in db {self._db_file}: {e}",
                    str(self._db_file),
                ) from e
        logger.info("Registered %s environment %s", kind, values["name"])
        return model.model_validate(dict(row._mapping))

    def _delete(self, table: Table, kind: str, name: str) -> bool:
        stmt = delete(table).where(table.c.name == name)
        with self.connect() as conn:
            try:
                result = conn.execute(stmt)
                conn.commit()
            except SQLAlchemyError as e:
                raise StoreError(
                    f"error deleting {kind} {name} from db {self._db_file}: {e}",
                    str(self._db_file),
                ) from e
        removed = result.rowcount > 0
        if removed:
            logger.info("Removed %s environment %s from the registry", kind, name)
        else:
            logger.debug("No %s environment %s to remove", kind, name)
        return removed

    def _get(self, table: Table, model: type[EnvT], name: str) -> EnvT:
        kind = model.platform
        stmt = select(table).where(table.c.name == name)
        with self.connect() as conn:
            try:
                row = conn.execute(stmt).first()
            except SQLAlchemyError as e:
                raise StoreError(
                    f"error getting {kind} {name} from db {self._db_file}: {e}",
                    str(self._db_file),
                ) from e
        if row is None:
            raise EnvironmentNotFoundError(kind, name)
        return model.model_validate(dict(row._mapping))

    def _list(self, table: Table, model: type[EnvT]) -> list[EnvT]:
        kind = model.platform
        stmt = select(table).order_by(table.c.name)
        with self.connect() as conn:
            try:
                rows = conn.execute(stmt).all()
            except SQLAlchemyError as e:
                raise StoreError(
                    f"error getting all {kind} from db {self._db_file}: {e}",
                    str(self._db_file),
                ) from e
        return [model.model_validate(dict(row._mapping)) for row in rows]
