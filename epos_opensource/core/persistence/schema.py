"""
Registry schema — SQLAlchemy Core tables mirrored by the migrations.

The tables here are what the query layer binds to; the Alembic
revisions under ``migrations/versions`` are what actually create them.
Keep both in step.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, String, Table

metadata = MetaData()

docker_table = Table(
    "docker",
    metadata,
    Column("name", String, primary_key=True),
    Column("directory", String, nullable=False),
    Column("api_url", String, nullable=False),
    Column("gui_url", String, nullable=False),
    Column("backoffice_url", String, nullable=False),
    Column("api_port", Integer, nullable=False),
    Column("gui_port", Integer, nullable=False),
    Column("backoffice_port", Integer, nullable=False),
)

kubernetes_table = Table(
    "kubernetes",
    metadata,
    Column("name", String, primary_key=True),
    Column("directory", String, nullable=False),
    Column("context", String, nullable=False),
    Column("api_url", String, nullable=False),
    Column("gui_url", String, nullable=False),
    Column("backoffice_url", String, nullable=False),
    Column("protocol", String, nullable=False),
)
