"""Alembic environment for the registry database.

Migrations only run through ``open_database``, which hands its live
connection over in ``config.attributes["connection"]``.
"""

from alembic import context

from epos_opensource.core.persistence.schema import metadata

config = context.config

connection = config.attributes.get("connection")
if connection is None:
    raise RuntimeError(
        "registry migrations run through epos_opensource.core.persistence.database.open_database"
    )

context.configure(
    connection=connection,
    target_metadata=metadata,
    render_as_batch=True,
)

with context.begin_transaction():
    context.run_migrations()
