"""
Registry database — open a connection and bring the schema up to date.

The registry is a single SQLite file (``<data-dir>/db.db``). Every open
creates the data directory and the file when missing, pings the
connection and applies pending Alembic migrations. Migrations ship
inside the package (``migrations/versions``) and are applied in
revision order; Alembic records what ran in ``alembic_version``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

from alembic import command as alembic_command
from alembic.config import Config as AlembicConfig
from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from epos_opensource.core.errors import StoreError

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
DATA_DIR_MODE = 0o750


def open_database(db_file: Path) -> Connection:
    """Open a migrated connection to the registry database.

    Args:
        db_file: Path to the SQLite file; its parent is the data directory.

    Returns:
        An open SQLAlchemy connection. The caller closes it.

    Raises:
        StoreError: If the directory, file or connection cannot be set up,
            or a migration fails. The connection is closed first; a failure
            while closing is reported on the error as ``close_error``.
    """
    data_dir = db_file.parent
    try:
        data_dir.mkdir(mode=DATA_DIR_MODE, parents=True, exist_ok=True)
    except OSError as e:
        raise StoreError(f"error creating db directory {data_dir}: {e}", str(db_file)) from e

    if not db_file.exists():
        try:
            db_file.touch()
        except OSError as e:
            raise StoreError(f"error creating db file {db_file}: {e}", str(db_file)) from e

    # built from parts so the path is never parsed as URL syntax
    url = URL.create("sqlite", database=str(db_file))
    engine = create_engine(url, poolclass=NullPool)
    try:
        conn = engine.connect()
    except SQLAlchemyError as e:
        raise StoreError(f"error opening sqlite db {db_file}: {e}", str(db_file)) from e

    try:
        conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        _close_after_failure(conn, db_file, f"failed to ping database {db_file}", e)

    try:
        run_migrations(conn)
    except Exception as e:
        _close_after_failure(conn, db_file, "failed to execute database migrations", e)

    return conn


def run_migrations(conn: Connection) -> None:
    """Apply every pending migration on *conn* and commit."""
    cfg = AlembicConfig()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.attributes["connection"] = conn
    alembic_command.upgrade(cfg, "head")
    conn.commit()
    logger.debug("Registry schema is at head")


def current_revision(conn: Connection) -> str | None:
    """Return the last applied migration revision, or None on a fresh database."""
    row = conn.execute(text("SELECT version_num FROM alembic_version")).first()
    return row[0] if row else None


def _close_after_failure(conn: Connection, db_file: Path, message: str, cause: Exception) -> NoReturn:
    """Close *conn* after *cause* and raise a StoreError describing both."""
    try:
        conn.close()
    except SQLAlchemyError as close_err:
        logger.error("Failed to close %s after error: %s", db_file, close_err)
        raise StoreError(
            f"{message}: {cause} (closing the database also failed: {close_err})",
            str(db_file),
            close_error=close_err,
        ) from cause
    raise StoreError(f"{message}: {cause}", str(db_file)) from cause
