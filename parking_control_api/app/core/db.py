"""
SQLite database integration and simple migration system.

``Database`` wraps a single SQLite file.  It hands out short‑lived
connections (``connection``), explicit transactions (``transaction``)
and applies migrations on application start (``init``).  To switch to
another DBMS you would replace the connection logic and adapt the SQL
in the repositories accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Tuple

from .exceptions import StorageError

logger = logging.getLogger(__name__)


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS parking_spots (
            id TEXT PRIMARY KEY,
            parking_spot_number TEXT NOT NULL,
            license_plate_car TEXT NOT NULL,
            model_car TEXT NOT NULL,
            brand_car TEXT NOT NULL,
            color_car TEXT NOT NULL,
            responsible_name TEXT NOT NULL,
            apartment TEXT NOT NULL,
            block TEXT NOT NULL,
            registration_date TEXT NOT NULL
        );
        """,
    ),
    # Migration 2: uniqueness rules enforced by the storage engine
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS ux_parking_spots_license_plate_car
            ON parking_spots(license_plate_car);
        CREATE UNIQUE INDEX IF NOT EXISTS ux_parking_spots_parking_spot_number
            ON parking_spots(parking_spot_number);
        CREATE UNIQUE INDEX IF NOT EXISTS ux_parking_spots_apartment_block
            ON parking_spots(apartment, block);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are used as is.  Otherwise the path
    is resolved relative to the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # parking_control_api/
    return str((base_dir / database_url).resolve())


class Database:
    """Connection factory and transaction boundary for one SQLite file."""

    def __init__(self, path: str) -> None:
        self.path = path

    def connect(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        The connection runs in autocommit mode; ``transaction`` issues
        ``BEGIN`` explicitly.  Rows are returned as ``sqlite3.Row`` so
        columns can be accessed by name.
        """
        try:
            conn = sqlite3.connect(self.path, isolation_level=None)
        except sqlite3.Error as exc:
            raise StorageError(f"Cannot open database {self.path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection for read-only work and close it on exit."""
        conn = self.connect()
        try:
            yield conn
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run the enclosed block as one atomic unit.

        Commits when the block exits normally.  Any exception rolls
        back every statement issued inside the block and is re-raised;
        ``sqlite3`` errors are wrapped in ``StorageError``.
        """
        conn = self.connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
            yield conn
            conn.commit()
        except Exception as exc:
            if conn.in_transaction:
                conn.rollback()
            if isinstance(exc, sqlite3.Error):
                raise StorageError(str(exc)) from exc
            raise
        finally:
            conn.close()

    def init(self) -> None:
        """Create the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version and applies any newer entries of
        ``MIGRATIONS``.  Append new migrations with an incremented
        version number.
        """
        conn = self.connect()
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    conn.executescript(sql)
                    conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                    logger.info("Applied migration %s", version)
                    current_version = version
        except sqlite3.Error as exc:
            raise StorageError(f"Migration failed: {exc}") from exc
        finally:
            conn.close()
