"""
SQLite database integration and schema bootstrap.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
``init_db``, which brings the schema up to date on application start.
It uses SQLite as a lightweight embedded database; to switch to
another DBMS you would replace connection logic and adapt SQL syntax
accordingly.

Schema versions already applied are recorded in the ``migrations``
table and newer entries of ``SCHEMA`` are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


logger = logging.getLogger(__name__)


SCHEMA: list[tuple[int, str]] = [
    (
        1,
        """
        -- Dreams table.  ``version`` is the optimistic‑locking token: it
        -- starts at 0 and is incremented by every successful write.
        CREATE TABLE IF NOT EXISTS dreams (
            id TEXT PRIMARY KEY,
            title TEXT,
            description TEXT,
            explanation TEXT,
            category TEXT,
            version INTEGER NOT NULL DEFAULT 0
        );
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the URL is an absolute path, use it directly.  Otherwise resolve
    it relative to the ``dream_api`` package directory.
    ``settings.database_url`` is used when no URL is given.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # dream_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    """
    conn = sqlite3.connect(get_database_path(db_path))
    # Return rows as dict‑like objects keyed by column name
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: Optional[str] = None) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: Optional[str] = None) -> None:
    """Initialise the database and apply pending schema versions.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and executes any newer entries from
    ``SCHEMA``.  If you change the schema, append an entry with an
    incremented version number.
    """
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in SCHEMA:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied schema version %s", version)
                current_version = version
