"""
SQLite storage accessor for dreams.

``DreamRepository`` performs keyed reads, writes and deletes against
the ``dreams`` table.  Writes carry the optimistic‑locking contract:

* ``insert`` always stores version 0 and rejects an id that already
  exists;
* ``save`` only succeeds when the caller's ``version`` still matches
  the persisted one, and bumps it by one in the same statement.

Both rejections surface as ``OptimisticLockError``.  All queries use
parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from ..core.db import get_connection
from ..core.exceptions import OptimisticLockError


logger = logging.getLogger(__name__)


class DreamRepository:
    """Keyed access to the ``dreams`` table."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def find_all(self) -> List[Dict[str, Any]]:
        """Return every dream in insertion order."""
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT id, title, description, explanation, category, version FROM dreams ORDER BY rowid"
            ).fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()

    def find_by_id(self, dream_id: str) -> Optional[Dict[str, Any]]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT id, title, description, explanation, category, version FROM dreams WHERE id = ?",
                (dream_id,),
            ).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def exists_by_id(self, dream_id: str) -> bool:
        conn = self._connect()
        try:
            row = conn.execute("SELECT 1 FROM dreams WHERE id = ?", (dream_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new dream with version 0 and return the stored row.

        Raises ``OptimisticLockError`` if a dream with the same id is
        already persisted.
        """
        conn = self._connect()
        try:
            try:
                conn.execute(
                    """
                    INSERT INTO dreams (id, title, description, explanation, category, version)
                    VALUES (?, ?, ?, ?, ?, 0)
                    """,
                    (
                        record["id"],
                        record.get("title"),
                        record.get("description"),
                        record.get("explanation"),
                        record.get("category"),
                    ),
                )
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise OptimisticLockError(record["id"]) from exc
            stored = dict(record)
            stored["version"] = 0
            return stored
        finally:
            conn.close()

    def save(self, record: Dict[str, Any]) -> int:
        """Persist the mutable fields of an existing dream.

        ``record["version"]`` must be the version the caller read.  The
        version check and the write happen in a single ``UPDATE``.
        Returns the new version.
        """
        expected_version = record["version"]
        conn = self._connect()
        try:
            cursor = conn.execute(
                """
                UPDATE dreams
                SET title = ?, description = ?, explanation = ?, category = ?, version = version + 1
                WHERE id = ? AND version = ?
                """,
                (
                    record.get("title"),
                    record.get("description"),
                    record.get("explanation"),
                    record.get("category"),
                    record["id"],
                    expected_version,
                ),
            )
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if not affected:
            logger.debug("Stale write for dream %s at version %s", record["id"], expected_version)
            raise OptimisticLockError(record["id"], expected_version)
        return expected_version + 1

    def delete_by_id(self, dream_id: str) -> bool:
        """Delete a dream by id.  Returns ``True`` if a row was removed."""
        conn = self._connect()
        try:
            cursor = conn.execute("DELETE FROM dreams WHERE id = ?", (dream_id,))
            affected = cursor.rowcount
            conn.commit()
            return affected > 0
        finally:
            conn.close()

    def delete_all(self) -> int:
        """Delete every dream and return how many rows were removed."""
        conn = self._connect()
        try:
            cursor = conn.execute("DELETE FROM dreams")
            affected = cursor.rowcount
            conn.commit()
            return affected
        finally:
            conn.close()
