"""
Business logic for dreams.

``DreamService`` orchestrates the CRUD operations on top of
``DreamRepository``.  Creates and updates run inside a
``ConflictRetryPolicy``: when the repository reports an
optimistic‑locking conflict the whole operation is repeated (an update
re‑reads the current row first), and after the last attempt the caller
receives ``ConflictError``.  Reads and deletes are single attempts.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional

from ..core.exceptions import NotFoundError
from ..core.retry import ConflictRetryPolicy
from ..repositories.dream_repository import DreamRepository
from ..schemas.dream import DreamCreate, DreamRead, DreamUpdate


logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class DreamService:
    """Service for managing dreams."""

    def __init__(
        self,
        repository: DreamRepository,
        retry_policy: Optional[ConflictRetryPolicy] = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.repository = repository
        self.retry_policy = retry_policy or ConflictRetryPolicy()
        self._id_factory = id_factory

    async def list_all(self) -> List[DreamRead]:
        """Return every dream in storage order (empty list if none)."""
        return [DreamRead(**row) for row in self.repository.find_all()]

    async def get_by_id(self, dream_id: str) -> Optional[DreamRead]:
        """Return the dream with ``dream_id`` or ``None`` if it does not exist."""
        row = self.repository.find_by_id(dream_id)
        if row is None:
            return None
        return DreamRead(**row)

    async def create(self, data: DreamCreate) -> DreamRead:
        """Persist a new dream with a freshly generated id and version 0.

        Every attempt generates a new id, so an identity collision with a
        concurrently inserted dream is resolved by the retry.
        """

        async def attempt() -> DreamRead:
            record = data.model_dump()
            record["id"] = self._id_factory()
            stored = self.repository.insert(record)
            return DreamRead(**stored)

        dream = await self.retry_policy.run(attempt, description="Create")
        logger.info("Created dream %s", dream.id)
        return dream

    async def update(self, dream_id: str, data: DreamUpdate) -> DreamRead:
        """Apply the fields sent in ``data`` to an existing dream.

        The read‑modify‑write sequence is retried as a unit.  Raises
        ``NotFoundError`` if the dream does not exist (at any attempt)
        and ``ConflictError`` once the retries are exhausted.
        """
        changes = data.changes()

        async def attempt() -> DreamRead:
            existing = self.repository.find_by_id(dream_id)
            if existing is None:
                raise NotFoundError(dream_id)
            existing.update(changes)
            existing["version"] = self.repository.save(existing)
            return DreamRead(**existing)

        dream = await self.retry_policy.run(attempt, description="Update")
        logger.info("Updated dream %s to version %s", dream.id, dream.version)
        return dream

    async def delete(self, dream_id: str) -> None:
        """Delete a dream.  Raises ``NotFoundError`` if it does not exist."""
        if not self.repository.exists_by_id(dream_id):
            raise NotFoundError(dream_id)
        if not self.repository.delete_by_id(dream_id):
            # Removed by another request between the check and the delete
            raise NotFoundError(dream_id)
        logger.info("Deleted dream %s", dream_id)

    async def delete_all(self) -> int:
        """Delete every dream and return the number removed."""
        removed = self.repository.delete_all()
        logger.info("Deleted %d dreams", removed)
        return removed
