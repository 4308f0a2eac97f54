"""
Conflict‑retry policy for optimistic‑locking writes.

``ConflictRetryPolicy`` runs an async operation and, when the storage
accessor rejects a write with ``OptimisticLockError``, waits a fixed
delay and runs the whole operation again.  After ``max_attempts``
failed attempts the storage signal is translated into a domain
``ConflictError``.  Every other exception propagates immediately.

The delay is constant between attempts: no jitter, no exponential
growth.  Both the attempt count and the delay are part of the public
contract (3 attempts, 1000 ms).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

from .exceptions import ConflictError, OptimisticLockError


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_DELAY_MS = 1000


class ConflictRetryPolicy:
    """Fixed‑delay, fixed‑count retry on optimistic‑locking conflicts.

    Parameters
    ----------
    max_attempts : int
        Total number of attempts, including the first one.
    delay_ms : int
        Milliseconds to wait between two attempts.
    sleep : callable, optional
        Coroutine function used to wait, ``asyncio.sleep`` by default.
        It receives the delay in seconds.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        delay_ms: int = DEFAULT_DELAY_MS,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        self.max_attempts = max_attempts
        self.delay_ms = delay_ms
        self._sleep = sleep or asyncio.sleep

    async def run(self, operation: Callable[[], Awaitable[T]], description: str = "write") -> T:
        """Execute ``operation`` until it succeeds or attempts run out.

        ``operation`` is called with no arguments and must build a fresh
        awaitable on each call, so that every attempt re‑reads state.

        Raises
        ------
        ConflictError
            If every attempt failed with ``OptimisticLockError``.  The
            last storage error is chained as ``__cause__``.
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except OptimisticLockError as exc:
                if attempt >= self.max_attempts:
                    logger.error(
                        "%s failed after %d attempts: %s", description, attempt, exc
                    )
                    raise ConflictError(
                        f"{description} conflict! Please try again", attempts=attempt
                    ) from exc
                logger.warning(
                    "%s conflicted on attempt %d/%d, retrying in %d ms: %s",
                    description,
                    attempt,
                    self.max_attempts,
                    self.delay_ms,
                    exc,
                )
            await self._sleep(self.delay_ms / 1000)
            attempt += 1
