"""Domain exceptions for the Dream API.

Exception hierarchy:
    DreamApiError (base)
    ├── NotFoundError        requested dream does not exist
    ├── ConflictError        write still conflicting after all retries
    └── OptimisticLockError  storage rejected a write (stale version or
                             identity collision)

``OptimisticLockError`` is the low‑level signal raised by the storage
accessor.  Only ``ConflictRetryPolicy`` catches it; callers outside the
service layer see ``ConflictError`` instead.
"""

from __future__ import annotations


class DreamApiError(Exception):
    """Base exception for all domain-level errors."""


class NotFoundError(DreamApiError):
    """Raised when no dream exists with the requested id."""

    def __init__(self, dream_id: str) -> None:
        self.dream_id = dream_id
        super().__init__(f"Dream not found: {dream_id}")


class ConflictError(DreamApiError):
    """Raised when a create or update keeps conflicting after every attempt.

    The caller may retry the whole request at the application level.
    """

    def __init__(self, message: str, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(message)


class OptimisticLockError(DreamApiError):
    """Raised by the storage accessor when a write is rejected.

    Either the version supplied by the writer no longer matches the
    persisted version, or an insert collided with an existing id.
    """

    def __init__(self, dream_id: str, expected_version: int | None = None) -> None:
        self.dream_id = dream_id
        self.expected_version = expected_version
        if expected_version is None:
            message = f"Dream {dream_id} already exists"
        else:
            message = f"Dream {dream_id} was modified concurrently (expected version {expected_version})"
        super().__init__(message)
