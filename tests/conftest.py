"""Shared pytest fixtures for the test suite."""

import pytest
from fastapi.testclient import TestClient

from dream_api.app.core.config import Settings
from dream_api.app.core.db import init_db
from dream_api.app.core.retry import ConflictRetryPolicy
from dream_api.app.main import create_app
from dream_api.app.repositories.dream_repository import DreamRepository
from dream_api.app.services.dream_service import DreamService


class RecordingSleep:
    """Stand‑in for ``asyncio.sleep`` that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def db_path(tmp_path) -> str:
    """A freshly initialised SQLite database file."""
    path = str(tmp_path / "dreams.db")
    init_db(path)
    return path


@pytest.fixture
def repository(db_path: str) -> DreamRepository:
    return DreamRepository(db_path)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def retry_policy(sleep: RecordingSleep) -> ConflictRetryPolicy:
    """The production policy (3 attempts, 1000 ms) with a recording sleep."""
    return ConflictRetryPolicy(sleep=sleep)


@pytest.fixture
def service(repository: DreamRepository, retry_policy: ConflictRetryPolicy) -> DreamService:
    return DreamService(repository, retry_policy)


@pytest.fixture
def app(tmp_path, sleep: RecordingSleep):
    """A fully wired application backed by a temporary database."""
    application = create_app(Settings(database_url=str(tmp_path / "api.db")))
    application.state.dream_service.retry_policy = ConflictRetryPolicy(sleep=sleep)
    return application


@pytest.fixture
def client(app):
    # The context manager runs the lifespan handler, which creates the schema.
    with TestClient(app) as test_client:
        yield test_client
