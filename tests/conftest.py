"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator, Callable, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing the app
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-characters-long")
os.environ.setdefault("DEBUG", "true")

from dynasty_tracker.database import get_db
from dynasty_tracker.main import app
from dynasty_tracker.models.user import User
from dynasty_tracker.utils.security import get_current_active_user


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Create a mock database session."""
    mock_session = AsyncMock()
    mock_session.add = MagicMock()
    mock_session.delete = AsyncMock()
    mock_session.flush = AsyncMock()
    mock_session.refresh = AsyncMock()
    mock_session.commit = AsyncMock()
    mock_session.rollback = AsyncMock()
    return mock_session


@pytest.fixture
def override_dependencies(mock_db_session: AsyncMock) -> Iterator[Callable[..., None]]:
    """Install the mock session (and optionally a logged-in user) on the app.

    Overrides are cleared when the test finishes.
    """

    def install(user: User | None = None) -> None:
        async def override_get_db():
            yield mock_db_session

        app.dependency_overrides[get_db] = override_get_db
        if user is not None:
            app.dependency_overrides[get_current_active_user] = lambda: user

    yield install
    app.dependency_overrides.clear()
