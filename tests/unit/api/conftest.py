"""Fixtures for API unit tests: SQLite-backed session override, AsyncClient."""

import pytest
from httpx import ASGITransport, AsyncClient

from activity_log.main import app


@pytest.fixture
def app_with_overrides(session_factory):
    """App with the DB session dependency pointed at the in-memory database."""
    from activity_log.infrastructure.database import session as db_session_module

    async def _get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[db_session_module.get_db] = _get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app_with_overrides):
    """Async HTTP client for testing; uses overridden app."""
    transport = ASGITransport(app=app_with_overrides)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
