"""Shared fixtures: in-memory SQLite database through aiosqlite, row builders."""

import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from activity_log.infrastructure.database.models import User, UserLog
from activity_log.infrastructure.database.session import init_models


@pytest.fixture
async def db_engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False,
        class_=AsyncSession,
    )


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


def build_log(**overrides) -> UserLog:
    values = {
        "id": uuid.uuid4(),
        "user_id": "user-1",
        "username": "alice@example.com",
        "role": "user",
        "action": "login",
        "ip_address": "10.0.0.1",
        "token_name": "N/A",
        "user_agent": "Unknown",
        "created_at": datetime.now(timezone.utc),
    }
    values.update(overrides)
    return UserLog(**values)


@pytest.fixture
def add_logs(session_factory):
    """Insert UserLog rows directly, bypassing the service."""

    async def _add(*logs: UserLog) -> list:
        async with session_factory() as session:
            session.add_all(logs)
            await session.commit()
        return [str(log.id) for log in logs]

    return _add


@pytest.fixture
def add_user(session_factory):
    async def _add(user_id: str, email: str, role: str = "user", full_name: str = None) -> None:
        async with session_factory() as session:
            session.add(User(id=user_id, email=email, role=role, full_name=full_name))
            await session.commit()

    return _add


@pytest.fixture
def make_log():
    return build_log
