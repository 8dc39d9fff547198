"""Shared fixtures: controllable clock, in-memory database and test client"""

from typing import AsyncGenerator, List

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scoreguard.core.security import get_password_hash
from scoreguard.infrastructure.database import models  # noqa: F401
from scoreguard.infrastructure.database.connection import Base, get_async_db
from scoreguard.infrastructure.database.models import User
from scoreguard.infrastructure.sessions.memory_session_store import InMemorySessionStore
from scoreguard.main import create_application
from tests.fakes import FakeClock

SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session_store(clock: FakeClock) -> InMemorySessionStore:
    return InMemorySessionStore(clock)


@pytest_asyncio.fixture
async def db_sessionmaker() -> AsyncGenerator[sessionmaker, None]:
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_sessionmaker: sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    async with db_sessionmaker() as session:
        yield session


@pytest.fixture
def test_app(clock: FakeClock, db_sessionmaker: sessionmaker) -> FastAPI:
    """Application wired to the fake clock and the test database"""
    application = create_application(clock=clock)

    async def override_get_async_db() -> AsyncGenerator[AsyncSession, None]:
        async with db_sessionmaker() as session:
            yield session

    application.dependency_overrides[get_async_db] = override_get_async_db
    return application


@pytest_asyncio.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client"""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def players(db_session: AsyncSession) -> List[User]:
    """Three registered players"""
    users = [
        User(nickname=nickname, password_hash=get_password_hash("pass1234"))
        for nickname in ("ace_pilot", "rookie", "wingman")
    ]
    db_session.add_all(users)
    await db_session.commit()
    for user in users:
        await db_session.refresh(user)
    return users
