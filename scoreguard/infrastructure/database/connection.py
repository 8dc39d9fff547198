"""Database engines and session management for the score store"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from scoreguard.core.config import settings

database_url = make_url(settings.database_url)
is_sqlite = database_url.get_backend_name() == "sqlite"

# aiosqlite for the request path, plain sqlite3 for startup DDL
async_database_url = database_url.set(drivername="sqlite+aiosqlite") if is_sqlite else database_url


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.debug}
    if is_sqlite:
        # Concurrent best-score writes wait for the lock instead of failing at once
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.database_busy_timeout,
        }
        if database_url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
    return options


async_engine = create_async_engine(async_database_url, **_engine_options())

# Used only for table creation at startup
sync_engine = create_engine(database_url, **_engine_options())

async_session_factory = sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get an async database session per request"""
    async with async_session_factory() as session:
        yield session


def create_tables() -> None:
    """Create the users and scores tables if missing"""
    from scoreguard.infrastructure.database import models  # noqa: F401

    Base.metadata.create_all(bind=sync_engine)
