"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access.

With TASKBOX_DATABASE_URL=memory:// no engine is built at all; the app
keeps tasks in an InMemoryTaskStore instead.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskbox.config import settings

MEMORY_URL = "memory://"


def uses_memory_store(database_url: str) -> bool:
    return database_url.startswith(MEMORY_URL)


engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker[AsyncSession]] = None

if not uses_memory_store(settings.database_url):
    # Connection pool: 5 kept open, up to 20 under load.
    engine = create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_size=5,
        max_overflow=15,
        pool_pre_ping=True,
    )
    # Session factory — each request gets its own session.
    async_session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
