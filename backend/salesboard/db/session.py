from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from salesboard.core.config import settings

# sslmode/channel_binding are stripped from the URL; asyncpg rejects them
engine = create_async_engine(settings.DATABASE_URL_ASYNC_CLEAN, pool_pre_ping=True)

# Routers commit explicitly and keep using loaded rows afterwards
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request, closed when the request ends."""
    async with AsyncSessionLocal() as session:
        yield session
