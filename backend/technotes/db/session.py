"""Database session and engine management."""
from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from technotes.core.config import get_settings
from technotes.core.errors import StorageUnavailable


@lru_cache
def get_engine() -> AsyncEngine:
    """Build the process-wide engine from the configured connection string."""

    url = get_settings().database_url
    if not url:
        raise StorageUnavailable()
    try:
        return create_async_engine(url, future=True, echo=False, pool_pre_ping=True)
    except SQLAlchemyError as exc:
        raise StorageUnavailable() from exc


@lru_cache
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False, class_=AsyncSession)


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Provide a session scope around a series of operations."""

    async with get_sessionmaker()() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_models() -> None:
    """Create missing tables for every registered model."""

    # Registers the model tables on Base.metadata.
    from technotes import models  # noqa: F401
    from technotes.db.base import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
