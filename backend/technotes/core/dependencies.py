"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from technotes.db.session import get_session
from technotes.db.store import DocumentStore


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


async def get_store(session: AsyncSession = Depends(get_db)) -> DocumentStore:
    return DocumentStore(session)
