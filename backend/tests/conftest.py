"""Shared fixtures: a throwaway SQLite database per test."""
from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from technotes.core import config as core_config
from technotes.db import session as db_session
from technotes.db.store import DocumentStore


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_sessionmaker.cache_clear()
    db_session.get_engine.cache_clear()


@pytest_asyncio.fixture()
async def temp_db(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file and create the schema."""
    db_file = tmp_path / "technotes.db"
    monkeypatch.setenv("TECHNOTES_DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
    _clear_caches()

    await db_session.init_models()

    yield db_file

    await db_session.dispose_engine()
    _clear_caches()


@pytest_asyncio.fixture()
async def store(temp_db):
    async with db_session.get_session() as session:
        yield DocumentStore(session)


@pytest_asyncio.fixture()
async def client(temp_db):
    from technotes.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture()
def no_database(monkeypatch):
    """Run with no connection string configured."""
    monkeypatch.delenv("TECHNOTES_DATABASE_URL", raising=False)
    _clear_caches()
    yield
    _clear_caches()
