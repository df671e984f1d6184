"""Tests for the lazily created engine and session helpers."""

from __future__ import annotations

import pytest
import pytest_asyncio
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from backend.common import database
from backend.common.config import get_settings


@pytest_asyncio.fixture
async def fresh_engine():
    """Start each test without a cached engine and dispose whatever it created."""
    database.reset_engine()
    yield
    if database._engine is not None:
        await database._engine.dispose()
    database.reset_engine()
    get_settings.cache_clear()


class TestEngine:
    @pytest.mark.asyncio
    async def test_engine_is_cached(self, fresh_engine):
        assert database._get_engine() is database._get_engine()

    @pytest.mark.asyncio
    async def test_reset_drops_cached_engine(self, fresh_engine):
        first = database._get_engine()
        await first.dispose()
        database.reset_engine()
        assert database._get_engine() is not first

    @pytest.mark.asyncio
    async def test_postgres_url_gets_sized_pool(self, fresh_engine, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://jackpot:pw@localhost/jackpot")
        get_settings.cache_clear()
        engine = database._get_engine()
        assert engine.sync_engine.pool.size() == 10


class TestSessions:
    @pytest.mark.asyncio
    async def test_init_models_creates_tables(self, fresh_engine):
        await database.init_models()
        async with database._get_engine().connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert {"jackpots", "fixtures", "predictions"} <= set(tables)

    @pytest.mark.asyncio
    async def test_get_db_yields_session(self, fresh_engine):
        sessions = database.get_db()
        session = await anext(sessions)
        assert isinstance(session, AsyncSession)
        await sessions.aclose()
