"""Root test configuration — shared fixtures for all test modules.

IMPORTANT: Environment variables are set BEFORE any backend imports
so that config.py can load Settings without a .env file.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")  # In-memory SQLite
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SEED_DEFAULT_JACKPOT", "false")

# Now safe to import backend modules
import random
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.common.config import Settings, get_settings
from backend.common.models import Base
from backend.prediction.generator import PredictionGenerator

# ─── Clear cached settings so test env vars are used ───
get_settings.cache_clear()


# ─── Test Database ───


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest_asyncio.fixture
async def db(engine):
    """Provide a database session bound to the per-test engine."""
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


# ─── Test Settings ───


@pytest.fixture
def test_settings() -> Settings:
    return get_settings()


# ─── Generator ───


@pytest.fixture
def seeded_generator() -> PredictionGenerator:
    """Generator with a fixed seed; tests still assert invariants, not order."""
    return PredictionGenerator(rng=random.Random(20261017))


@pytest.fixture
def kickoff() -> datetime:
    return datetime(2026, 10, 24, 15, 0, tzinfo=UTC)
