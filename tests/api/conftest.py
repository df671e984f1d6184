"""API test fixtures — httpx.AsyncClient with dependency overrides.

The client exercises the full FastAPI app with the database dependency
pointed at the per-test in-memory session from the root conftest and the
generator dependency replaced by a seeded one. Endpoint handlers commit,
which is safe here because every test gets a fresh engine.
"""

from __future__ import annotations

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import get_prediction_generator
from backend.common.database import get_db
from backend.main import app
from backend.prediction.generator import PredictionGenerator


# ─── Async Test Client ───


@pytest_asyncio.fixture
async def client(db: AsyncSession, seeded_generator: PredictionGenerator) -> AsyncClient:
    """Provide an httpx.AsyncClient wired to the test FastAPI app."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_prediction_generator] = lambda: seeded_generator

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
