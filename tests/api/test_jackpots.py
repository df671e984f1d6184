"""Tests for /api/jackpot endpoints."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from backend.common.models import JackpotStatus
from backend.jackpot import store
from tests.factories import TEAM_PAIRS, seed_jackpot

pytestmark = pytest.mark.asyncio


# ─── GET /api/jackpot/current ───


async def test_current_404_when_none(client: AsyncClient):
    resp = await client.get("/api/jackpot/current")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No active jackpot"


async def test_current_returns_oldest_active(client: AsyncClient, db: AsyncSession):
    first = await seed_jackpot(db, fixture_count=0, amount="KSH 15M")
    await seed_jackpot(db, fixture_count=0, amount="KSH 20M")

    resp = await client.get("/api/jackpot/current")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == first.id
    assert body["amount"] == "KSH 15M"
    assert body["status"] == "active"


async def test_current_skips_completed(client: AsyncClient, db: AsyncSession):
    first = await seed_jackpot(db, fixture_count=0)
    second = await seed_jackpot(db, fixture_count=0)
    await store.update_jackpot(db, first.id, status=JackpotStatus.COMPLETED)
    await db.commit()

    resp = await client.get("/api/jackpot/current")
    assert resp.json()["id"] == second.id


# ─── POST /api/jackpot/create ───


async def test_create_with_team_pairs(client: AsyncClient):
    pairs = [{"home_team": h, "away_team": a} for h, a in TEAM_PAIRS[:17]]
    resp = await client.post("/api/jackpot/create", json={"amount": "KSH 50M", "fixtures": pairs})

    assert resp.status_code == 200
    body = resp.json()
    assert body["jackpot"]["amount"] == "KSH 50M"
    assert len(body["fixtures"]) == 17
    assert body["fixtures"][0]["home_team"] == "Mlada Boleslav"
    assert body["fixtures"][0]["league"] == "Czech First League"
    assert all(f["jackpot_id"] == body["jackpot"]["id"] for f in body["fixtures"])


async def test_create_defaults_amount(client: AsyncClient):
    resp = await client.post(
        "/api/jackpot/create",
        json={"fixtures": [{"home_team": "Valur", "away_team": "HamKam"}]},
    )
    assert resp.status_code == 200
    assert resp.json()["jackpot"]["amount"] == "KSH 100,000,000"


async def test_create_rejects_blank_team(client: AsyncClient):
    resp = await client.post(
        "/api/jackpot/create",
        json={"fixtures": [{"home_team": "", "away_team": "HamKam"}]},
    )
    assert resp.status_code == 422


# ─── POST /api/jackpot/custom ───


async def test_custom_parses_pasted_list(client: AsyncClient, db: AsyncSession):
    text = "1 Pumas UNAM - Pachuca\n2 NK Maribor vs NK Celje\nnot a fixture\n3 Arsenal v Chelsea"
    resp = await client.post(
        "/api/jackpot/custom", json={"amount": "KSH 30M", "fixture_text": text}
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Created jackpot with 3 fixtures"
    assert [f["league"] for f in body["fixtures"]] == [
        "Liga MX",
        "Slovenian PrvaLiga",
        "International League",
    ]

    stored = await store.get_fixtures(db, body["jackpot"]["id"])
    assert len(stored) == 3


@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "", "fixture_text": "A - B"},
        {"amount": "KSH 1M", "fixture_text": "   "},
        {},
    ],
)
async def test_custom_requires_amount_and_text(client: AsyncClient, payload: dict):
    resp = await client.post("/api/jackpot/custom", json=payload)
    assert resp.status_code == 400
    assert resp.json()["error"] == "ValidationError"


async def test_custom_with_no_fixture_lines(client: AsyncClient, db: AsyncSession):
    resp = await client.post(
        "/api/jackpot/custom",
        json={"amount": "KSH 1M", "fixture_text": "Matchday 12\nGood luck!"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "ParseError"
    assert await store.get_current_jackpot(db) is None
