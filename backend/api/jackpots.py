"""Jackpot endpoints.

Exposes the current active jackpot and two ways of creating a new one:
from a structured list of team pairs or from a pasted fixture list.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import fixture_to_record, jackpot_to_record
from backend.api.response_schemas import (
    CustomJackpotRequest,
    JackpotCreateRequest,
    JackpotWithFixtures,
)
from backend.common.config import get_settings
from backend.common.database import get_db
from backend.common.exceptions import ParseError, ValidationError
from backend.common.logging import get_logger
from backend.common.metrics import FIXTURES_IMPORTED_TOTAL
from backend.common.schemas import FixtureInput, JackpotRecord
from backend.jackpot import store
from backend.jackpot.fixture_parser import detect_league, parse_fixture_list

logger = get_logger("API")

router = APIRouter()


@router.get("/current", response_model=JackpotRecord)
async def get_current_jackpot(db: AsyncSession = Depends(get_db)) -> JackpotRecord:
    """Fetch the active jackpot shown on the dashboard.

    Raises:
        HTTPException: 404 if no jackpot is active.
    """
    jackpot = await store.get_current_jackpot(db)
    if jackpot is None:
        raise HTTPException(status_code=404, detail="No active jackpot")
    return jackpot_to_record(jackpot)


@router.post("/create", response_model=JackpotWithFixtures)
async def create_jackpot(
    body: JackpotCreateRequest,
    db: AsyncSession = Depends(get_db),
) -> JackpotWithFixtures:
    """Create a jackpot and its fixtures from team pairs.

    Kickoff times are unknown at this point, so every fixture is dated now;
    the draw is scheduled ``new_jackpot_draw_days_ahead`` days out.
    """
    settings = get_settings()
    now = datetime.now(UTC)

    jackpot = await store.create_jackpot(
        db,
        amount=body.amount or settings.new_jackpot_amount,
        draw_date=now + timedelta(days=settings.new_jackpot_draw_days_ahead),
    )
    fixtures = await store.create_fixtures(
        db,
        [
            FixtureInput(
                jackpot_id=jackpot.id,
                home_team=pair.home_team,
                away_team=pair.away_team,
                match_date=now,
                league=detect_league(pair.home_team, pair.away_team),
            )
            for pair in body.fixtures
        ],
    )
    await db.commit()
    FIXTURES_IMPORTED_TOTAL.labels(source="manual").inc(len(fixtures))

    return JackpotWithFixtures(
        jackpot=jackpot_to_record(jackpot),
        fixtures=[fixture_to_record(f) for f in fixtures],
    )


@router.post("/custom", response_model=JackpotWithFixtures)
async def create_custom_jackpot(
    body: CustomJackpotRequest,
    db: AsyncSession = Depends(get_db),
) -> JackpotWithFixtures:
    """Create a jackpot from a pasted, one-fixture-per-line list.

    Raises:
        ValidationError: If the amount or fixture text is blank.
        ParseError: If no line of the text is a fixture.
    """
    if not body.amount.strip() or not body.fixture_text.strip():
        raise ValidationError("Amount and fixture text are required")

    parsed = parse_fixture_list(body.fixture_text)
    if not parsed:
        raise ParseError("No valid fixtures found in the text")

    settings = get_settings()
    jackpot = await store.create_jackpot(
        db,
        amount=body.amount.strip(),
        draw_date=datetime.now(UTC) + timedelta(days=settings.new_jackpot_draw_days_ahead),
    )
    fixtures = await store.create_fixtures(
        db,
        [
            FixtureInput(
                jackpot_id=jackpot.id,
                home_team=p.home_team,
                away_team=p.away_team,
                match_date=p.match_date,
                league=p.league,
            )
            for p in parsed
        ],
    )
    await db.commit()
    FIXTURES_IMPORTED_TOTAL.labels(source="text").inc(len(fixtures))

    logger.info(
        "Custom jackpot created",
        extra={"data": {"jackpot_id": jackpot.id, "fixtures": len(fixtures)}},
    )

    return JackpotWithFixtures(
        jackpot=jackpot_to_record(jackpot),
        fixtures=[fixture_to_record(f) for f in fixtures],
        message=f"Created jackpot with {len(fixtures)} fixtures",
    )
