"""Fixture endpoints: manual entry, CSV import, and listing with predictions."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import fixture_to_record, fixture_with_prediction
from backend.api.response_schemas import FixtureCsvImportRequest
from backend.common.database import get_db
from backend.common.exceptions import ParseError
from backend.common.logging import get_logger
from backend.common.metrics import FIXTURES_IMPORTED_TOTAL
from backend.common.schemas import FixtureInput, FixtureRecord, FixtureWithPrediction
from backend.jackpot import store
from backend.jackpot.fixture_parser import parse_fixture_csv

logger = get_logger("API")

router = APIRouter()


@router.post("", response_model=list[FixtureRecord])
async def create_fixtures(
    fixtures: list[FixtureInput],
    db: AsyncSession = Depends(get_db),
) -> list[FixtureRecord]:
    """Store fixtures entered by hand on the dashboard."""
    created = await store.create_fixtures(db, fixtures)
    await db.commit()
    FIXTURES_IMPORTED_TOTAL.labels(source="manual").inc(len(created))
    return [fixture_to_record(f) for f in created]


@router.post("/import-csv", response_model=list[FixtureRecord])
async def import_fixtures_csv(
    body: FixtureCsvImportRequest,
    db: AsyncSession = Depends(get_db),
) -> list[FixtureRecord]:
    """Import fixtures for an existing jackpot from CSV text.

    Raises:
        JackpotNotFoundError: If the jackpot does not exist.
        ParseError: If the CSV is malformed or holds no fixtures.
    """
    jackpot = await store.get_jackpot(db, body.jackpot_id)
    parsed = parse_fixture_csv(body.csv_data, default_date=jackpot.draw_date)
    if not parsed:
        raise ParseError("No valid fixtures found in the CSV", context={"jackpot_id": jackpot.id})

    created = await store.create_fixtures(
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
    FIXTURES_IMPORTED_TOTAL.labels(source="csv").inc(len(created))

    logger.info(
        "Fixtures imported from CSV",
        extra={"data": {"jackpot_id": jackpot.id, "count": len(created)}},
    )
    return [fixture_to_record(f) for f in created]


@router.get("/{jackpot_id}", response_model=list[FixtureWithPrediction])
async def get_fixtures(
    jackpot_id: int,
    db: AsyncSession = Depends(get_db),
) -> list[FixtureWithPrediction]:
    """List a jackpot's fixtures in entry order, each with its prediction if any."""
    rows = await store.get_fixtures_with_predictions(db, jackpot_id)
    return [fixture_with_prediction(f, p) for f, p in rows]
