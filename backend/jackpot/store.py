"""Persistence for jackpots, fixtures and stored predictions.

Every function takes an AsyncSession and flushes but never commits;
the API layer owns the transaction.

Usage:
    from backend.jackpot import store

    jackpot = await store.get_current_jackpot(db)
    rows = await store.get_fixtures_with_predictions(db, jackpot.id)
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.common.config import Settings
from backend.common.exceptions import JackpotNotFoundError
from backend.common.logging import get_logger
from backend.common.models import Fixture, Jackpot, JackpotStatus, Prediction
from backend.common.schemas import FixtureInput, PredictionRecord

logger = get_logger("JACKPOT")


# ─── Jackpots ───


async def create_jackpot(
    db: AsyncSession,
    amount: str,
    draw_date: datetime,
    status: JackpotStatus = JackpotStatus.ACTIVE,
) -> Jackpot:
    jackpot = Jackpot(amount=amount, draw_date=draw_date, status=status)
    db.add(jackpot)
    await db.flush()

    logger.info(
        "Jackpot created",
        extra={"data": {"jackpot_id": jackpot.id, "amount": amount, "draw_date": str(draw_date)}},
    )
    return jackpot


async def get_jackpot(db: AsyncSession, jackpot_id: int) -> Jackpot:
    """Fetch a jackpot by ID.

    Raises:
        JackpotNotFoundError: If no jackpot has this ID.
    """
    jackpot = await db.get(Jackpot, jackpot_id)
    if jackpot is None:
        raise JackpotNotFoundError("Jackpot not found", context={"jackpot_id": jackpot_id})
    return jackpot


async def get_current_jackpot(db: AsyncSession) -> Jackpot | None:
    """The oldest active jackpot, or None when every jackpot is completed."""
    result = await db.execute(
        select(Jackpot)
        .where(Jackpot.status == JackpotStatus.ACTIVE)
        .order_by(Jackpot.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def update_jackpot(db: AsyncSession, jackpot_id: int, **updates) -> Jackpot:
    jackpot = await get_jackpot(db, jackpot_id)
    for field_name, value in updates.items():
        setattr(jackpot, field_name, value)
    await db.flush()
    return jackpot


async def ensure_default_jackpot(db: AsyncSession, settings: Settings) -> Jackpot:
    """Seed an active jackpot on an empty database so the dashboard has one to show."""
    current = await get_current_jackpot(db)
    if current is not None:
        return current
    return await create_jackpot(
        db,
        amount=settings.default_jackpot_amount,
        draw_date=datetime.now(UTC) + timedelta(days=settings.default_draw_days_ahead),
    )


# ─── Fixtures ───


async def create_fixtures(db: AsyncSession, fixtures: list[FixtureInput]) -> list[Fixture]:
    """Store fixtures in the given order.

    Raises:
        JackpotNotFoundError: If any fixture references an unknown jackpot.
    """
    for jackpot_id in {f.jackpot_id for f in fixtures}:
        await get_jackpot(db, jackpot_id)

    created = [
        Fixture(
            jackpot_id=f.jackpot_id,
            home_team=f.home_team.strip(),
            away_team=f.away_team.strip(),
            match_date=f.match_date,
            league=f.league,
        )
        for f in fixtures
    ]
    db.add_all(created)
    await db.flush()
    return created


async def get_fixtures(db: AsyncSession, jackpot_id: int) -> list[Fixture]:
    result = await db.execute(
        select(Fixture).where(Fixture.jackpot_id == jackpot_id).order_by(Fixture.id)
    )
    return list(result.scalars().all())


async def get_fixtures_with_predictions(
    db: AsyncSession,
    jackpot_id: int,
) -> list[tuple[Fixture, Prediction | None]]:
    """Fixtures in insertion order, each paired with its latest stored prediction."""
    result = await db.execute(
        select(Fixture, Prediction)
        .outerjoin(Prediction, Prediction.fixture_id == Fixture.id)
        .where(Fixture.jackpot_id == jackpot_id)
        .order_by(Fixture.id, Prediction.id)
    )
    paired: dict[int, tuple[Fixture, Prediction | None]] = {}
    for fixture, prediction in result.all():
        # Later rows win so a stray duplicate resolves to the newest prediction
        if fixture.id not in paired or prediction is not None:
            paired[fixture.id] = (fixture, prediction)
    return list(paired.values())


# ─── Predictions ───


async def create_prediction(
    db: AsyncSession,
    fixture_id: int,
    record: PredictionRecord,
    strategy: str,
) -> Prediction:
    prediction = Prediction(
        fixture_id=fixture_id,
        outcome=record.outcome,
        confidence=record.confidence,
        reasoning=record.reasoning,
        strategy=strategy,
    )
    db.add(prediction)
    await db.flush()
    return prediction


async def delete_predictions(db: AsyncSession, jackpot_id: int) -> int:
    """Delete every stored prediction for a jackpot's fixtures. Returns the row count."""
    fixture_ids = select(Fixture.id).where(Fixture.jackpot_id == jackpot_id)
    result = await db.execute(
        delete(Prediction)
        .where(Prediction.fixture_id.in_(fixture_ids))
        .execution_options(synchronize_session="fetch")
    )
    await db.flush()

    deleted = result.rowcount or 0
    logger.info(
        "Predictions cleared",
        extra={"data": {"jackpot_id": jackpot_id, "deleted": deleted}},
    )
    return deleted
