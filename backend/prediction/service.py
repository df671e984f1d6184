"""Jackpot prediction orchestration.

Ties the generator to storage:
    1. Load the jackpot's fixtures (stored order)
    2. Generate one record per fixture (validates the fixture count)
    3. Replace any previous predictions for the jackpot
    4. Persist record i against fixture i

The generator runs before anything is deleted, so a rejected request
leaves existing predictions untouched.

Usage:
    from backend.prediction.service import generate_jackpot_predictions

    stored = await generate_jackpot_predictions(
        jackpot_id=1,
        options=PredictionOptions(strategy="aggressive", risk_level=8),
        db=db,
        generator=PredictionGenerator(),
    )
"""

from __future__ import annotations

from collections import Counter

from sqlalchemy.ext.asyncio import AsyncSession

from backend.common.logging import get_logger
from backend.common.models import Prediction
from backend.common.schemas import FixtureWithPrediction, PredictionOptions, PredictionSummary
from backend.jackpot import store
from backend.prediction.generator import PredictionGenerator
from backend.prediction.strategies import resolve_strategy

logger = get_logger("PREDICT")


async def generate_jackpot_predictions(
    jackpot_id: int,
    options: PredictionOptions,
    db: AsyncSession,
    generator: PredictionGenerator,
) -> list[Prediction]:
    """Generate and store predictions for every fixture in a jackpot.

    Args:
        jackpot_id: The jackpot whose fixtures are predicted.
        options: Strategy, risk level and wildcard flag.
        db: Async database session (flushed, not committed).
        generator: The prediction generator to use.

    Returns:
        The stored predictions, in fixture order.

    Raises:
        JackpotNotFoundError: If the jackpot does not exist.
        InvalidFixtureCountError: If the jackpot does not hold 17 fixtures.
    """
    await store.get_jackpot(db, jackpot_id)
    fixtures = await store.get_fixtures(db, jackpot_id)

    records = generator.generate(len(fixtures), options)
    strategy = resolve_strategy(options.strategy)

    replaced = await store.delete_predictions(db, jackpot_id)
    stored = [
        await store.create_prediction(db, fixture.id, record, strategy)
        for fixture, record in zip(fixtures, records, strict=True)
    ]

    logger.info(
        "Jackpot predictions stored",
        extra={
            "data": {
                "jackpot_id": jackpot_id,
                "strategy": strategy,
                "stored": len(stored),
                "replaced": replaced,
            }
        },
    )
    return stored


def summarize_predictions(fixtures: list[FixtureWithPrediction]) -> PredictionSummary:
    """Count predicted outcomes across a jackpot's fixtures."""
    counts = Counter(f.prediction.outcome for f in fixtures if f.prediction is not None)
    return PredictionSummary(
        home_wins=counts.get("1", 0),
        draws=counts.get("X", 0),
        away_wins=counts.get("2", 0),
        total_matches=len(fixtures),
    )
