"""FastAPI dependencies and ORM-to-schema converters.

Provides the per-request prediction generator and helper functions
that convert ORM models to Pydantic response schemas.
"""

from __future__ import annotations

from backend.common.models import Fixture, Jackpot, Prediction
from backend.common.schemas import (
    FixtureRecord,
    FixtureWithPrediction,
    JackpotRecord,
    StoredPrediction,
)
from backend.prediction.generator import PredictionGenerator


def get_prediction_generator() -> PredictionGenerator:
    """Build a fresh generator for each request.

    Tests override this dependency with a seeded generator.
    """
    return PredictionGenerator()


def _enum_value(value):
    return value.value if hasattr(value, "value") else value


def jackpot_to_record(jackpot: Jackpot) -> JackpotRecord:
    return JackpotRecord(
        id=jackpot.id,
        amount=jackpot.amount,
        draw_date=jackpot.draw_date,
        status=_enum_value(jackpot.status),
        created_at=jackpot.created_at,
    )


def fixture_to_record(fixture: Fixture) -> FixtureRecord:
    return FixtureRecord(
        id=fixture.id,
        jackpot_id=fixture.jackpot_id,
        home_team=fixture.home_team,
        away_team=fixture.away_team,
        match_date=fixture.match_date,
        league=fixture.league,
        status=_enum_value(fixture.status),
    )


def prediction_to_schema(prediction: Prediction) -> StoredPrediction:
    return StoredPrediction(
        id=prediction.id,
        fixture_id=prediction.fixture_id,
        outcome=prediction.outcome,
        confidence=prediction.confidence,
        reasoning=prediction.reasoning,
        strategy=prediction.strategy,
        created_at=prediction.created_at,
    )


def fixture_with_prediction(
    fixture: Fixture,
    prediction: Prediction | None,
) -> FixtureWithPrediction:
    """Merge a fixture and its optional stored prediction into one schema."""
    return FixtureWithPrediction(
        **fixture_to_record(fixture).model_dump(),
        prediction=prediction_to_schema(prediction) if prediction is not None else None,
    )
