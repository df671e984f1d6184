"""Prediction endpoints: strategies, plus generating, summarizing and clearing predictions."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import (
    fixture_with_prediction,
    get_prediction_generator,
    prediction_to_schema,
)
from backend.api.response_schemas import (
    DeletePredictionsResponse,
    GeneratePredictionsRequest,
    StrategyInfo,
)
from backend.common.database import get_db
from backend.common.schemas import PredictionOptions, PredictionSummary, StoredPrediction
from backend.jackpot import store
from backend.prediction.generator import PredictionGenerator
from backend.prediction.service import generate_jackpot_predictions, summarize_predictions
from backend.prediction.strategies import STRATEGY_DESCRIPTIONS, STRATEGY_RATIOS

router = APIRouter()


@router.get("/strategies", response_model=list[StrategyInfo])
async def list_strategies() -> list[StrategyInfo]:
    """Strategies offered on the dashboard, with their home/draw/away split."""
    return [
        StrategyInfo(
            name=name,
            description=STRATEGY_DESCRIPTIONS[name],
            home=ratio.home,
            draw=ratio.draw,
            away=ratio.away,
        )
        for name, ratio in STRATEGY_RATIOS.items()
    ]


@router.post("/generate", response_model=list[StoredPrediction])
async def generate_predictions(
    body: GeneratePredictionsRequest,
    db: AsyncSession = Depends(get_db),
    generator: PredictionGenerator = Depends(get_prediction_generator),
) -> list[StoredPrediction]:
    """Generate predictions for all fixtures of a jackpot, replacing old ones.

    Args:
        body: Jackpot ID plus strategy, risk level and wildcard flag.
        db: Async database session.
        generator: Per-request prediction generator.

    Returns:
        The stored predictions in fixture order.

    Raises:
        InvalidFixtureCountError: 400 if the jackpot does not hold 17 fixtures.
        JackpotNotFoundError: 404 if the jackpot does not exist.
    """
    options = PredictionOptions(
        strategy=body.strategy,
        risk_level=body.risk_level,
        include_wildcards=body.include_wildcards,
    )
    stored = await generate_jackpot_predictions(body.jackpot_id, options, db, generator)
    await db.commit()
    return [prediction_to_schema(p) for p in stored]


@router.get("/summary/{jackpot_id}", response_model=PredictionSummary)
async def get_prediction_summary(
    jackpot_id: int,
    db: AsyncSession = Depends(get_db),
) -> PredictionSummary:
    """Home/draw/away counts across a jackpot's stored predictions."""
    rows = await store.get_fixtures_with_predictions(db, jackpot_id)
    return summarize_predictions([fixture_with_prediction(f, p) for f, p in rows])


@router.delete("/jackpot/{jackpot_id}", response_model=DeletePredictionsResponse)
async def clear_predictions(
    jackpot_id: int,
    db: AsyncSession = Depends(get_db),
) -> DeletePredictionsResponse:
    """Remove every stored prediction for a jackpot, keeping its fixtures."""
    await store.get_jackpot(db, jackpot_id)
    deleted = await store.delete_predictions(db, jackpot_id)
    await db.commit()
    return DeletePredictionsResponse(jackpot_id=jackpot_id, deleted=deleted)
