"""Pydantic schemas — the interface contracts between all modules.

Every cross-module value (generator output, stored records, API payloads)
uses these types, never ad-hoc dicts.

RULES:
- Outcomes are always the jackpot labels "1" (home), "X" (draw), "2" (away).
- Confidence is an integer percentage, always within [50, 95].
- If you need a new shared type, add it HERE.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Outcome = Literal["1", "X", "2"]
StrategyName = Literal["balanced", "conservative", "aggressive"]
JackpotStatusType = Literal["active", "completed"]
FixtureStatusType = Literal["pending", "completed"]

CONFIDENCE_MIN = 50
CONFIDENCE_MAX = 95


# ─── Generator Schemas ───


class PredictionOptions(BaseModel):
    """Caller-supplied knobs for one generation run.

    ``strategy`` is a plain string on purpose: unknown names are accepted
    and resolve to "balanced" inside the generator.
    """

    strategy: str = "balanced"
    risk_level: int = 6
    include_wildcards: bool = False


class PredictionRecord(BaseModel):
    """One generated prediction. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    confidence: int = Field(ge=CONFIDENCE_MIN, le=CONFIDENCE_MAX)
    reasoning: str = Field(min_length=1)


# ─── Persistence Schemas ───


class JackpotRecord(BaseModel):
    id: int
    amount: str
    draw_date: datetime
    status: JackpotStatusType = "active"
    created_at: datetime | None = None


class FixtureInput(BaseModel):
    """A fixture to be stored under an existing jackpot."""

    jackpot_id: int
    home_team: str = Field(min_length=1)
    away_team: str = Field(min_length=1)
    match_date: datetime
    league: str | None = None


class FixtureRecord(BaseModel):
    id: int
    jackpot_id: int
    home_team: str
    away_team: str
    match_date: datetime
    league: str | None = None
    status: FixtureStatusType = "pending"


class StoredPrediction(BaseModel):
    """A PredictionRecord persisted against a fixture."""

    id: int
    fixture_id: int
    outcome: Outcome
    confidence: int
    reasoning: str | None = None
    strategy: str
    created_at: datetime | None = None


class FixtureWithPrediction(FixtureRecord):
    prediction: StoredPrediction | None = None


class PredictionSummary(BaseModel):
    """Outcome counts across one jackpot's stored predictions."""

    home_wins: int
    draws: int
    away_wins: int
    total_matches: int
