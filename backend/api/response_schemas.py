"""API response and request schemas -- types used only by the REST layer."""

from __future__ import annotations

from pydantic import BaseModel, Field

from backend.common.schemas import FixtureRecord, JackpotRecord, StrategyName


class TeamPair(BaseModel):
    home_team: str = Field(min_length=1)
    away_team: str = Field(min_length=1)


class JackpotCreateRequest(BaseModel):
    """Request body for creating a jackpot from a list of team pairs."""

    amount: str | None = None
    fixtures: list[TeamPair]


class CustomJackpotRequest(BaseModel):
    """Request body for creating a jackpot from a pasted fixture list."""

    amount: str = ""
    fixture_text: str = ""


class JackpotWithFixtures(BaseModel):
    jackpot: JackpotRecord
    fixtures: list[FixtureRecord]
    message: str | None = None


class FixtureCsvImportRequest(BaseModel):
    jackpot_id: int
    csv_data: str


class GeneratePredictionsRequest(BaseModel):
    """Request body for generating a jackpot's predictions."""

    jackpot_id: int
    strategy: str = "balanced"
    risk_level: int = 6
    include_wildcards: bool = False


class DeletePredictionsResponse(BaseModel):
    jackpot_id: int
    deleted: int


class StrategyInfo(BaseModel):
    """A selectable strategy with its target outcome split."""

    name: StrategyName
    description: str
    home: int
    draw: int
    away: int
