"""CSV export of a jackpot's fixtures and their predictions."""

from __future__ import annotations

import csv
import io
from datetime import date

from backend.common.exceptions import ExportError
from backend.common.logging import get_logger
from backend.common.schemas import FixtureWithPrediction

logger = get_logger("EXPORT")

EXPORT_COLUMNS = (
    "id",
    "home_team",
    "away_team",
    "match_date",
    "league",
    "status",
    "prediction",
    "confidence",
    "reasoning",
    "strategy",
)


def export_filename(day: date) -> str:
    return f"jackpot-predictions-{day.isoformat()}.csv"


def _flatten(fixture: FixtureWithPrediction) -> dict:
    prediction = fixture.prediction
    return {
        "id": fixture.id,
        "home_team": fixture.home_team,
        "away_team": fixture.away_team,
        "match_date": fixture.match_date.isoformat(),
        "league": fixture.league or "",
        "status": fixture.status,
        "prediction": prediction.outcome if prediction else "",
        "confidence": prediction.confidence if prediction else "",
        "reasoning": (prediction.reasoning or "") if prediction else "",
        "strategy": prediction.strategy if prediction else "",
    }


def build_predictions_csv(fixtures: list[FixtureWithPrediction]) -> str:
    """Render fixtures as a fully quoted CSV document.

    Raises:
        ExportError: If there are no fixtures.
    """
    if not fixtures:
        raise ExportError("No data to export")

    buffer = io.StringIO()
    writer = csv.DictWriter(
        buffer,
        fieldnames=EXPORT_COLUMNS,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    writer.writeheader()
    writer.writerows(_flatten(f) for f in fixtures)

    logger.info(
        "Predictions CSV built",
        extra={
            "data": {
                "rows": len(fixtures),
                "with_prediction": sum(1 for f in fixtures if f.prediction is not None),
            }
        },
    )
    return buffer.getvalue()
