"""CSV export endpoint for the dashboard's download button."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from backend.api.deps import fixture_with_prediction
from backend.common.database import get_db
from backend.common.metrics import CSV_EXPORTS_TOTAL
from backend.jackpot import store
from backend.jackpot.csv_export import build_predictions_csv, export_filename

router = APIRouter()


@router.get("/{jackpot_id}")
async def export_predictions_csv(
    jackpot_id: int,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Download a jackpot's fixtures and predictions as a CSV attachment.

    Raises:
        ExportError: 400 if the jackpot has no fixtures.
    """
    rows = await store.get_fixtures_with_predictions(db, jackpot_id)
    content = build_predictions_csv([fixture_with_prediction(f, p) for f, p in rows])
    CSV_EXPORTS_TOTAL.inc()

    filename = export_filename(datetime.now(UTC).date())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
