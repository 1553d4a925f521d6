"""Downloadable exports of the current rankings."""

from datetime import date
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from database.db_manager import DatabaseManager
from api.dependencies import get_db
from analytics.export import (
    XLSX_MEDIA_TYPE,
    build_workbook,
    export_filename,
    players_to_csv,
    workbook_to_xlsx,
)
from analytics.stats import compute_stats, player_stats
from models import ALL_SEASONS

router = APIRouter()


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f"attachment; filename={filename}"}


@router.get("/players.csv")
def export_players_csv(
    season_id: str = Query(ALL_SEASONS),
    db: DatabaseManager = Depends(get_db),
):
    content = players_to_csv(player_stats(db.snapshot(), season_id))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers=_attachment(export_filename("csv", date.today())),
    )


@router.get("/workbook")
def export_workbook(
    season_id: str = Query(ALL_SEASONS),
    db: DatabaseManager = Depends(get_db),
):
    """Player, course and season sheets as an .xlsx download."""
    workbook = build_workbook(compute_stats(db.snapshot(), season_id))
    return Response(
        content=workbook_to_xlsx(workbook),
        media_type=XLSX_MEDIA_TYPE,
        headers=_attachment(export_filename("xlsx", date.today())),
    )
