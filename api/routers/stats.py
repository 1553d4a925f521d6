"""Stats/leaderboard API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from database.db_manager import DatabaseManager
from api.dependencies import get_db
from analytics.stats import RoundSummary, StatsReport, compute_stats, round_summary
from models import ALL_SEASONS

router = APIRouter()


@router.get("", response_model=StatsReport)
async def get_stats(
    season_id: str = Query(ALL_SEASONS),
    db: DatabaseManager = Depends(get_db),
):
    """Player, course and season rankings, recomputed from the current records."""
    return compute_stats(db.snapshot(), season_id)


@router.get("/rounds/{round_id}", response_model=RoundSummary)
async def get_round_summary(round_id: str, db: DatabaseManager = Depends(get_db)):
    summary = round_summary(db.snapshot(), round_id)
    if summary is None:
        raise HTTPException(404, "Round not found")
    return summary
