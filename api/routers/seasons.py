"""Season API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from api.dependencies import get_db
from api.schemas import CreateSeasonRequest
from models import Season

router = APIRouter()


@router.get("", response_model=List[Season])
async def list_seasons(db: DatabaseManager = Depends(get_db)):
    return db.seasons.list()


@router.get("/active", response_model=Season)
async def get_active_season(db: DatabaseManager = Depends(get_db)):
    season = db.seasons.get_active_season()
    if not season:
        raise HTTPException(404, "No active season")
    return season


@router.post("", response_model=Season, status_code=201)
def create_season(req: CreateSeasonRequest, db: DatabaseManager = Depends(get_db)):
    """Create the new active season. A season already active is completed first."""
    unknown = [pid for pid in req.player_ids if pid not in db.players]
    if unknown:
        raise HTTPException(422, f"Unknown players: {', '.join(unknown)}")
    with db.batch():
        return db.seasons.create_season(req.name, req.player_ids)


@router.get("/{season_id}", response_model=Season)
async def get_season(season_id: str, db: DatabaseManager = Depends(get_db)):
    season = db.seasons.get(season_id)
    if not season:
        raise HTTPException(404, "Season not found")
    return season


@router.post("/{season_id}/complete", response_model=Season)
def complete_season(season_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        return db.seasons.complete_season(season_id)
    except NotFoundError:
        raise HTTPException(404, "Season not found")


@router.delete("/{season_id}", status_code=204)
def delete_season(season_id: str, db: DatabaseManager = Depends(get_db)):
    """Delete a season and every round played in it."""
    if not db.delete_season(season_id):
        raise HTTPException(404, "Season not found")
