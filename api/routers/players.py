"""Player roster API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from typing import List
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from api.dependencies import get_db
from api.schemas import CreatePlayerRequest, UpdatePlayerRequest
from models import Player

router = APIRouter()


@router.get("", response_model=List[Player])
async def list_players(db: DatabaseManager = Depends(get_db)):
    return db.players.list()


@router.post("", response_model=Player, status_code=201)
def add_player(req: CreatePlayerRequest, db: DatabaseManager = Depends(get_db)):
    return db.players.add_player(req.name, avatar=req.avatar)


@router.get("/{player_id}", response_model=Player)
async def get_player(player_id: str, db: DatabaseManager = Depends(get_db)):
    player = db.players.get(player_id)
    if not player:
        raise HTTPException(404, "Player not found")
    return player


@router.patch("/{player_id}", response_model=Player)
def update_player(
    player_id: str,
    req: UpdatePlayerRequest,
    db: DatabaseManager = Depends(get_db),
):
    """Rename a player or change their avatar."""
    try:
        return db.players.update_player(player_id, **req.model_dump(exclude_unset=True))
    except NotFoundError:
        raise HTTPException(404, "Player not found")
    except ValidationError as e:
        raise HTTPException(422, e.errors()[0]["msg"])


@router.delete("/{player_id}", status_code=204)
def remove_player(player_id: str, db: DatabaseManager = Depends(get_db)):
    """Remove from the roster. Recorded rounds are left untouched."""
    if not db.players.remove_player(player_id):
        raise HTTPException(404, "Player not found")
