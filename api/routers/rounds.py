"""Round API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import ValidationError
from typing import List, Optional
from database.db_manager import DatabaseManager
from database.exceptions import IntegrityError, NotFoundError
from api.dependencies import get_db
from api.schemas import CreateRoundRequest, HoleResultRequest, RoundListResponse
from models import Round
from models.snapshot import UNKNOWN_COURSE

router = APIRouter()


def summarize_round(r: Round, db: DatabaseManager) -> RoundListResponse:
    """Project a full Round into a lightweight list entry."""
    course = db.courses.get(r.course_id)
    return RoundListResponse(
        id=r.id,
        season_id=r.season_id,
        course_id=r.course_id,
        course_name=course.name if course else UNKNOWN_COURSE,
        player_ids=r.player_ids,
        holes_recorded=len(r.hole_results),
        started_at=r.started_at,
        completed_at=r.completed_at,
    )


@router.get("", response_model=List[RoundListResponse])
async def list_rounds(
    season_id: Optional[str] = Query(None),
    db: DatabaseManager = Depends(get_db),
):
    """Rounds, newest first, optionally for one season."""
    rounds = db.rounds.get_rounds_for_season(season_id) if season_id else db.rounds.list()
    rounds = sorted(rounds, key=lambda r: r.started_at, reverse=True)
    return [summarize_round(r, db) for r in rounds]


@router.post("", response_model=Round, status_code=201)
def start_round(req: CreateRoundRequest, db: DatabaseManager = Depends(get_db)):
    try:
        return db.start_round(req.season_id, req.course_id, req.player_ids)
    except IntegrityError as e:
        raise HTTPException(422, str(e))


@router.get("/in-progress", response_model=Round)
async def get_round_in_progress(
    season_id: str = Query(...),
    db: DatabaseManager = Depends(get_db),
):
    """The unfinished round of a season, for picking a game back up."""
    round_obj = db.rounds.get_round_in_progress(season_id)
    if not round_obj:
        raise HTTPException(404, "No round in progress")
    return round_obj


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    round_obj = db.rounds.get(round_id)
    if not round_obj:
        raise HTTPException(404, "Round not found")
    return round_obj


@router.put("/{round_id}/holes/{hole_number}", response_model=Round)
def record_hole(
    round_id: str,
    req: HoleResultRequest,
    hole_number: int = Path(..., ge=1),
    db: DatabaseManager = Depends(get_db),
):
    """Save the winners and hole-in-ones for one hole. Re-saving a hole overwrites it."""
    round_obj = db.rounds.get(round_id)
    course = db.courses.get(round_obj.course_id) if round_obj else None
    if course and not course.has_hole(hole_number):
        raise HTTPException(422, f"{course.name} has only {course.holes_per_course} holes")
    try:
        return db.rounds.record_hole(
            round_id,
            hole_number,
            req.winner_ids,
            req.hole_in_one_player_ids,
        )
    except NotFoundError:
        raise HTTPException(404, "Round not found")
    except (IntegrityError, ValidationError) as e:
        raise HTTPException(422, str(e))


@router.post("/{round_id}/complete", response_model=Round)
def complete_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    try:
        return db.rounds.complete_round(round_id)
    except NotFoundError:
        raise HTTPException(404, "Round not found")


@router.delete("/{round_id}", status_code=204)
def delete_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    if not db.rounds.delete(round_id):
        raise HTTPException(404, "Round not found")
