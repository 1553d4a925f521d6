"""API request bodies and list-view response models."""

from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from models.base import unique_ids


class CreatePlayerRequest(BaseModel):
    name: str = Field(min_length=1)
    avatar: Optional[str] = None


class UpdatePlayerRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    avatar: Optional[str] = None


class CreateSeasonRequest(BaseModel):
    name: str = Field(min_length=1)
    player_ids: List[str] = Field(min_length=2)

    @field_validator("player_ids", mode="before")
    @classmethod
    def dedupe_players(cls, v):
        if isinstance(v, list) and all(isinstance(i, str) for i in v):
            return unique_ids(v)
        return v


class CreateCourseRequest(BaseModel):
    name: str = Field(min_length=1)
    location: Optional[str] = None
    number_of_courses: int = Field(1, ge=1)
    holes_per_course: int = Field(18, ge=1)


class UpdateCourseRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = None
    number_of_courses: Optional[int] = Field(None, ge=1)
    holes_per_course: Optional[int] = Field(None, ge=1)


class CreateRoundRequest(BaseModel):
    season_id: str
    course_id: str
    player_ids: List[str] = Field(min_length=2)

    @field_validator("player_ids", mode="before")
    @classmethod
    def dedupe_players(cls, v):
        if isinstance(v, list) and all(isinstance(i, str) for i in v):
            return unique_ids(v)
        return v


class HoleResultRequest(BaseModel):
    winner_ids: List[str] = Field(default_factory=list)
    hole_in_one_player_ids: List[str] = Field(default_factory=list)


class RoundListResponse(BaseModel):
    """Lightweight round for list views."""
    id: str
    season_id: str
    course_id: str
    course_name: str
    player_ids: List[str]
    holes_recorded: int = 0
    started_at: datetime
    completed_at: Optional[datetime] = None
