from pydantic import Field, field_validator
from typing import List

from .base import BaseGolfModel, unique_ids


class HoleResult(BaseGolfModel):
    """
    Outcome of one hole within a round.

    Winners and hole-in-ones are independent: a player can ace a hole
    without winning it, and several players can share a hole.
    """
    hole_number: int = Field(ge=1)
    winner_ids: List[str] = Field(default_factory=list)
    hole_in_one_player_ids: List[str] = Field(default_factory=list)

    @field_validator('winner_ids', 'hole_in_one_player_ids')
    @classmethod
    def dedupe_players(cls, v):
        return unique_ids(v)
