from datetime import datetime
from pydantic import Field, field_validator
from typing import Dict, List, Optional

from .base import BaseGolfModel, unique_ids
from .hole_result import HoleResult


class Round(BaseGolfModel):
    """One play-through of a course by a set of players within a season."""
    id: str
    season_id: str
    course_id: str
    player_ids: List[str] = Field(default_factory=list)
    hole_results: List[HoleResult] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=datetime.now)
    completed_at: Optional[datetime] = None

    @field_validator('player_ids')
    @classmethod
    def dedupe_players(cls, v):
        return unique_ids(v)

    @field_validator('hole_results')
    @classmethod
    def validate_unique_holes(cls, v):
        numbers = [h.hole_number for h in v]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Each hole can only be recorded once per round")
        return v

    @property
    def is_complete(self) -> bool:
        """A round without a completion time is still in progress."""
        return self.completed_at is not None

    def get_hole_result(self, hole_number: int) -> Optional[HoleResult]:
        for hole in self.hole_results:
            if hole.hole_number == hole_number:
                return hole
        return None

    def record_hole(self, result: HoleResult) -> "Round":
        """Return a copy with `result` replacing any entry for the same hole."""
        replaced = False
        holes: List[HoleResult] = []
        for hole in self.hole_results:
            if hole.hole_number == result.hole_number:
                holes.append(result)
                replaced = True
            else:
                holes.append(hole)
        if not replaced:
            holes.append(result)
        return self.model_copy(update={"hole_results": holes})

    def holes_won_by_player(self) -> Dict[str, int]:
        """Holes won per player id in this round, in order of first win."""
        scores: Dict[str, int] = {}
        for hole in self.hole_results:
            for winner_id in hole.winner_ids:
                scores[winner_id] = scores.get(winner_id, 0) + 1
        return scores

    def hole_in_ones_by_player(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for hole in self.hole_results:
            for player_id in hole.hole_in_one_player_ids:
                counts[player_id] = counts.get(player_id, 0) + 1
        return counts
