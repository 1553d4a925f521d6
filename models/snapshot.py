import logging
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional

from .course import Course
from .player import Player
from .round import Round
from .season import Season

logger = logging.getLogger(__name__)

ALL_SEASONS = "all"
UNKNOWN_COURSE = "Unknown"


class Snapshot(BaseModel):
    """
    Read-only view of the four record collections at one store version.

    Each collection is keyed by id and keeps insertion order. Relationships
    are resolved by lookup here; a missing key resolves to None instead of
    raising.
    """
    model_config = ConfigDict(frozen=True)

    version: int = 0
    players: Dict[str, Player] = Field(default_factory=dict)
    seasons: Dict[str, Season] = Field(default_factory=dict)
    courses: Dict[str, Course] = Field(default_factory=dict)
    rounds: Dict[str, Round] = Field(default_factory=dict)

    @classmethod
    def from_records(
        cls,
        players: Optional[List[Player]] = None,
        seasons: Optional[List[Season]] = None,
        courses: Optional[List[Course]] = None,
        rounds: Optional[List[Round]] = None,
        version: int = 0,
    ) -> "Snapshot":
        """Index plain record lists by id."""
        return cls(
            version=version,
            players={p.id: p for p in players or []},
            seasons={s.id: s for s in seasons or []},
            courses={c.id: c for c in courses or []},
            rounds={r.id: r for r in rounds or []},
        )

    def get_player(self, player_id: str) -> Optional[Player]:
        player = self.players.get(player_id)
        if player is None:
            logger.debug("Player %s no longer on the roster", player_id)
        return player

    def get_course(self, course_id: str) -> Optional[Course]:
        return self.courses.get(course_id)

    def get_round(self, round_id: str) -> Optional[Round]:
        return self.rounds.get(round_id)

    def player_name(self, player_id: str) -> Optional[str]:
        player = self.get_player(player_id)
        return player.name if player else None

    def course_name(self, course_id: str) -> str:
        course = self.get_course(course_id)
        return course.name if course else UNKNOWN_COURSE

    def rounds_for_season(self, season_id: Optional[str] = None) -> List[Round]:
        """Rounds in store order; None or ALL_SEASONS keeps every round."""
        if season_id is None or season_id == ALL_SEASONS:
            return list(self.rounds.values())
        return [r for r in self.rounds.values() if r.season_id == season_id]
