from .course_repo import CourseRepository
from .player_repo import PlayerRepository
from .round_repo import RoundRepository
from .season_repo import SeasonRepository

__all__ = ["CourseRepository", "PlayerRepository", "RoundRepository", "SeasonRepository"]
