from .base import BaseGolfModel
from .course import Course
from .hole_result import HoleResult
from .player import Player
from .round import Round
from .season import Season, SeasonStatus
from .snapshot import ALL_SEASONS, UNKNOWN_COURSE, Snapshot

__all__ = [
    "ALL_SEASONS",
    "UNKNOWN_COURSE",
    "BaseGolfModel",
    "Course",
    "HoleResult",
    "Player",
    "Round",
    "Season",
    "SeasonStatus",
    "Snapshot",
]
