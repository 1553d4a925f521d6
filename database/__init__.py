from database.db_manager import DatabaseManager
from database.repositories import CourseRepository, PlayerRepository, RoundRepository, SeasonRepository
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "DatabaseManager",
    "CourseRepository",
    "PlayerRepository",
    "RoundRepository",
    "SeasonRepository",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
