from datetime import datetime
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class Course(BaseGolfModel):
    """A course, possibly one of several layouts at the same location."""
    id: str
    name: str = Field(min_length=1)
    location: Optional[str] = None
    number_of_courses: int = Field(1, ge=1)
    holes_per_course: int = Field(18, ge=1)
    created_at: datetime = Field(default_factory=datetime.now)

    def has_hole(self, number: int) -> bool:
        """Check a hole number against the course length."""
        return 1 <= number <= self.holes_per_course
