"""CRUD for courses."""

import logging
from typing import Optional
from uuid import uuid4

from models import Course
from database.repositories.base import KeyedRepository

logger = logging.getLogger(__name__)


class CourseRepository(KeyedRepository[Course]):
    entity = "Course"

    def add_course(
        self,
        name: str,
        number_of_courses: int = 1,
        holes_per_course: int = 18,
        location: Optional[str] = None,
    ) -> Course:
        course = self.add(
            Course(
                id=str(uuid4()),
                name=name,
                location=location,
                number_of_courses=number_of_courses,
                holes_per_course=holes_per_course,
            )
        )
        logger.info("Added course %s (%s)", course.name, course.id)
        return course

    def update_course(self, course_id: str, **fields) -> Course:
        allowed = {"name", "location", "number_of_courses", "holes_per_course"}
        updates = {k: v for k, v in fields.items() if k in allowed}
        if not updates:
            return self.require(course_id)
        return self.update(course_id, **updates)
