"""Course API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from typing import List
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from api.dependencies import get_db
from api.schemas import CreateCourseRequest, UpdateCourseRequest
from models import Course

router = APIRouter()


@router.get("", response_model=List[Course])
async def list_courses(db: DatabaseManager = Depends(get_db)):
    return db.courses.list()


@router.post("", response_model=Course, status_code=201)
def add_course(req: CreateCourseRequest, db: DatabaseManager = Depends(get_db)):
    return db.courses.add_course(
        req.name,
        number_of_courses=req.number_of_courses,
        holes_per_course=req.holes_per_course,
        location=req.location,
    )


@router.get("/{course_id}", response_model=Course)
async def get_course(course_id: str, db: DatabaseManager = Depends(get_db)):
    course = db.courses.get(course_id)
    if not course:
        raise HTTPException(404, "Course not found")
    return course


@router.patch("/{course_id}", response_model=Course)
def update_course(
    course_id: str,
    req: UpdateCourseRequest,
    db: DatabaseManager = Depends(get_db),
):
    try:
        return db.courses.update_course(course_id, **req.model_dump(exclude_unset=True))
    except NotFoundError:
        raise HTTPException(404, "Course not found")
    except ValidationError as e:
        raise HTTPException(422, e.errors()[0]["msg"])


@router.delete("/{course_id}", status_code=204)
def delete_course(course_id: str, db: DatabaseManager = Depends(get_db)):
    """Delete a course. Rounds played there show it as unknown."""
    if not db.courses.delete(course_id):
        raise HTTPException(404, "Course not found")
