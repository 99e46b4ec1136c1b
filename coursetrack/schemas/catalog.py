"""
Catalog schemas for coursetrack.

Defines Pydantic models for the static course catalog:
- Levels with lesson counts
- Courses with ordered levels
- The catalog itself, whose course order is the prerequisite chain
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional

from .review import FlashCardSeed


class LevelDefinition(BaseModel):
    """A grouping of lessons inside a course (beginner, intermediate, ...)."""
    id: str
    name: str
    description: str = ""
    lessons: int = Field(..., ge=1)  # lesson count


class CourseDefinition(BaseModel):
    id: str = Field(..., pattern=r'^[a-z0-9_-]+$')
    name: str
    description: str = ""
    lesson_prefix: Optional[str] = None  # defaults to id
    levels: list[LevelDefinition] = Field(..., min_length=1)
    flashcards: list[FlashCardSeed] = []

    @property
    def total_lessons(self) -> int:
        return sum(level.lessons for level in self.levels)

    def lesson_ids_by_level(self) -> dict[str, list[str]]:
        """
        Lesson IDs grouped by level, in course order.

        IDs are numbered from 1 across the whole course, so the first lesson
        of the second level continues where the first level stopped
        (html-1 .. html-15, then html-16 ...).
        """
        prefix = self.lesson_prefix or self.id
        result = {}
        number = 1
        for level in self.levels:
            result[level.id] = [f"{prefix}-{n}" for n in range(number, number + level.lessons)]
            number += level.lessons
        return result

    def lesson_ids(self) -> list[str]:
        return [lid for ids in self.lesson_ids_by_level().values() for lid in ids]


class Catalog(BaseModel):
    """
    Ordered list of courses.

    Course order is the prerequisite chain: each course unlocks once the
    one before it is fully completed.
    """
    courses: list[CourseDefinition]

    @field_validator('courses')
    @classmethod
    def unique_ids(cls, v):
        seen = set()
        for course in v:
            if course.id in seen:
                raise ValueError(f'Duplicate course id: {course.id}')
            seen.add(course.id)
        return v

    @property
    def course_ids(self) -> list[str]:
        return [course.id for course in self.courses]

    def get(self, course_id: str) -> Optional[CourseDefinition]:
        for course in self.courses:
            if course.id == course_id:
                return course
        return None

    def previous_course_id(self, course_id: str) -> Optional[str]:
        """Prerequisite of a course, or None for the first course."""
        ids = self.course_ids
        idx = ids.index(course_id)
        return ids[idx - 1] if idx > 0 else None
