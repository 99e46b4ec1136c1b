"""
Navigator - Course unlocking, lesson gating, and the course tree.

Provides:
- Course unlock evaluation over a fixed prerequisite chain
- Lesson availability inside a level
- Course tree with status indicators

Availability is derived from progress on every call; nothing is cached or
stored, so a completion is reflected on the next read.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from coursetrack.errors import UnknownCourse
from coursetrack.schemas import Catalog, CourseDefinition, ProgressRecord

from .loader import CatalogLoader
from .progress import ProgressTracker


class CourseAvailability(str, Enum):
    """Course availability status for display."""
    LOCKED = "locked"           # Previous course not completed
    AVAILABLE = "available"     # Unlocked, not started
    IN_PROGRESS = "in_progress" # Started but not completed
    COMPLETED = "completed"     # All lessons completed


class LessonAvailability(str, Enum):
    LOCKED = "locked"
    AVAILABLE = "available"
    COMPLETED = "completed"


@dataclass
class NavigationCourse:
    """Course with navigation metadata."""
    course: CourseDefinition
    availability: CourseAvailability
    completed_count: int
    total_count: int
    level: int


# -----------------------------------------------------------------------------
# Pure evaluation
# -----------------------------------------------------------------------------

def is_course_unlocked(course_id: str, progress: dict[str, ProgressRecord], catalog: Catalog) -> bool:
    """
    Check whether a course is unlocked.

    The first course in catalog order is always unlocked. Every other course
    unlocks once the course before it has all of its catalog lessons
    completed; a missing progress record counts as zero completed.

    Raises:
        UnknownCourse: If course_id is not in the catalog
    """
    if catalog.get(course_id) is None:
        raise UnknownCourse(course_id)

    previous_id = catalog.previous_course_id(course_id)
    if previous_id is None:
        return True

    previous = catalog.get(previous_id)
    record = progress.get(previous_id)
    completed = record.completed_count if record else 0
    return completed >= previous.total_lessons


def course_availability(course_id: str, progress: dict[str, ProgressRecord], catalog: Catalog) -> CourseAvailability:
    """Availability of one course for the given progress map."""
    if not is_course_unlocked(course_id, progress, catalog):
        return CourseAvailability.LOCKED
    record = progress.get(course_id)
    if record is None:
        return CourseAvailability.AVAILABLE
    if record.is_completed:
        return CourseAvailability.COMPLETED
    return CourseAvailability.IN_PROGRESS


def lesson_availability(course: CourseDefinition, lesson_id: str, record: Optional[ProgressRecord]) -> LessonAvailability:
    """
    Availability of a lesson inside its level.

    The first lesson of every level is open; each later lesson opens when
    the lesson before it in the same level is completed.

    Raises:
        KeyError: If lesson_id is not part of the course
    """
    completed = set(record.completed_lessons) if record else set()
    if lesson_id in completed:
        return LessonAvailability.COMPLETED

    for lesson_ids in course.lesson_ids_by_level().values():
        if lesson_id not in lesson_ids:
            continue
        idx = lesson_ids.index(lesson_id)
        if idx == 0 or lesson_ids[idx - 1] in completed:
            return LessonAvailability.AVAILABLE
        return LessonAvailability.LOCKED

    raise KeyError(f"Lesson {lesson_id} is not part of course {course.id}")


# -----------------------------------------------------------------------------
# Navigator
# -----------------------------------------------------------------------------

class Navigator:
    """
    Navigate the catalog for one user.

    Combines CatalogLoader (content) with ProgressTracker (user state)
    to provide availability for courses and lessons.
    """

    def __init__(self, loader: CatalogLoader, progress: ProgressTracker, user_id: str):
        """
        Initialize navigator.

        Args:
            loader: CatalogLoader instance for content access
            progress: ProgressTracker instance for user progress
            user_id: User whose progress is evaluated
        """
        self.loader = loader
        self.progress = progress
        self.user_id = user_id

    def is_course_unlocked(self, course_id: str) -> bool:
        return is_course_unlocked(
            course_id,
            self.progress.get_all_course_progress(self.user_id),
            self.loader.catalog,
        )

    def get_course_availability(self, course_id: str) -> CourseAvailability:
        return course_availability(
            course_id,
            self.progress.get_all_course_progress(self.user_id),
            self.loader.catalog,
        )

    def get_lesson_availability(self, course_id: str, lesson_id: str) -> LessonAvailability:
        """Lesson availability; every lesson of a locked course is locked."""
        course = self.loader.require_course(course_id)
        if not self.is_course_unlocked(course_id):
            return LessonAvailability.LOCKED
        record = self.progress.get_course_progress(self.user_id, course_id)
        return lesson_availability(course, lesson_id, record)

    def get_navigation_tree(self) -> list[NavigationCourse]:
        """
        Get every course in catalog order with availability and counts.
        """
        progress = self.progress.get_all_course_progress(self.user_id)
        catalog = self.loader.catalog

        tree = []
        for course in catalog.courses:
            record = progress.get(course.id)
            tree.append(NavigationCourse(
                course=course,
                availability=course_availability(course.id, progress, catalog),
                completed_count=record.completed_count if record else 0,
                total_count=course.total_lessons,
                level=record.level if record else 0,
            ))
        return tree

    def get_status_indicator(self, course_id: str) -> str:
        """
        Get status indicator for display.

        Returns:
            ✓ for completed
            → for in progress
            ○ for available
            ◌ for locked
        """
        availability = self.get_course_availability(course_id)
        if availability == CourseAvailability.COMPLETED:
            return "✓"
        elif availability == CourseAvailability.IN_PROGRESS:
            return "→"
        elif availability == CourseAvailability.AVAILABLE:
            return "○"
        else:
            return "◌"
