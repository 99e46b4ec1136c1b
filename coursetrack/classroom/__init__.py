"""
coursetrack Classroom - Runtime components for progress, unlocking and review.

This module provides:
- CatalogLoader: Load the course catalog
- ProgressTracker: Durable learner state
- ProgressEngine: Course start, lesson completion, streaks
- Navigator: Course unlocking and lesson gating
- ReviewQueue: Flashcard review scheduling
"""

from .loader import CatalogLoader

from .progress import ProgressTracker

from .streak import (
    compute_streak,
    compute_current_streak,
    compute_longest_streak,
)

from .engine import ProgressEngine

from .navigator import (
    Navigator,
    CourseAvailability,
    LessonAvailability,
    NavigationCourse,
    is_course_unlocked,
    course_availability,
    lesson_availability,
)

from .review import (
    ReviewQueue,
    REVIEW_INTERVAL_DAYS,
    get_due_card,
    record_review,
)

__all__ = [
    # Loader
    "CatalogLoader",
    # Progress
    "ProgressTracker",
    # Streak
    "compute_streak",
    "compute_current_streak",
    "compute_longest_streak",
    # Engine
    "ProgressEngine",
    # Navigator
    "Navigator",
    "CourseAvailability",
    "LessonAvailability",
    "NavigationCourse",
    "is_course_unlocked",
    "course_availability",
    "lesson_availability",
    # Review
    "ReviewQueue",
    "REVIEW_INTERVAL_DAYS",
    "get_due_card",
    "record_review",
]
