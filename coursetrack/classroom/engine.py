"""
ProgressEngine - Start courses, complete lessons, recompute streaks.

The engine owns the progress rules:
- level and is_completed are always derived from the completed lesson count
- completing an already completed lesson changes nothing
- completed_at is set once, on the transition to completed
- a completion is written as one atomic batch (progress, audit, activity)

Records are copied, never mutated in place, so a failed write leaves the
caller's view of progress untouched.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from coursetrack.errors import (
    CourseNotStarted,
    InvariantViolation,
    StoreUnavailable,
    UnknownCourse,
    UnknownLesson,
)
from coursetrack.schemas import (
    DashboardStats,
    LessonCompletion,
    ProgressRecord,
    StreakRecord,
    compute_level,
)
from coursetrack.utils.clock import as_aware, utc_now

from .loader import CatalogLoader
from .progress import ProgressTracker
from .streak import compute_streak

logger = logging.getLogger(__name__)


class ProgressEngine:
    """
    Apply progress operations for any user against a ProgressTracker.

    The engine does not serialize concurrent calls: callers must keep at
    most one complete_lesson in flight per user.
    """

    def __init__(
        self,
        progress: ProgressTracker,
        loader: Optional[CatalogLoader] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize engine.

        Args:
            progress: Durable store for records, activity and streaks
            loader: Optional catalog; when given, starts and completions are
                checked against it
            clock: Returns "now"; today is clock().date() (default: UTC now).
                Naive datetimes are taken as local time
        """
        self.progress = progress
        self.loader = loader
        self.clock = clock or utc_now

    def _now(self) -> datetime:
        return as_aware(self.clock())

    # -------------------------------------------------------------------------
    # Starting courses
    # -------------------------------------------------------------------------

    def start_course(
        self,
        user_id: str,
        course_id: str,
        course_name: str,
        total_lessons: int,
        allow_reset: bool = False,
    ) -> ProgressRecord:
        """
        Create a progress record for a course.

        An existing record is returned unchanged unless allow_reset is True,
        in which case it is replaced by a fresh record and its completed
        lessons are lost. Activity and streaks are never touched.

        With a catalog configured, the stored name is the catalog name and
        total_lessons must match the catalog total.

        Raises:
            UnknownCourse: If a catalog is configured and does not list course_id
            ValueError: If total_lessons disagrees with the catalog
            StoreUnavailable: If the store fails
        """
        if self.loader is not None:
            course = self.loader.require_course(course_id)
            if total_lessons != course.total_lessons:
                raise ValueError(
                    f"{course_id}: total_lessons {total_lessons} does not match catalog total {course.total_lessons}"
                )
            course_name = course.name

        existing = self.progress.get_course_progress(user_id, course_id)
        if existing is not None and not allow_reset:
            logger.debug(f"Course {course_id} already started for {user_id}")
            return existing

        now = self._now()
        record = ProgressRecord(
            course_id=course_id,
            course_name=course_name,
            level=0,
            completed_lessons=[],
            total_lessons=total_lessons,
            started_at=now,
            last_accessed=now,
            is_completed=False,
        )
        self.progress.save_course_progress(user_id, record)
        if existing is not None:
            logger.info(f"Reset course {course_id} for {user_id} ({existing.completed_count} lessons discarded)")
        else:
            logger.info(f"Started course {course_id} for {user_id}")
        return record

    def start_catalog_course(self, user_id: str, course_id: str, allow_reset: bool = False) -> ProgressRecord:
        """Start a course using the name and lesson total from the catalog."""
        if self.loader is None:
            raise UnknownCourse(course_id)
        course = self.loader.require_course(course_id)
        return self.start_course(user_id, course.id, course.name, course.total_lessons, allow_reset)

    # -------------------------------------------------------------------------
    # Completing lessons
    # -------------------------------------------------------------------------

    def complete_lesson(
        self,
        user_id: str,
        course_id: str,
        lesson_id: str,
        time_spent_minutes: int = 0,
    ) -> ProgressRecord:
        """
        Mark a lesson completed and return the updated progress record.

        Completing a lesson twice returns the current record unchanged and
        writes nothing. Otherwise the progress record, the audit entry and
        today's activity are written together, then the streak is
        recomputed.

        Raises:
            ValueError: If time_spent_minutes is negative
            UnknownCourse: If a catalog is configured and does not list course_id
            UnknownLesson: If a catalog is configured and lesson_id is not in the course
            CourseNotStarted: If the course has no progress record
            InvariantViolation: If the completion would break progress invariants
            StoreUnavailable: If the completion write fails (nothing is applied)
        """
        if time_spent_minutes < 0:
            raise ValueError("time_spent_minutes must be >= 0")

        if self.loader is not None and lesson_id not in self.loader.get_lesson_ids(course_id):
            raise UnknownLesson(course_id, lesson_id)

        current = self.progress.get_course_progress(user_id, course_id)
        if current is None:
            raise CourseNotStarted(user_id, course_id)

        if lesson_id in current.completed_lessons:
            logger.debug(f"Lesson {lesson_id} already completed in {course_id} for {user_id}")
            return current

        now = self._now()
        updated = self._apply_completion(current, lesson_id, now)
        completion = LessonCompletion(
            course_id=course_id,
            lesson_id=lesson_id,
            completed_at=now,
            time_spent_minutes=time_spent_minutes,
        )
        self.progress.commit_lesson_completion(user_id, updated, completion, now.date())
        logger.info(
            f"Completed {course_id}/{lesson_id} for {user_id}: "
            f"{updated.completed_count}/{updated.total_lessons}, level {updated.level}"
        )
        if updated.is_completed and not current.is_completed:
            logger.info(f"Course {course_id} completed by {user_id}")

        try:
            self.recompute_streak(user_id)
        except StoreUnavailable as e:
            # The completion is committed; the streak catches up on the next recompute.
            logger.warning(f"Streak recompute failed for {user_id}: {e}")

        return updated

    @staticmethod
    def _apply_completion(current: ProgressRecord, lesson_id: str, now: datetime) -> ProgressRecord:
        completed = [*current.completed_lessons, lesson_id]
        count = len(completed)
        if count > current.total_lessons:
            raise InvariantViolation(
                f"{current.course_id}: {count} completed lessons exceeds total {current.total_lessons}"
            )

        level = compute_level(count, current.total_lessons)
        if level < current.level:
            raise InvariantViolation(
                f"{current.course_id}: level would drop from {current.level} to {level}"
            )

        is_completed = count >= current.total_lessons
        completed_at = current.completed_at
        if is_completed and completed_at is None:
            completed_at = now

        return current.model_copy(update={
            "completed_lessons": completed,
            "level": level,
            "is_completed": is_completed,
            "completed_at": completed_at,
            "last_accessed": now,
        })

    # -------------------------------------------------------------------------
    # Streaks
    # -------------------------------------------------------------------------

    def recompute_streak(self, user_id: str) -> StreakRecord:
        """
        Recompute and persist the user's streak from the full activity log.

        Raises:
            StoreUnavailable: If reading activity or saving the streak fails
        """
        now = self._now()
        active_dates = sorted(set(self.progress.get_activity_dates(user_id)), reverse=True)
        current, longest = compute_streak(active_dates, now.date())
        streak = StreakRecord(
            current_streak=current,
            longest_streak=longest,
            last_activity_date=now,
            activity_dates=active_dates,
        )
        self.progress.save_streak(user_id, streak)
        logger.debug(f"Streak for {user_id}: current {current}, longest {longest}")
        return streak

    # -------------------------------------------------------------------------
    # Dashboard
    # -------------------------------------------------------------------------

    def get_dashboard_stats(self, user_id: str) -> DashboardStats:
        """Summary across all of the user's courses (all zeros for a new user)."""
        progress = self.progress.get_all_course_progress(user_id)
        streak = self.progress.get_streak(user_id)

        return DashboardStats(
            courses_started=len(progress),
            lessons_completed=sum(r.completed_count for r in progress.values()),
            current_level=max((r.level for r in progress.values()), default=0),
            learning_streak=streak.current_streak if streak else 0,
            completed_courses=sum(1 for r in progress.values() if r.is_completed),
        )
