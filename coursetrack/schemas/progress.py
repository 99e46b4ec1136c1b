"""
Progress tracking schemas for coursetrack.

Defines Pydantic models for learner state including:
- Per-course progress records
- Daily activity entries and lesson completion audit entries
- Streak statistics and dashboard summaries
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime


MAX_LEVEL = 10


def compute_level(completed: int, total: int) -> int:
    """
    Course level from completion: one level per 10% completed, clamped to 0-10.

    Integer form of floor(100 * completed / total / 10), so exact boundaries
    are never lost to float rounding.
    """
    if total <= 0:
        return 0
    return max(0, min(MAX_LEVEL, (completed * 10) // total))


class ProgressRecord(BaseModel):
    """One user's progress through one course."""
    course_id: str
    course_name: str
    level: int = Field(default=0, ge=0, le=MAX_LEVEL)  # derived, see compute_level
    completed_lessons: list[str] = []  # unique lesson ids
    total_lessons: int = Field(..., ge=1)
    started_at: datetime
    last_accessed: datetime
    is_completed: bool = False
    completed_at: Optional[datetime] = None

    @property
    def completed_count(self) -> int:
        return len(self.completed_lessons)

    @property
    def completion_percent(self) -> float:
        return round(self.completed_count / self.total_lessons * 100, 1)


class LessonCompletion(BaseModel):
    """Append-only audit entry written for every newly completed lesson."""
    course_id: str
    lesson_id: str
    completed_at: datetime
    time_spent_minutes: int = Field(default=0, ge=0)


class ActivityEntry(BaseModel):
    """Counters for one calendar day on which the user completed lessons."""
    date: date
    lessons_completed: int = Field(default=0, ge=0)
    time_spent_minutes: int = Field(default=0, ge=0)
    last_activity: Optional[datetime] = None


class StreakRecord(BaseModel):
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_activity_date: Optional[datetime] = None  # when the streak was last recomputed
    activity_dates: list[date] = []  # most recent first


class DashboardStats(BaseModel):
    courses_started: int = 0
    lessons_completed: int = 0
    current_level: int = 0  # highest level across courses
    learning_streak: int = 0
    completed_courses: int = 0
