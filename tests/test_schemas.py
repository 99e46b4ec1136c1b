"""
Schema validation tests for coursetrack.

Tests all Pydantic models to ensure they validate correctly.
"""

import pytest
from datetime import date, datetime

from coursetrack.schemas import (
    # Catalog
    LevelDefinition,
    CourseDefinition,
    Catalog,
    # Progress
    MAX_LEVEL,
    compute_level,
    ProgressRecord,
    LessonCompletion,
    ActivityEntry,
    StreakRecord,
    DashboardStats,
    # Review
    ReviewResponse,
    FlashCardSeed,
    FlashCard,
)


def _course(course_id="html", counts=(15, 15, 15), **kwargs):
    return CourseDefinition(
        id=course_id,
        name=course_id.upper(),
        levels=[
            LevelDefinition(id=f"level{i}", name=f"Level {i}", lessons=n)
            for i, n in enumerate(counts, start=1)
        ],
        **kwargs,
    )


class TestComputeLevel:
    """Test the level derivation helper."""

    def test_zero_completed(self):
        assert compute_level(0, 45) == 0

    def test_one_level_per_ten_percent(self):
        assert compute_level(1, 10) == 1
        assert compute_level(5, 10) == 5
        assert compute_level(9, 10) == 9

    def test_floors_between_levels(self):
        # 44/45 = 97.8% -> level 9
        assert compute_level(44, 45) == 9
        # 4/45 = 8.9% -> level 0
        assert compute_level(4, 45) == 0
        assert compute_level(5, 45) == 1

    def test_full_completion_is_max_level(self):
        assert compute_level(45, 45) == MAX_LEVEL

    def test_clamped_to_range(self):
        assert compute_level(50, 45) == MAX_LEVEL
        assert compute_level(-3, 45) == 0
        assert compute_level(3, 0) == 0


class TestCatalogSchemas:
    """Test catalog-related schemas."""

    def test_total_lessons_sums_levels(self):
        assert _course(counts=(25, 30, 30)).total_lessons == 85

    def test_level_requires_lessons(self):
        with pytest.raises(ValueError):
            LevelDefinition(id="beginner", name="Beginner", lessons=0)

    def test_course_requires_levels(self):
        with pytest.raises(ValueError):
            CourseDefinition(id="html", name="HTML", levels=[])

    def test_course_id_pattern(self):
        with pytest.raises(ValueError):
            _course(course_id="Not Valid")

    def test_lesson_ids_continue_across_levels(self):
        course = _course(counts=(2, 3))
        by_level = course.lesson_ids_by_level()
        assert by_level["level1"] == ["html-1", "html-2"]
        assert by_level["level2"] == ["html-3", "html-4", "html-5"]
        assert course.lesson_ids() == ["html-1", "html-2", "html-3", "html-4", "html-5"]

    def test_lesson_prefix(self):
        course = _course(course_id="javascript", counts=(1,), lesson_prefix="js")
        assert course.lesson_ids() == ["js-1"]

    def test_catalog_order_and_lookup(self):
        catalog = Catalog(courses=[_course("html"), _course("css")])
        assert catalog.course_ids == ["html", "css"]
        assert catalog.get("css").id == "css"
        assert catalog.get("missing") is None
        assert catalog.previous_course_id("html") is None
        assert catalog.previous_course_id("css") == "html"

    def test_catalog_rejects_duplicate_ids(self):
        with pytest.raises(ValueError):
            Catalog(courses=[_course("html"), _course("html")])


class TestProgressSchemas:
    """Test progress tracking schemas."""

    def test_progress_record_defaults(self):
        now = datetime(2024, 1, 1, 10, 0)
        record = ProgressRecord(
            course_id="html",
            course_name="HTML",
            total_lessons=45,
            started_at=now,
            last_accessed=now,
        )
        assert record.level == 0
        assert record.completed_lessons == []
        assert record.is_completed is False
        assert record.completed_at is None
        assert record.completed_count == 0
        assert record.completion_percent == 0.0

    def test_progress_record_percent(self):
        now = datetime(2024, 1, 1, 10, 0)
        record = ProgressRecord(
            course_id="html",
            course_name="HTML",
            completed_lessons=["html-1", "html-2", "html-3"],
            total_lessons=9,
            started_at=now,
            last_accessed=now,
        )
        assert record.completion_percent == 33.3

    def test_progress_record_bounds(self):
        now = datetime(2024, 1, 1, 10, 0)
        with pytest.raises(ValueError):
            ProgressRecord(course_id="html", course_name="HTML", total_lessons=0,
                           started_at=now, last_accessed=now)
        with pytest.raises(ValueError):
            ProgressRecord(course_id="html", course_name="HTML", total_lessons=45, level=11,
                           started_at=now, last_accessed=now)

    def test_lesson_completion_rejects_negative_time(self):
        with pytest.raises(ValueError):
            LessonCompletion(course_id="html", lesson_id="html-1",
                             completed_at=datetime(2024, 1, 1), time_spent_minutes=-1)

    def test_activity_entry_valid(self):
        entry = ActivityEntry(date=date(2024, 1, 1), lessons_completed=2, time_spent_minutes=25)
        assert entry.date == date(2024, 1, 1)
        assert entry.last_activity is None

    def test_streak_and_dashboard_defaults(self):
        streak = StreakRecord()
        assert streak.current_streak == 0
        assert streak.longest_streak == 0
        assert streak.activity_dates == []
        assert DashboardStats().model_dump() == {
            "courses_started": 0,
            "lessons_completed": 0,
            "current_level": 0,
            "learning_streak": 0,
            "completed_courses": 0,
        }


class TestReviewSchemas:
    """Test flashcard schemas."""

    def test_review_response_values(self):
        assert ReviewResponse.HARD.value == "hard"
        assert ReviewResponse.MEDIUM.value == "medium"
        assert ReviewResponse.EASY.value == "easy"
        assert ReviewResponse("easy") is ReviewResponse.EASY

    def test_flashcard_difficulty_is_ordinal(self):
        with pytest.raises(ValueError):
            FlashCardSeed(id="c1", question="q", answer="a", difficulty=0)

    def test_flashcard_valid(self):
        card = FlashCard(
            id="html-fc-1",
            question="What does HTML stand for?",
            answer="HyperText Markup Language",
            last_reviewed=datetime(2024, 1, 1),
            next_review=datetime(2024, 1, 2),
        )
        assert card.difficulty == 1


class TestSchemaImports:
    """Test that all schemas can be imported from the main module."""

    def test_import_from_coursetrack_schemas(self):
        from coursetrack.schemas import (
            Catalog,
            ProgressRecord,
            StreakRecord,
            FlashCard,
        )
        assert Catalog is not None
        assert ProgressRecord is not None
        assert StreakRecord is not None
        assert FlashCard is not None
