"""
coursetrack Schemas - Pydantic models for the course progress platform.

This module exports all schema classes for:
- Catalog: courses, levels, prerequisite order
- Progress: progress records, activity, streaks, dashboard stats
- Review: flashcards and review responses
"""

# Catalog schemas
from .catalog import (
    LevelDefinition,
    CourseDefinition,
    Catalog,
)

# Progress schemas
from .progress import (
    MAX_LEVEL,
    compute_level,
    ProgressRecord,
    LessonCompletion,
    ActivityEntry,
    StreakRecord,
    DashboardStats,
)

# Review schemas
from .review import (
    ReviewResponse,
    FlashCardSeed,
    FlashCard,
)

__all__ = [
    # Catalog
    'LevelDefinition',
    'CourseDefinition',
    'Catalog',
    # Progress
    'MAX_LEVEL',
    'compute_level',
    'ProgressRecord',
    'LessonCompletion',
    'ActivityEntry',
    'StreakRecord',
    'DashboardStats',
    # Review
    'ReviewResponse',
    'FlashCardSeed',
    'FlashCard',
]
