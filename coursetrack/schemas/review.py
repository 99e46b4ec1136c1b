"""
Flashcard schemas for coursetrack.

Defines Pydantic models for spaced-repetition review:
- Flashcards with review timestamps
- Self-reported review responses
- Catalog seeds used to build a user's deck
"""

from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum


class ReviewResponse(str, Enum):
    HARD = "hard"
    MEDIUM = "medium"
    EASY = "easy"


class FlashCardSeed(BaseModel):
    """Flashcard as authored in the catalog (no review state yet)."""
    id: str
    question: str
    answer: str
    difficulty: int = Field(default=1, ge=1)


class FlashCard(BaseModel):
    id: str
    question: str
    answer: str
    difficulty: int = Field(default=1, ge=1)  # ordinal, 1 = easiest
    last_reviewed: datetime
    next_review: datetime
