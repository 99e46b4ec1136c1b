"""
CatalogLoader - Load the static course catalog from YAML.

Provides read-only access to:
- Courses in prerequisite order
- Levels and lesson IDs per course
- Flashcard seeds per course
"""

import logging
from pathlib import Path
from typing import Optional

from coursetrack.errors import UnknownCourse
from coursetrack.schemas import Catalog, CourseDefinition, FlashCardSeed
from coursetrack.utils.config import DEFAULT_CATALOG
from coursetrack.utils.yaml_loader import load_yaml

logger = logging.getLogger(__name__)


class CatalogLoader:
    """
    Load and query the course catalog.

    The file is parsed and validated once, at construction.
    """

    def __init__(self, catalog_path: Optional[str | Path] = None):
        """
        Initialize loader.

        Args:
            catalog_path: Path to catalog YAML (default: bundled catalog.yaml)
        """
        self.catalog_path = Path(catalog_path) if catalog_path else DEFAULT_CATALOG
        self.catalog = Catalog.model_validate(load_yaml(self.catalog_path))
        logger.debug(f"Loaded {len(self.catalog.courses)} courses from {self.catalog_path}")

    # -------------------------------------------------------------------------
    # Courses
    # -------------------------------------------------------------------------

    def get_courses(self) -> list[CourseDefinition]:
        """Get all courses in prerequisite order."""
        return list(self.catalog.courses)

    def get_course(self, course_id: str) -> Optional[CourseDefinition]:
        """Get a single course by ID."""
        return self.catalog.get(course_id)

    def require_course(self, course_id: str) -> CourseDefinition:
        """Get a course by ID, raising UnknownCourse if missing."""
        course = self.catalog.get(course_id)
        if course is None:
            raise UnknownCourse(course_id)
        return course

    def get_total_lessons(self, course_id: str) -> int:
        return self.require_course(course_id).total_lessons

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    def get_lesson_ids(self, course_id: str) -> list[str]:
        """Get lesson IDs for a course in course order."""
        return self.require_course(course_id).lesson_ids()

    def get_lesson_ids_by_level(self, course_id: str) -> dict[str, list[str]]:
        return self.require_course(course_id).lesson_ids_by_level()

    # -------------------------------------------------------------------------
    # Flashcards
    # -------------------------------------------------------------------------

    def get_flashcards(self, course_id: str) -> list[FlashCardSeed]:
        return list(self.require_course(course_id).flashcards)
