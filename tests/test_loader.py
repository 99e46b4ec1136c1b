"""Tests for the catalog loader and the bundled catalog."""

import pytest

from coursetrack.classroom import CatalogLoader
from coursetrack.errors import UnknownCourse


class TestBundledCatalog:

    def test_course_order(self, loader):
        assert [c.id for c in loader.get_courses()] == [
            "html", "css", "javascript", "php", "laravel", "react",
        ]

    def test_lesson_totals(self, loader):
        totals = {c.id: c.total_lessons for c in loader.get_courses()}
        assert totals == {
            "html": 45,
            "css": 60,
            "javascript": 75,
            "php": 80,
            "laravel": 90,
            "react": 85,
        }

    def test_level_descriptions_survive_commas(self, loader):
        level = loader.require_course("html").levels[1]
        assert level.description == "Forms, tables, and semantic HTML"

    def test_lesson_ids(self, loader):
        by_level = loader.get_lesson_ids_by_level("html")
        assert by_level["beginner"][0] == "html-1"
        assert by_level["intermediate"][0] == "html-16"
        assert loader.get_lesson_ids("javascript")[50] == "js-51"

    def test_flashcards(self, loader):
        cards = loader.get_flashcards("html")
        assert [c.id for c in cards] == ["html-fc-1", "html-fc-2", "html-fc-3"]
        assert loader.get_flashcards("css") == []

    def test_unknown_course(self, loader):
        assert loader.get_course("cobol") is None
        with pytest.raises(UnknownCourse):
            loader.get_total_lessons("cobol")


class TestCustomCatalog:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CatalogLoader(tmp_path / "nope.yaml")

    def test_loads_custom_file(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(
            "courses:\n"
            "  - id: go\n"
            "    name: Go\n"
            "    levels:\n"
            "      - {id: basics, name: Basics, lessons: 4}\n",
            encoding="utf-8",
        )
        loader = CatalogLoader(path)
        assert loader.get_total_lessons("go") == 4

    def test_invalid_catalog(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("courses:\n  - id: go\n    name: Go\n    levels: []\n", encoding="utf-8")
        with pytest.raises(ValueError):
            CatalogLoader(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            CatalogLoader(path)
