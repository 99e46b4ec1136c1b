"""
coursetrack command line.

Usage:
  coursetrack courses
  coursetrack start html
  coursetrack complete html html-1 --minutes 12
  coursetrack streak
  coursetrack stats --user alice
  coursetrack review --course html
  coursetrack review --card html-fc-1 --response easy
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from coursetrack.classroom import (
    CatalogLoader,
    Navigator,
    ProgressEngine,
    ProgressTracker,
    ReviewQueue,
)
from coursetrack.errors import CourseTrackError
from coursetrack.schemas import ReviewResponse
from coursetrack.utils.config import Settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coursetrack",
        description="Track course progress, learning streaks and flashcard reviews",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--user", default="default", help="User ID (default: default)")
    parser.add_argument("--db", type=Path, default=None, help="Progress database (default: from environment)")
    parser.add_argument("--catalog", type=Path, default=None, help="Catalog YAML (default: from environment)")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("courses", help="List courses with lock status")

    start = sub.add_parser("start", help="Start a course")
    start.add_argument("course")
    start.add_argument("--reset", action="store_true", help="Discard existing progress for the course")

    complete = sub.add_parser("complete", help="Complete a lesson")
    complete.add_argument("course")
    complete.add_argument("lesson")
    complete.add_argument("--minutes", type=int, default=0, help="Time spent on the lesson")

    sub.add_parser("streak", help="Recompute and show the learning streak")
    sub.add_parser("stats", help="Show dashboard stats")

    review = sub.add_parser("review", help="Show the next due flashcard or answer one")
    review.add_argument("--course", default=None, help="Seed the deck from this course's flashcards first")
    review.add_argument("--card", default=None, help="Card ID to answer")
    review.add_argument(
        "--response",
        choices=[r.value for r in ReviewResponse],
        default=None,
        help="How hard the card was",
    )

    return parser


def run(args: argparse.Namespace, settings: Settings) -> None:
    loader = CatalogLoader(args.catalog or settings.catalog_path)
    tracker = ProgressTracker(args.db or settings.db_path)
    engine = ProgressEngine(tracker, loader)

    if args.command == "courses":
        nav = Navigator(loader, tracker, args.user)
        for item in nav.get_navigation_tree():
            print(
                f"{nav.get_status_indicator(item.course.id)} {item.course.id:<12} "
                f"{item.completed_count}/{item.total_count} lessons, level {item.level} "
                f"({item.availability.value})"
            )

    elif args.command == "start":
        record = engine.start_catalog_course(args.user, args.course, allow_reset=args.reset)
        print(f"{record.course_name}: {record.completed_count}/{record.total_lessons} lessons")

    elif args.command == "complete":
        record = engine.complete_lesson(args.user, args.course, args.lesson, args.minutes)
        status = "completed" if record.is_completed else f"level {record.level}"
        print(f"{record.course_name}: {record.completed_count}/{record.total_lessons} lessons, {status}")

    elif args.command == "streak":
        streak = engine.recompute_streak(args.user)
        print(f"Current streak: {streak.current_streak} days (longest: {streak.longest_streak})")

    elif args.command == "stats":
        stats = engine.get_dashboard_stats(args.user)
        for key, value in stats.model_dump().items():
            print(f"{key}: {value}")

    elif args.command == "review":
        queue = ReviewQueue(tracker)
        if args.course:
            queue.seed_from_catalog(args.user, loader, args.course)
        if args.card and args.response:
            card = queue.answer(args.user, args.card, args.response)
            print(f"{card.id}: next review {card.next_review.isoformat()}")
        else:
            card = queue.next_card(args.user)
            if card is None:
                print("No cards due.")
            else:
                print(f"[{card.id}] {card.question}")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    try:
        run(args, settings)
    except (CourseTrackError, KeyError, FileNotFoundError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
