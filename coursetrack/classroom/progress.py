"""
ProgressTracker - Durable learner state in ~/.coursetrack/progress.db.

Stores, per user:
- One progress record per started course
- Append-only lesson completion audit entries
- Daily activity counters (one row per active calendar day)
- The last computed streak
- The flashcard review deck

Every sqlite3 failure is re-raised as StoreUnavailable. The lesson
completion write is a single transaction covering progress, audit entry and
activity, so a failure leaves none of them changed.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Iterator, Optional

from coursetrack.errors import StoreUnavailable
from coursetrack.schemas import (
    ActivityEntry,
    FlashCard,
    LessonCompletion,
    ProgressRecord,
    StreakRecord,
)
from coursetrack.utils.config import DEFAULT_PROGRESS_DB

logger = logging.getLogger(__name__)


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class ProgressTracker:
    """
    Track learner progress in a SQLite database.

    Progress is stored separately from the catalog so that:
    - Catalog content can change without losing progress
    - Progress is user-specific, the catalog is shared
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize progress tracker.

        Args:
            db_path: Path to progress.db (default: ~/.coursetrack/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connect() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS course_progress (
                    user_id TEXT NOT NULL,
                    course_id TEXT NOT NULL,
                    course_name TEXT NOT NULL,
                    level INTEGER NOT NULL DEFAULT 0,
                    completed_lessons JSON NOT NULL DEFAULT '[]',
                    total_lessons INTEGER NOT NULL,
                    started_at TEXT NOT NULL,
                    last_accessed TEXT NOT NULL,
                    is_completed INTEGER NOT NULL DEFAULT 0,
                    completed_at TEXT,
                    PRIMARY KEY (user_id, course_id)
                );

                CREATE TABLE IF NOT EXISTS lesson_completions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id TEXT NOT NULL,
                    course_id TEXT NOT NULL,
                    lesson_id TEXT NOT NULL,
                    completed_at TEXT NOT NULL,
                    time_spent_minutes INTEGER NOT NULL DEFAULT 0
                );

                CREATE TABLE IF NOT EXISTS activity (
                    user_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    lessons_completed INTEGER NOT NULL DEFAULT 0,
                    time_spent_minutes INTEGER NOT NULL DEFAULT 0,
                    last_activity TEXT,
                    PRIMARY KEY (user_id, date)
                );

                CREATE TABLE IF NOT EXISTS streaks (
                    user_id TEXT PRIMARY KEY,
                    current_streak INTEGER NOT NULL DEFAULT 0,
                    longest_streak INTEGER NOT NULL DEFAULT 0,
                    last_activity_date TEXT,
                    activity_dates JSON NOT NULL DEFAULT '[]'
                );

                CREATE TABLE IF NOT EXISTS flashcards (
                    user_id TEXT NOT NULL,
                    card_id TEXT NOT NULL,
                    question TEXT NOT NULL,
                    answer TEXT NOT NULL,
                    difficulty INTEGER NOT NULL DEFAULT 1,
                    last_reviewed TEXT NOT NULL,
                    next_review TEXT NOT NULL,
                    PRIMARY KEY (user_id, card_id)
                );

                CREATE INDEX IF NOT EXISTS idx_lesson_completions_user
                ON lesson_completions(user_id, course_id);
            """)
            conn.commit()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open a connection; roll back and raise StoreUnavailable on sqlite errors."""
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Cannot open progress store {self.db_path}: {e}") from e
        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailable(f"Progress store error: {e}") from e
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Course Progress
    # -------------------------------------------------------------------------

    @staticmethod
    def _row_to_progress(row: sqlite3.Row) -> ProgressRecord:
        return ProgressRecord(
            course_id=row["course_id"],
            course_name=row["course_name"],
            level=row["level"],
            completed_lessons=json.loads(row["completed_lessons"] or "[]"),
            total_lessons=row["total_lessons"],
            started_at=datetime.fromisoformat(row["started_at"]),
            last_accessed=datetime.fromisoformat(row["last_accessed"]),
            is_completed=bool(row["is_completed"]),
            completed_at=_parse_datetime(row["completed_at"]),
        )

    def get_course_progress(self, user_id: str, course_id: str) -> Optional[ProgressRecord]:
        """Get progress for one course, or None if the course was never started."""
        with self._connect() as conn:
            row = conn.execute(
                """SELECT * FROM course_progress
                   WHERE user_id = ? AND course_id = ?""",
                (user_id, course_id)
            ).fetchone()
            return self._row_to_progress(row) if row else None

    def get_all_course_progress(self, user_id: str) -> dict[str, ProgressRecord]:
        """Get progress for every started course, keyed by course ID."""
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM course_progress WHERE user_id = ?",
                (user_id,)
            )
            return {row["course_id"]: self._row_to_progress(row) for row in cursor.fetchall()}

    def _write_course_progress(self, conn: sqlite3.Connection, user_id: str, record: ProgressRecord):
        conn.execute(
            """INSERT OR REPLACE INTO course_progress (
                   user_id, course_id, course_name, level, completed_lessons,
                   total_lessons, started_at, last_accessed, is_completed, completed_at
               ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                user_id,
                record.course_id,
                record.course_name,
                record.level,
                json.dumps(record.completed_lessons),
                record.total_lessons,
                record.started_at.isoformat(),
                record.last_accessed.isoformat(),
                int(record.is_completed),
                record.completed_at.isoformat() if record.completed_at else None,
            )
        )

    def save_course_progress(self, user_id: str, record: ProgressRecord):
        """Create or replace a course progress record."""
        with self._connect() as conn:
            self._write_course_progress(conn, user_id, record)
            conn.commit()

    # -------------------------------------------------------------------------
    # Lesson Completion (atomic batch)
    # -------------------------------------------------------------------------

    def _append_completion(self, conn: sqlite3.Connection, user_id: str, completion: LessonCompletion):
        conn.execute(
            """INSERT INTO lesson_completions
                   (user_id, course_id, lesson_id, completed_at, time_spent_minutes)
               VALUES (?, ?, ?, ?, ?)""",
            (
                user_id,
                completion.course_id,
                completion.lesson_id,
                completion.completed_at.isoformat(),
                completion.time_spent_minutes,
            )
        )

    def _merge_activity(self, conn: sqlite3.Connection, user_id: str, day: date,
                        time_spent_minutes: int, now: datetime):
        conn.execute(
            """INSERT INTO activity (user_id, date, lessons_completed, time_spent_minutes, last_activity)
               VALUES (?, ?, 1, ?, ?)
               ON CONFLICT(user_id, date) DO UPDATE SET
                 lessons_completed = lessons_completed + 1,
                 time_spent_minutes = time_spent_minutes + excluded.time_spent_minutes,
                 last_activity = excluded.last_activity""",
            (user_id, day.isoformat(), time_spent_minutes, now.isoformat())
        )

    def commit_lesson_completion(self, user_id: str, record: ProgressRecord,
                                 completion: LessonCompletion, day: date):
        """
        Persist a lesson completion as one transaction.

        Writes the updated progress record, appends the audit entry and merges
        the activity counters for `day`. Either all three are applied or none.
        """
        with self._connect() as conn:
            self._write_course_progress(conn, user_id, record)
            self._append_completion(conn, user_id, completion)
            self._merge_activity(conn, user_id, day, completion.time_spent_minutes, completion.completed_at)
            conn.commit()

    def get_lesson_completions(self, user_id: str, course_id: Optional[str] = None) -> list[LessonCompletion]:
        """Get audit entries in the order they were written."""
        query = "SELECT * FROM lesson_completions WHERE user_id = ?"
        params: tuple = (user_id,)
        if course_id is not None:
            query += " AND course_id = ?"
            params = (user_id, course_id)
        with self._connect() as conn:
            cursor = conn.execute(query + " ORDER BY id", params)
            return [
                LessonCompletion(
                    course_id=row["course_id"],
                    lesson_id=row["lesson_id"],
                    completed_at=datetime.fromisoformat(row["completed_at"]),
                    time_spent_minutes=row["time_spent_minutes"],
                )
                for row in cursor.fetchall()
            ]

    # -------------------------------------------------------------------------
    # Activity Log
    # -------------------------------------------------------------------------

    def get_activity_entries(self, user_id: str) -> list[ActivityEntry]:
        """Get daily activity entries, most recent first."""
        with self._connect() as conn:
            cursor = conn.execute(
                """SELECT date, lessons_completed, time_spent_minutes, last_activity
                   FROM activity WHERE user_id = ?
                   ORDER BY date DESC""",
                (user_id,)
            )
            return [
                ActivityEntry(
                    date=date.fromisoformat(row["date"]),
                    lessons_completed=row["lessons_completed"],
                    time_spent_minutes=row["time_spent_minutes"],
                    last_activity=_parse_datetime(row["last_activity"]),
                )
                for row in cursor.fetchall()
            ]

    def get_activity_dates(self, user_id: str) -> list[date]:
        """Get every active calendar day, most recent first."""
        return [entry.date for entry in self.get_activity_entries(user_id)]

    # -------------------------------------------------------------------------
    # Streak
    # -------------------------------------------------------------------------

    def save_streak(self, user_id: str, streak: StreakRecord):
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO streaks
                       (user_id, current_streak, longest_streak, last_activity_date, activity_dates)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    user_id,
                    streak.current_streak,
                    streak.longest_streak,
                    streak.last_activity_date.isoformat() if streak.last_activity_date else None,
                    json.dumps([d.isoformat() for d in streak.activity_dates]),
                )
            )
            conn.commit()

    def get_streak(self, user_id: str) -> Optional[StreakRecord]:
        """Get the last computed streak, or None if never computed."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM streaks WHERE user_id = ?",
                (user_id,)
            ).fetchone()
            if not row:
                return None
            return StreakRecord(
                current_streak=row["current_streak"],
                longest_streak=row["longest_streak"],
                last_activity_date=_parse_datetime(row["last_activity_date"]),
                activity_dates=[date.fromisoformat(d) for d in json.loads(row["activity_dates"] or "[]")],
            )

    # -------------------------------------------------------------------------
    # Flashcards
    # -------------------------------------------------------------------------

    def save_flashcard(self, user_id: str, card: FlashCard):
        """Create or replace one flashcard in the user's deck."""
        with self._connect() as conn:
            conn.execute(
                """INSERT INTO flashcards
                       (user_id, card_id, question, answer, difficulty, last_reviewed, next_review)
                   VALUES (?, ?, ?, ?, ?, ?, ?)
                   ON CONFLICT(user_id, card_id) DO UPDATE SET
                     question = excluded.question,
                     answer = excluded.answer,
                     difficulty = excluded.difficulty,
                     last_reviewed = excluded.last_reviewed,
                     next_review = excluded.next_review""",
                (
                    user_id,
                    card.id,
                    card.question,
                    card.answer,
                    card.difficulty,
                    card.last_reviewed.isoformat(),
                    card.next_review.isoformat(),
                )
            )
            conn.commit()

    def list_flashcards(self, user_id: str) -> list[FlashCard]:
        """Get the user's deck in insertion order."""
        with self._connect() as conn:
            cursor = conn.execute(
                "SELECT * FROM flashcards WHERE user_id = ? ORDER BY rowid",
                (user_id,)
            )
            return [
                FlashCard(
                    id=row["card_id"],
                    question=row["question"],
                    answer=row["answer"],
                    difficulty=row["difficulty"],
                    last_reviewed=datetime.fromisoformat(row["last_reviewed"]),
                    next_review=datetime.fromisoformat(row["next_review"]),
                )
                for row in cursor.fetchall()
            ]
