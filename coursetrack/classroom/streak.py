"""
Learning streak computation.

A streak is a run of consecutive calendar days with at least one completed
lesson. Both functions are pure: they take the set of active days and the
current day explicitly and reprocess the full history every call.
"""

from datetime import date, timedelta
from typing import Iterable

ONE_DAY = timedelta(days=1)


def _count_back(active: set[date], start: date) -> int:
    """Count consecutive active days walking backward from `start` (inclusive)."""
    streak = 0
    day = start
    while day in active:
        streak += 1
        day -= ONE_DAY
    return streak


def compute_current_streak(active_dates: Iterable[date], today: date) -> int:
    """
    Current streak ending today, or ending yesterday if today has no activity yet.

    A streak that ended yesterday is still open: the user can extend it
    today. Anything older is broken and counts as 0.
    """
    active = set(active_dates)
    if today in active:
        return _count_back(active, today)
    if today - ONE_DAY in active:
        return _count_back(active, today - ONE_DAY)
    return 0


def compute_longest_streak(active_dates: Iterable[date]) -> int:
    """Longest run of consecutive active days ever observed."""
    dates = sorted(set(active_dates), reverse=True)
    longest = 0
    run = 0
    for i, day in enumerate(dates):
        if i == 0 or dates[i - 1] - day == ONE_DAY:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
    return longest


def compute_streak(active_dates: Iterable[date], today: date) -> tuple[int, int]:
    """Return (current_streak, longest_streak)."""
    dates = list(active_dates)
    return compute_current_streak(dates, today), compute_longest_streak(dates)
