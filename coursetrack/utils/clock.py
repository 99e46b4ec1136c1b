"""Clock helpers shared by the engine and the review queue."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(now: datetime) -> datetime:
    """
    Attach a timezone to a naive datetime.

    Naive values are taken as system local time. Aware values are returned
    unchanged, so a clock in a local zone keeps its own calendar day.
    """
    if now.tzinfo is None:
        return now.astimezone()
    return now
