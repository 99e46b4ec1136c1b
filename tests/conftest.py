"""Shared fixtures: temporary progress store, bundled catalog, controllable clock."""

from datetime import datetime, timedelta, timezone

import pytest

from coursetrack.classroom import CatalogLoader, ProgressEngine, ProgressTracker


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def tracker(tmp_path):
    return ProgressTracker(tmp_path / "progress.db")


@pytest.fixture(scope="session")
def loader():
    return CatalogLoader()


@pytest.fixture
def engine(tracker, loader, clock):
    return ProgressEngine(tracker, loader, clock=clock)
