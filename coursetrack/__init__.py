"""coursetrack - course progress, learning streaks, unlocking and flashcard review."""

__version__ = "0.1.0"
