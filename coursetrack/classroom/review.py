"""
Flashcard review scheduling.

Fixed-interval policy: the self-reported difficulty of a review picks the
next interval (hard 1 day, medium 3 days, easy 7 days). Review history does
not change the interval; this is a deliberate simplification, not an
adaptive spaced-repetition curve.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional

from coursetrack.schemas import FlashCard, ReviewResponse
from coursetrack.utils.clock import as_aware, utc_now

from .loader import CatalogLoader
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

REVIEW_INTERVAL_DAYS = {
    ReviewResponse.HARD: 1,
    ReviewResponse.MEDIUM: 3,
    ReviewResponse.EASY: 7,
}


def get_due_card(cards: Iterable[FlashCard], now: datetime) -> Optional[FlashCard]:
    """
    Return the card due soonest, or None if no card is due.

    Cards are ordered by ascending next_review; ties keep their input order.
    """
    now = as_aware(now)
    ordered = sorted(cards, key=lambda c: c.next_review)
    if ordered and ordered[0].next_review <= now:
        return ordered[0]
    return None


def record_review(card: FlashCard, response: ReviewResponse | str, now: datetime) -> FlashCard:
    """
    Schedule the next review of a card.

    Returns a new card with last_reviewed=now and next_review pushed out by
    the interval for `response`; id, question, answer and difficulty are
    unchanged.
    """
    now = as_aware(now)
    response = ReviewResponse(response)
    interval = timedelta(days=REVIEW_INTERVAL_DAYS[response])
    return card.model_copy(update={
        "last_reviewed": now,
        "next_review": now + interval,
    })


class ReviewQueue:
    """
    A user's persisted flashcard deck.

    Seeds the deck from the catalog and applies review answers through
    record_review. A naive clock is read as local time.
    """

    def __init__(self, progress: ProgressTracker, clock: Optional[Callable[[], datetime]] = None):
        self.progress = progress
        self.clock = clock or utc_now

    def _now(self) -> datetime:
        return as_aware(self.clock())

    def seed_from_catalog(self, user_id: str, loader: CatalogLoader, course_id: str) -> int:
        """
        Add the course's catalog flashcards to the user's deck, due now.

        Cards already in the deck are left untouched.

        Returns:
            Number of cards added
        """
        now = self._now()
        existing = {card.id for card in self.progress.list_flashcards(user_id)}
        added = 0
        for seed in loader.get_flashcards(course_id):
            if seed.id in existing:
                continue
            self.progress.save_flashcard(user_id, FlashCard(
                id=seed.id,
                question=seed.question,
                answer=seed.answer,
                difficulty=seed.difficulty,
                last_reviewed=now,
                next_review=now,
            ))
            added += 1
        logger.info(f"Seeded {added} flashcards from {course_id} for {user_id}")
        return added

    def next_card(self, user_id: str) -> Optional[FlashCard]:
        return get_due_card(self.progress.list_flashcards(user_id), self._now())

    def answer(self, user_id: str, card_id: str, response: ReviewResponse | str) -> FlashCard:
        """
        Record a review answer and persist the rescheduled card.

        Raises:
            KeyError: If the card is not in the user's deck
        """
        cards = {card.id: card for card in self.progress.list_flashcards(user_id)}
        if card_id not in cards:
            raise KeyError(f"Flashcard not found: {card_id}")
        updated = record_review(cards[card_id], response, self._now())
        self.progress.save_flashcard(user_id, updated)
        logger.debug(f"Card {card_id} answered {ReviewResponse(response).value}, next review {updated.next_review}")
        return updated
