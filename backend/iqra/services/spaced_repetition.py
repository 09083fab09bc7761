"""
SM-2 style spaced-repetition scheduler.

All functions are pure: they never mutate their inputs and never touch storage.
Each takes an optional ``now`` (milliseconds since the epoch); when omitted the
wall clock is read, which is the only source of non-determinism.

Quality scale:
  5 perfect recall, 4 correct after a hesitation, 3 correct with difficulty,
  2 incorrect but remembered after seeing, 1 incorrect but familiar,
  0 complete blackout.
"""
from __future__ import annotations

import math
import time
from collections.abc import Iterable

from iqra.models.review import ReviewItem, ReviewItemType, ReviewState, ReviewStatus

DAY_MS = 24 * 60 * 60 * 1000
MIN_INTERVAL = DAY_MS
MAX_INTERVAL = 365 * DAY_MS
MIN_EASE_FACTOR = 1.3
INITIAL_EASE_FACTOR = 2.5
LEARNED_THRESHOLD = 5       # consecutive correct reviews before an item counts as learned
PASSING_QUALITY = 3
MAX_QUALITY = 5


class InvalidQualityError(ValueError):
    """Raised when a recall-quality rating is not an integer in 0..5."""


def now_ms() -> int:
    return int(time.time() * 1000)


def _check_quality(quality: int) -> None:
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQualityError(f"quality must be an integer, got {quality!r}")
    if not 0 <= quality <= MAX_QUALITY:
        raise InvalidQualityError(f"quality must be between 0 and 5, got {quality}")


def next_ease_factor(ease_factor: float, quality: int) -> float:
    miss = MAX_QUALITY - quality
    return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def calculate_next_review(
    item: ReviewItem, quality: int, now: int | None = None
) -> ReviewItem:
    """
    Apply one review with the given quality and return the rescheduled item.

    A rating below 3 resets the streak and drops the interval back to one day.
    Otherwise the streak grows and the interval is multiplied by the new ease
    factor, capped at one year. Out-of-range ratings raise InvalidQualityError.
    """
    _check_quality(quality)
    reviewed_at = now_ms() if now is None else now

    ease_factor = next_ease_factor(item.ease_factor, quality)
    if quality < PASSING_QUALITY:
        interval = MIN_INTERVAL
        consecutive_correct = 0
    else:
        consecutive_correct = item.consecutive_correct + 1
        if item.interval == 0:
            interval = MIN_INTERVAL
        else:
            interval = min(round(item.interval * ease_factor), MAX_INTERVAL)

    return item.model_copy(
        update={
            "last_reviewed": reviewed_at,
            "next_review": reviewed_at + interval,
            "interval": interval,
            "ease_factor": ease_factor,
            "consecutive_correct": consecutive_correct,
        }
    )


def get_due_items(
    items: Iterable[ReviewItem], now: int | None = None
) -> list[ReviewItem]:
    """Return items whose next review has passed, most overdue first."""
    cutoff = now_ms() if now is None else now
    return sorted(
        (item for item in items if item.next_review <= cutoff),
        key=lambda item: item.next_review,
    )


def get_review_status(item: ReviewItem, now: int | None = None) -> ReviewStatus:
    current = now_ms() if now is None else now
    days_until_review = max(0, math.ceil((item.next_review - current) / DAY_MS))

    # Due wins over learned: an overdue item is reviewed regardless of its streak.
    if item.next_review <= current:
        status = ReviewState.DUE
    elif item.consecutive_correct >= LEARNED_THRESHOLD:
        status = ReviewState.LEARNED
    else:
        status = ReviewState.UPCOMING

    progress = min(item.consecutive_correct / LEARNED_THRESHOLD * 100, 100.0)
    return ReviewStatus(
        days_until_review=days_until_review, status=status, progress=progress
    )


def generate_initial_review_item(
    item_id: str,
    item_type: ReviewItemType,
    content: str,
    level: int,
    now: int | None = None,
) -> ReviewItem:
    return ReviewItem(
        id=item_id,
        type=item_type,
        content=content,
        level=level,
        last_reviewed=0,
        next_review=now_ms() if now is None else now,
        interval=0,
        ease_factor=INITIAL_EASE_FACTOR,
        consecutive_correct=0,
    )
