from __future__ import annotations

import pytest

from iqra.models.review import ReviewItem, ReviewItemType, ReviewState
from iqra.services.spaced_repetition import (
    DAY_MS,
    INITIAL_EASE_FACTOR,
    MAX_INTERVAL,
    MIN_EASE_FACTOR,
    MIN_INTERVAL,
    InvalidQualityError,
    calculate_next_review,
    generate_initial_review_item,
    get_due_items,
    get_review_status,
)

NOW = 1_700_000_000_000


def _item(**overrides) -> ReviewItem:
    fields = dict(
        id="letter:ب",
        type=ReviewItemType.LETTER,
        content="ب",
        level=1,
        last_reviewed=0,
        next_review=NOW,
        interval=0,
        ease_factor=INITIAL_EASE_FACTOR,
        consecutive_correct=0,
    )
    fields.update(overrides)
    return ReviewItem(**fields)


def test_first_perfect_review_schedules_one_day_out():
    updated = calculate_next_review(_item(), 5, now=NOW)

    assert updated.interval == 86_400_000
    assert updated.consecutive_correct == 1
    assert updated.ease_factor == pytest.approx(2.6)
    assert updated.last_reviewed == NOW
    assert updated.next_review == NOW + 86_400_000


def test_failed_review_resets_interval_and_streak():
    item = _item(interval=86_400_000, consecutive_correct=1)

    updated = calculate_next_review(item, 2, now=NOW)

    assert updated.interval == MIN_INTERVAL
    assert updated.consecutive_correct == 0
    assert updated.ease_factor == pytest.approx(2.18)
    assert updated.ease_factor < 2.5


def test_failure_resets_even_a_long_streak():
    item = _item(interval=40 * DAY_MS, consecutive_correct=9)

    updated = calculate_next_review(item, 0, now=NOW)

    assert updated.interval == MIN_INTERVAL
    assert updated.consecutive_correct == 0


def test_interval_is_capped_at_one_year():
    item = _item(interval=315_360_000_000)

    updated = calculate_next_review(item, 5, now=NOW)

    assert updated.interval == MAX_INTERVAL == 31_536_000_000
    assert updated.next_review == NOW + MAX_INTERVAL


def test_successful_review_grows_interval_by_new_ease_factor():
    item = _item(interval=6 * DAY_MS, consecutive_correct=2)

    updated = calculate_next_review(item, 4, now=NOW)

    assert updated.interval == round(6 * DAY_MS * updated.ease_factor)
    assert updated.interval >= item.interval
    assert updated.consecutive_correct == 3


def test_ease_factor_never_drops_below_floor():
    item = _item(ease_factor=MIN_EASE_FACTOR, interval=3 * DAY_MS)
    for quality in range(6):
        assert calculate_next_review(item, quality, now=NOW).ease_factor >= MIN_EASE_FACTOR

    item = _item(ease_factor=1.35)
    assert calculate_next_review(item, 0, now=NOW).ease_factor == MIN_EASE_FACTOR


def test_next_review_is_last_reviewed_plus_interval():
    item = _item()
    for step, quality in enumerate([5, 4, 3, 1, 5, 5]):
        item = calculate_next_review(item, quality, now=NOW + step * DAY_MS)
        assert item.next_review == item.last_reviewed + item.interval


def test_input_item_is_not_mutated():
    item = _item(interval=2 * DAY_MS, consecutive_correct=1)

    updated = calculate_next_review(item, 5, now=NOW)

    assert item.interval == 2 * DAY_MS
    assert item.consecutive_correct == 1
    assert item.last_reviewed == 0
    assert (updated.id, updated.type, updated.content, updated.level) == (
        item.id, item.type, item.content, item.level,
    )


@pytest.mark.parametrize("quality", [-1, 6, 2.5, "5", True])
def test_out_of_range_quality_is_rejected(quality):
    with pytest.raises(InvalidQualityError):
        calculate_next_review(_item(), quality, now=NOW)


def test_due_items_are_filtered_and_sorted_most_overdue_first():
    items = [
        _item(id="a", next_review=NOW - 1_000),
        _item(id="b", next_review=NOW + 1_000),
        _item(id="c", next_review=NOW - 5 * DAY_MS),
        _item(id="d", next_review=NOW),
    ]

    due = get_due_items(items, now=NOW)

    assert [i.id for i in due] == ["c", "a", "d"]
    assert [i.id for i in items] == ["a", "b", "c", "d"]


def test_due_items_of_empty_collection():
    assert get_due_items([], now=NOW) == []


def test_status_due_takes_precedence_over_learned():
    item = _item(next_review=NOW - DAY_MS, consecutive_correct=7)

    status = get_review_status(item, now=NOW)

    assert status.status == ReviewState.DUE
    assert status.days_until_review == 0
    assert status.progress == 100


def test_status_learned_and_upcoming():
    learned = _item(next_review=NOW + int(1.5 * DAY_MS), consecutive_correct=5)
    upcoming = _item(next_review=NOW + 10, consecutive_correct=2)

    learned_status = get_review_status(learned, now=NOW)
    upcoming_status = get_review_status(upcoming, now=NOW)

    assert learned_status.status == ReviewState.LEARNED
    assert learned_status.days_until_review == 2
    assert upcoming_status.status == ReviewState.UPCOMING
    assert upcoming_status.days_until_review == 1
    assert upcoming_status.progress == pytest.approx(40)


def test_initial_item_defaults_and_is_immediately_due():
    item = generate_initial_review_item("pattern:fatha", "pattern", "\u064e", 1, now=NOW)

    assert item.type == ReviewItemType.PATTERN
    assert item.last_reviewed == 0
    assert item.next_review == NOW
    assert item.interval == 0
    assert item.ease_factor == INITIAL_EASE_FACTOR
    assert item.consecutive_correct == 0

    status = get_review_status(item, now=NOW)
    assert status.status == ReviewState.DUE
    assert status.progress == 0


def test_item_cycles_from_new_to_learned_and_back():
    item = generate_initial_review_item("word:1", ReviewItemType.WORD, "بَيت", 2, now=NOW)
    now = NOW
    for _ in range(5):
        item = calculate_next_review(item, 5, now=now)
        now = item.next_review

    assert get_review_status(item, now=item.last_reviewed).status == ReviewState.LEARNED

    item = calculate_next_review(item, 1, now=now)
    assert item.interval == MIN_INTERVAL
    assert get_review_status(item, now=now).status == ReviewState.UPCOMING
