"""Initial review items for the letter set and the diacritic patterns."""
from __future__ import annotations

from iqra.models.review import ReviewItem, ReviewItemType
from iqra.services.pattern_matcher import PatternMatcher, pattern_matcher
from iqra.services.quiz_generator import LETTERS
from iqra.services.spaced_repetition import generate_initial_review_item, now_ms

LETTER_LEVEL = 1


def build_initial_items(
    level: int,
    now: int | None = None,
    matcher: PatternMatcher = pattern_matcher,
) -> list[ReviewItem]:
    created_at = now_ms() if now is None else now
    items: list[ReviewItem] = []
    if level >= LETTER_LEVEL:
        items.extend(
            generate_initial_review_item(
                f"letter:{letter}", ReviewItemType.LETTER, letter, LETTER_LEVEL, created_at
            )
            for letter in LETTERS
        )
    items.extend(
        generate_initial_review_item(
            f"pattern:{p.id}", ReviewItemType.PATTERN, p.arabic_text, p.level, created_at
        )
        for p in matcher.get_patterns_by_level(level)
    )
    return items
