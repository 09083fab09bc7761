"""
Diacritic pattern lookup and matching over Arabic text.

Positions and context windows are measured in code points, so a harakah
following its base letter is its own position.
"""
from __future__ import annotations

from collections.abc import Iterable

from iqra.models.pattern import MatchResult, Pattern, PatternMatch

CONTEXT_CHARS = 10

DEFAULT_PATTERNS = [
    Pattern(
        id="fatha",
        name="Fatha",
        arabic_text="\u064e",
        description='Short vowel mark for "a" sound',
        level=1,
        examples=["بَ", "تَ", "ثَ"],
    ),
    Pattern(
        id="kasra",
        name="Kasra",
        arabic_text="\u0650",
        description='Short vowel mark for "i" sound',
        level=1,
        examples=["بِ", "تِ", "ثِ"],
    ),
    Pattern(
        id="damma",
        name="Damma",
        arabic_text="\u064f",
        description='Short vowel mark for "u" sound',
        level=1,
        examples=["بُ", "تُ", "ثُ"],
    ),
]


def find_matches(text: str, needle: str) -> list[PatternMatch]:
    matches: list[PatternMatch] = []
    if not needle:
        return matches
    position = text.find(needle)
    while position != -1:
        start = max(0, position - CONTEXT_CHARS)
        end = min(len(text), position + len(needle) + CONTEXT_CHARS)
        matches.append(
            PatternMatch(text=needle, position=position, context=text[start:end])
        )
        position = text.find(needle, position + 1)
    return matches


class PatternMatcher:
    def __init__(self, patterns: Iterable[Pattern] | None = None) -> None:
        self.patterns = list(DEFAULT_PATTERNS if patterns is None else patterns)

    def find_patterns_in_text(self, text: str, user_level: int) -> list[MatchResult]:
        """Return every pattern unlocked at user_level that occurs in text."""
        results: list[MatchResult] = []
        for pattern in self.get_patterns_by_level(user_level):
            matches = find_matches(text, pattern.arabic_text)
            if matches:
                results.append(MatchResult(pattern=pattern, matches=matches))
        return results

    def get_patterns_by_level(self, level: int) -> list[Pattern]:
        return [p for p in self.patterns if p.level <= level]

    def get_pattern_by_id(self, pattern_id: str) -> Pattern | None:
        return next((p for p in self.patterns if p.id == pattern_id), None)

    def get_related_patterns(self, pattern_id: str) -> list[Pattern]:
        """Patterns taught at the same level, which tend to appear together."""
        pattern = self.get_pattern_by_id(pattern_id)
        if pattern is None:
            return []
        return [
            p for p in self.patterns if p.level == pattern.level and p.id != pattern_id
        ]

    def get_practice_examples(self, pattern_id: str) -> list[str]:
        pattern = self.get_pattern_by_id(pattern_id)
        return list(pattern.examples) if pattern else []


pattern_matcher = PatternMatcher()
