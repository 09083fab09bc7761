from __future__ import annotations

import random

import pytest

from iqra.models.quiz import Difficulty, QuestionType, QuizConfig
from iqra.services.quiz_generator import (
    LETTERS,
    POINTS,
    calculate_score,
    generate_question,
    generate_quiz,
)


def test_quiz_has_requested_size_and_types():
    config = QuizConfig(
        total_questions=12,
        types=[QuestionType.MULTIPLE_CHOICE, QuestionType.WRITING],
        difficulty=Difficulty.MEDIUM,
    )

    quiz = generate_quiz(1, config, rng=random.Random(7))

    assert len(quiz) == 12
    assert {q.type for q in quiz} <= {QuestionType.MULTIPLE_CHOICE, QuestionType.WRITING}
    assert len({q.id for q in quiz}) == 12
    assert all(q.difficulty == Difficulty.MEDIUM for q in quiz)


def test_seeded_quiz_is_reproducible():
    config = QuizConfig(total_questions=5, types=list(QuestionType))

    first = generate_quiz(1, config, rng=random.Random(42))
    second = generate_quiz(1, config, rng=random.Random(42))

    assert first == second


def test_multiple_choice_question_shape():
    q = generate_question(QuestionType.MULTIPLE_CHOICE, Difficulty.HARD, rng=random.Random(1))

    assert q.id.startswith("mc-")
    assert q.question == "Which letter is this?"
    assert len(q.options) == 4
    assert len(set(q.options)) == 4
    assert q.correct_answer in q.options
    assert set(q.options) <= set(LETTERS)
    assert q.image_url == f"/letters/{q.correct_answer}.png"
    assert q.points == 30


def test_matching_question_answers_with_a_sound():
    q = generate_question(QuestionType.MATCHING, Difficulty.EASY, rng=random.Random(3))

    assert sorted(q.options) == ["alif", "ba", "ta"]
    assert q.correct_answer in q.options
    assert q.points == 15


def test_writing_question_has_no_options():
    q = generate_question(QuestionType.WRITING, Difficulty.MEDIUM, rng=random.Random(3))

    assert q.options is None
    assert q.correct_answer in LETTERS
    assert q.points == 30


def test_audio_question_points_at_letter_recording():
    q = generate_question(QuestionType.AUDIO, Difficulty.EASY, rng=random.Random(5))

    assert q.audio_url == f"/audio/letters/{q.correct_answer}.mp3"
    assert len(q.options) == 4
    assert q.correct_answer in q.options
    assert q.points == POINTS[QuestionType.AUDIO][Difficulty.EASY]


def test_config_requires_at_least_one_type():
    with pytest.raises(ValueError):
        QuizConfig(total_questions=3, types=[])


def test_score_counts_missing_answers_as_incorrect():
    config = QuizConfig(total_questions=3, types=[QuestionType.WRITING])
    quiz = generate_quiz(1, config, rng=random.Random(11))
    answers = {quiz[0].id: quiz[0].correct_answer, quiz[1].id: "wrong"}

    result = calculate_score(quiz, answers)

    assert result.score == 20
    assert result.total_possible == 60
    assert result.correct_answers == 1
    assert result.incorrect_answers == 2


def test_score_of_empty_quiz():
    result = calculate_score([], {})

    assert result.score == result.total_possible == 0
    assert result.correct_answers == result.incorrect_answers == 0
