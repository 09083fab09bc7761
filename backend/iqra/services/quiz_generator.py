"""
Quiz generation and scoring for letter-recognition practice.

Each question type draws from the first ten letters of the alphabet.
Pass a seeded random.Random to get a reproducible quiz.
"""
from __future__ import annotations

import logging
import random
from collections.abc import Mapping, Sequence

from iqra.models.quiz import (
    Difficulty,
    QuestionType,
    QuizConfig,
    QuizQuestion,
    QuizScore,
)

logger = logging.getLogger(__name__)

LETTERS = ["ا", "ب", "ت", "ث", "ج", "ح", "خ", "د", "ذ", "ر"]

LETTER_SOUNDS = [
    ("ا", "alif"),
    ("ب", "ba"),
    ("ت", "ta"),
]

POINTS: dict[QuestionType, dict[Difficulty, int]] = {
    QuestionType.MULTIPLE_CHOICE: {Difficulty.EASY: 10, Difficulty.MEDIUM: 20, Difficulty.HARD: 30},
    QuestionType.MATCHING: {Difficulty.EASY: 15, Difficulty.MEDIUM: 25, Difficulty.HARD: 35},
    QuestionType.WRITING: {Difficulty.EASY: 20, Difficulty.MEDIUM: 30, Difficulty.HARD: 40},
    QuestionType.AUDIO: {Difficulty.EASY: 15, Difficulty.MEDIUM: 25, Difficulty.HARD: 35},
}

_ID_PREFIX = {
    QuestionType.MULTIPLE_CHOICE: "mc",
    QuestionType.MATCHING: "match",
    QuestionType.WRITING: "write",
    QuestionType.AUDIO: "audio",
}


class UnsupportedQuestionTypeError(ValueError):
    """Raised when a quiz asks for a question type with no builder."""


def _letter_image(letter: str) -> str:
    return f"/letters/{letter}.png"


def _shuffled(options: list[str], rng: random.Random) -> list[str]:
    rng.shuffle(options)
    return options


def _multiple_choice(qid: str, difficulty: Difficulty, rng: random.Random) -> QuizQuestion:
    letter = rng.choice(LETTERS)
    wrong = rng.sample([other for other in LETTERS if other != letter], 3)
    return QuizQuestion(
        id=qid,
        type=QuestionType.MULTIPLE_CHOICE,
        question="Which letter is this?",
        correct_answer=letter,
        options=_shuffled(wrong + [letter], rng),
        image_url=_letter_image(letter),
        difficulty=difficulty,
        points=POINTS[QuestionType.MULTIPLE_CHOICE][difficulty],
    )


def _matching(qid: str, difficulty: Difficulty, rng: random.Random) -> QuizQuestion:
    letter, sound = rng.choice(LETTER_SOUNDS)
    return QuizQuestion(
        id=qid,
        type=QuestionType.MATCHING,
        question="Match the letter with its correct sound:",
        correct_answer=sound,
        options=_shuffled([s for _, s in LETTER_SOUNDS], rng),
        image_url=_letter_image(letter),
        difficulty=difficulty,
        points=POINTS[QuestionType.MATCHING][difficulty],
    )


def _writing(qid: str, difficulty: Difficulty, rng: random.Random) -> QuizQuestion:
    letter = rng.choice(LETTERS)
    return QuizQuestion(
        id=qid,
        type=QuestionType.WRITING,
        question="Write this letter:",
        correct_answer=letter,
        image_url=_letter_image(letter),
        difficulty=difficulty,
        points=POINTS[QuestionType.WRITING][difficulty],
    )


def _audio(qid: str, difficulty: Difficulty, rng: random.Random) -> QuizQuestion:
    letter = rng.choice(LETTERS)
    others = [other for other in LETTERS if other != letter][:3]
    return QuizQuestion(
        id=qid,
        type=QuestionType.AUDIO,
        question="Listen and select the correct letter:",
        correct_answer=letter,
        options=_shuffled(others + [letter], rng),
        audio_url=f"/audio/letters/{letter}.mp3",
        difficulty=difficulty,
        points=POINTS[QuestionType.AUDIO][difficulty],
    )


_BUILDERS = {
    QuestionType.MULTIPLE_CHOICE: _multiple_choice,
    QuestionType.MATCHING: _matching,
    QuestionType.WRITING: _writing,
    QuestionType.AUDIO: _audio,
}


def generate_question(
    question_type: QuestionType,
    difficulty: Difficulty,
    index: int = 0,
    rng: random.Random | None = None,
) -> QuizQuestion:
    rng = rng or random.Random()
    builder = _BUILDERS.get(question_type)
    if builder is None:
        raise UnsupportedQuestionTypeError(f"Unsupported question type: {question_type}")
    qid = f"{_ID_PREFIX[question_type]}-{index + 1}-{rng.getrandbits(32):08x}"
    return builder(qid, difficulty, rng)


def generate_quiz(
    user_level: int,
    config: QuizConfig,
    rng: random.Random | None = None,
) -> list[QuizQuestion]:
    """
    Build config.total_questions questions, each of a type picked uniformly
    from config.types.

    user_level is accepted for the curriculum-aware builders; the current
    letter pool is the same at every level.
    """
    if not config.types:
        raise UnsupportedQuestionTypeError("Quiz config must name at least one question type")
    rng = rng or random.Random()
    questions = [
        generate_question(rng.choice(config.types), config.difficulty, i, rng)
        for i in range(config.total_questions)
    ]
    logger.debug(
        "Generated %d questions for level %d (%s)",
        len(questions), user_level, config.difficulty.value,
    )
    return questions


def calculate_score(
    questions: Sequence[QuizQuestion], answers: Mapping[str, str]
) -> QuizScore:
    score = 0
    correct = 0
    incorrect = 0
    for question in questions:
        if answers.get(question.id) == question.correct_answer:
            score += question.points
            correct += 1
        else:
            incorrect += 1
    return QuizScore(
        score=score,
        total_possible=sum(q.points for q in questions),
        correct_answers=correct,
        incorrect_answers=incorrect,
    )
