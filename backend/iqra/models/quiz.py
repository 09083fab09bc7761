from enum import Enum

from pydantic import BaseModel, Field


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    MATCHING = "matching"
    WRITING = "writing"
    AUDIO = "audio"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuizQuestion(BaseModel):
    id: str
    type: QuestionType
    question: str
    correct_answer: str
    options: list[str] | None = None
    audio_url: str | None = None
    image_url: str | None = None
    explanation: str | None = None
    difficulty: Difficulty
    points: int


class QuizConfig(BaseModel):
    total_questions: int = Field(default=10, ge=1, le=100)
    types: list[QuestionType] = Field(min_length=1)
    difficulty: Difficulty = Difficulty.EASY
    topics: list[str] = []


class QuizRequest(BaseModel):
    user_level: int = Field(default=1, ge=1)
    config: QuizConfig


class QuizScore(BaseModel):
    score: int
    total_possible: int
    correct_answers: int
    incorrect_answers: int


class ScoreRequest(BaseModel):
    questions: list[QuizQuestion]
    answers: dict[str, str]  # question id -> submitted answer
