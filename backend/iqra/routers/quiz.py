"""
Quiz router.

Endpoints:
  POST /quiz/generate  — build a letter quiz for a learner level
  POST /quiz/score     — score submitted answers against a quiz
"""
from __future__ import annotations

from fastapi import APIRouter

from iqra.models.quiz import QuizQuestion, QuizRequest, QuizScore, ScoreRequest
from iqra.services.quiz_generator import calculate_score, generate_quiz

router = APIRouter()


@router.post("/generate", response_model=list[QuizQuestion])
async def generate(body: QuizRequest) -> list[QuizQuestion]:
    return generate_quiz(body.user_level, body.config)


@router.post("/score", response_model=QuizScore)
async def score(body: ScoreRequest) -> QuizScore:
    return calculate_score(body.questions, body.answers)
