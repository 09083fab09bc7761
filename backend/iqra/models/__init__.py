from iqra.models.pattern import FindRequest, MatchResult, Pattern, PatternMatch
from iqra.models.quiz import (
    Difficulty,
    QuestionType,
    QuizConfig,
    QuizQuestion,
    QuizRequest,
    QuizScore,
    ScoreRequest,
)
from iqra.models.review import (
    GradeRequest,
    GradeResult,
    ReviewItem,
    ReviewItemCreate,
    ReviewItemList,
    ReviewItemType,
    ReviewState,
    ReviewStats,
    ReviewStatus,
    SeedResult,
)

__all__ = [
    "Difficulty",
    "FindRequest",
    "GradeRequest",
    "GradeResult",
    "MatchResult",
    "Pattern",
    "PatternMatch",
    "QuestionType",
    "QuizConfig",
    "QuizQuestion",
    "QuizRequest",
    "QuizScore",
    "ReviewItem",
    "ReviewItemCreate",
    "ReviewItemList",
    "ReviewItemType",
    "ReviewState",
    "ReviewStats",
    "ReviewStatus",
    "ScoreRequest",
    "SeedResult",
]
