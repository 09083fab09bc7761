from enum import Enum

from pydantic import BaseModel, Field


class ReviewItemType(str, Enum):
    LETTER = "letter"
    PATTERN = "pattern"
    WORD = "word"


class ReviewState(str, Enum):
    DUE = "due"
    UPCOMING = "upcoming"
    LEARNED = "learned"


class ReviewItem(BaseModel):
    id: str
    type: ReviewItemType
    content: str
    level: int
    last_reviewed: int      # ms since epoch, 0 = never reviewed
    next_review: int        # ms since epoch
    interval: int           # ms; 0 until the first successful review
    ease_factor: float
    consecutive_correct: int


class ReviewItemCreate(BaseModel):
    id: str
    type: ReviewItemType
    content: str
    level: int = 1


class ReviewItemList(BaseModel):
    items: list[ReviewItem]
    total: int


class ReviewStatus(BaseModel):
    days_until_review: int
    status: ReviewState
    progress: float         # percent toward the learned threshold


class GradeRequest(BaseModel):
    quality: int = Field(ge=0, le=5)  # 5 = perfect recall, 0 = blackout


class GradeResult(BaseModel):
    item: ReviewItem
    status: ReviewStatus


class SeedResult(BaseModel):
    level: int
    created: int
    total: int


class ReviewStats(BaseModel):
    total_items: int
    due_now: int
    learned: int
    reviewed_today: int
    average_quality_today: float | None
