from pydantic import BaseModel, Field


class Pattern(BaseModel):
    id: str
    name: str
    arabic_text: str
    description: str
    level: int
    examples: list[str]


class PatternMatch(BaseModel):
    text: str
    position: int   # code-point offset into the searched text
    context: str    # up to 10 code points either side of the match


class MatchResult(BaseModel):
    pattern: Pattern
    matches: list[PatternMatch]


class FindRequest(BaseModel):
    text: str
    user_level: int = Field(default=1, ge=1)
