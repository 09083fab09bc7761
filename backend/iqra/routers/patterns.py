from fastapi import APIRouter, HTTPException, Query

from iqra.models.pattern import FindRequest, MatchResult, Pattern
from iqra.services.pattern_matcher import pattern_matcher

router = APIRouter()


@router.get("/", response_model=list[Pattern])
async def list_patterns(level: int = Query(default=1, ge=1)):
    return pattern_matcher.get_patterns_by_level(level)


@router.post("/find", response_model=list[MatchResult])
async def find_patterns(body: FindRequest):
    """Locate every unlocked diacritic in a passage, with surrounding context."""
    return pattern_matcher.find_patterns_in_text(body.text, body.user_level)


@router.get("/{pattern_id}", response_model=Pattern)
async def get_pattern(pattern_id: str):
    pattern = pattern_matcher.get_pattern_by_id(pattern_id)
    if not pattern:
        raise HTTPException(status_code=404, detail="Pattern not found")
    return pattern


@router.get("/{pattern_id}/related", response_model=list[Pattern])
async def related_patterns(pattern_id: str):
    return pattern_matcher.get_related_patterns(pattern_id)


@router.get("/{pattern_id}/examples", response_model=list[str])
async def practice_examples(pattern_id: str):
    return pattern_matcher.get_practice_examples(pattern_id)
