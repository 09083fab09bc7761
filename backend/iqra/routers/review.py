"""
Spaced-repetition review router.

Endpoints:
  POST /review/items           — register a learnable unit as a fresh review item
  POST /review/items/seed      — load the letter and pattern curriculum up to a level
  GET  /review/items           — list stored items (optionally filtered by type)
  GET  /review/items/{id}      — single item
  GET  /review/due             — the session work queue, most overdue first
  POST /review/{id}/grade      — submit a 0–5 quality rating, run SM-2
                                 (409 if a concurrent review saved first)
  GET  /review/{id}/status     — due / upcoming / learned with progress
  GET  /review/stats           — collection totals and today's activity
"""
from __future__ import annotations

import logging

import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Query

from iqra.config import settings
from iqra.db.sqlite import (
    create_review_item,
    get_db,
    get_review_item,
    get_review_stats,
    insert_review_items,
    list_review_items,
    load_review_items,
    save_review,
)
from iqra.models.review import (
    GradeRequest,
    GradeResult,
    ReviewItem,
    ReviewItemCreate,
    ReviewItemList,
    ReviewItemType,
    ReviewStats,
    ReviewStatus,
    SeedResult,
)
from iqra.services.curriculum import build_initial_items
from iqra.services.spaced_repetition import (
    calculate_next_review,
    generate_initial_review_item,
    get_due_items,
    get_review_status,
    now_ms,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/items", response_model=ReviewItem, status_code=201)
async def create_item(
    body: ReviewItemCreate,
    db: aiosqlite.Connection = Depends(get_db),
) -> ReviewItem:
    item = generate_initial_review_item(body.id, body.type, body.content, body.level)
    created = await create_review_item(db, item)
    if created is None:
        raise HTTPException(status_code=409, detail="Review item already exists")
    return created


@router.post("/items/seed", response_model=SeedResult)
async def seed_items(
    level: int = Query(default=1, ge=1),
    db: aiosqlite.Connection = Depends(get_db),
) -> SeedResult:
    """Create initial items for the curriculum up to `level`; existing ids are kept."""
    items = build_initial_items(level)
    created = await insert_review_items(db, items)
    logger.info("Seeded %d of %d curriculum items (level %d)", created, len(items), level)
    return SeedResult(level=level, created=created, total=len(items))


@router.get("/items", response_model=ReviewItemList)
async def list_items(
    item_type: ReviewItemType | None = Query(default=None, alias="type"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    db: aiosqlite.Connection = Depends(get_db),
) -> ReviewItemList:
    items, total = await list_review_items(db, offset=offset, limit=limit, item_type=item_type)
    return ReviewItemList(items=items, total=total)


@router.get("/items/{item_id}", response_model=ReviewItem)
async def get_item(
    item_id: str,
    db: aiosqlite.Connection = Depends(get_db),
) -> ReviewItem:
    item = await get_review_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Review item not found")
    return item


@router.get("/due", response_model=ReviewItemList)
async def get_due(
    limit: int | None = Query(default=None, ge=1, le=500),
    item_type: ReviewItemType | None = Query(default=None, alias="type"),
    db: aiosqlite.Connection = Depends(get_db),
) -> ReviewItemList:
    """Return due items, most overdue first. `total` counts all due items."""
    due = get_due_items(await load_review_items(db, item_type=item_type))
    page = due[: limit or settings.due_limit]
    return ReviewItemList(items=page, total=len(due))


@router.post("/{item_id}/grade", response_model=GradeResult)
async def grade_item(
    item_id: str,
    body: GradeRequest,
    db: aiosqlite.Connection = Depends(get_db),
) -> GradeResult:
    item = await get_review_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Review item not found")

    # GradeRequest already bounds quality to 0..5.
    now = now_ms()
    updated = calculate_next_review(item, body.quality, now=now)

    saved = await save_review(db, item, updated, body.quality)
    if not saved:
        logger.warning("Concurrent review of %s rejected", item_id)
        raise HTTPException(
            status_code=409, detail="Review item was updated by another review"
        )

    logger.info(
        "Reviewed %s quality=%d interval=%dms ease=%.2f streak=%d",
        item_id, body.quality, saved.interval, saved.ease_factor, saved.consecutive_correct,
    )
    return GradeResult(item=saved, status=get_review_status(saved, now=now))


@router.get("/{item_id}/status", response_model=ReviewStatus)
async def item_status(
    item_id: str,
    db: aiosqlite.Connection = Depends(get_db),
) -> ReviewStatus:
    item = await get_review_item(db, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Review item not found")
    return get_review_status(item)


@router.get("/stats", response_model=ReviewStats)
async def review_stats(db: aiosqlite.Connection = Depends(get_db)) -> ReviewStats:
    return await get_review_stats(db, now_ms())
