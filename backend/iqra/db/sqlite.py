import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import AsyncIterator

import aiosqlite

from iqra.config import settings
from iqra.models.review import ReviewItem, ReviewItemType, ReviewStats
from iqra.services.spaced_repetition import DAY_MS, LEARNED_THRESHOLD

_db_path: Path | None = None

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA foreign_keys=ON;

CREATE TABLE IF NOT EXISTS review_items (
    id                  TEXT PRIMARY KEY,
    type                TEXT NOT NULL,
    content             TEXT NOT NULL,
    level               INTEGER NOT NULL DEFAULT 1,
    last_reviewed       INTEGER NOT NULL DEFAULT 0,
    next_review         INTEGER NOT NULL,
    interval            INTEGER NOT NULL DEFAULT 0,
    ease_factor         REAL NOT NULL DEFAULT 2.5,
    consecutive_correct INTEGER NOT NULL DEFAULT 0,
    created_at          TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at          TEXT NOT NULL DEFAULT (datetime('now'))
);
CREATE INDEX IF NOT EXISTS idx_review_items_next ON review_items(next_review);
CREATE INDEX IF NOT EXISTS idx_review_items_type ON review_items(type);

CREATE TABLE IF NOT EXISTS review_log (
    id          TEXT PRIMARY KEY,
    item_id     TEXT NOT NULL REFERENCES review_items(id) ON DELETE CASCADE,
    quality     INTEGER NOT NULL,
    reviewed_at INTEGER NOT NULL,
    interval    INTEGER NOT NULL,
    ease_factor REAL NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_review_log_item ON review_log(item_id);
CREATE INDEX IF NOT EXISTS idx_review_log_time ON review_log(reviewed_at);

CREATE TABLE IF NOT EXISTS schema_version (
    version    INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
INSERT OR IGNORE INTO schema_version(version) VALUES (1);
"""

_ITEM_COLUMNS = (
    "id, type, content, level, last_reviewed, next_review, "
    "interval, ease_factor, consecutive_correct"
)


async def init_sqlite(data_dir: Path) -> None:
    global _db_path
    _db_path = data_dir / settings.sqlite_filename
    async with aiosqlite.connect(_db_path) as db:
        await db.executescript(SCHEMA_SQL)
        await db.commit()


async def get_db() -> AsyncIterator[aiosqlite.Connection]:
    assert _db_path is not None, "SQLite not initialized"
    async with aiosqlite.connect(_db_path) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys=ON")
        yield db


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def _row_to_item(row: aiosqlite.Row) -> ReviewItem:
    return ReviewItem(**dict(row))


def _item_params(item: ReviewItem) -> tuple:
    return (
        item.id,
        item.type.value,
        item.content,
        item.level,
        item.last_reviewed,
        item.next_review,
        item.interval,
        item.ease_factor,
        item.consecutive_correct,
    )


# --- Review items ---

async def create_review_item(
    db: aiosqlite.Connection, item: ReviewItem
) -> ReviewItem | None:
    """Insert a new item. Returns None if an item with the same id exists."""
    now = _now()
    cursor = await db.execute(
        f"""INSERT OR IGNORE INTO review_items
            ({_ITEM_COLUMNS}, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
        (*_item_params(item), now, now),
    )
    await db.commit()
    if cursor.rowcount == 0:
        return None
    return await get_review_item(db, item.id)


async def insert_review_items(
    db: aiosqlite.Connection, items: list[ReviewItem]
) -> int:
    """Bulk insert, skipping ids that already exist. Returns rows inserted."""
    now = _now()
    inserted = 0
    for item in items:
        cursor = await db.execute(
            f"""INSERT OR IGNORE INTO review_items
                ({_ITEM_COLUMNS}, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (*_item_params(item), now, now),
        )
        inserted += cursor.rowcount
    await db.commit()
    return inserted


async def get_review_item(db: aiosqlite.Connection, item_id: str) -> ReviewItem | None:
    cursor = await db.execute(
        f"SELECT {_ITEM_COLUMNS} FROM review_items WHERE id = ?", (item_id,)
    )
    row = await cursor.fetchone()
    return _row_to_item(row) if row else None


async def list_review_items(
    db: aiosqlite.Connection,
    offset: int = 0,
    limit: int = 50,
    item_type: ReviewItemType | None = None,
) -> tuple[list[ReviewItem], int]:
    if item_type:
        cursor = await db.execute(
            f"""SELECT {_ITEM_COLUMNS} FROM review_items WHERE type = ?
                ORDER BY level ASC, created_at ASC, id ASC LIMIT ? OFFSET ?""",
            (item_type.value, limit, offset),
        )
        count_cursor = await db.execute(
            "SELECT COUNT(*) FROM review_items WHERE type = ?", (item_type.value,)
        )
    else:
        cursor = await db.execute(
            f"""SELECT {_ITEM_COLUMNS} FROM review_items
                ORDER BY level ASC, created_at ASC, id ASC LIMIT ? OFFSET ?""",
            (limit, offset),
        )
        count_cursor = await db.execute("SELECT COUNT(*) FROM review_items")
    rows = await cursor.fetchall()
    total = (await count_cursor.fetchone())[0]
    return [_row_to_item(r) for r in rows], total


async def load_review_items(
    db: aiosqlite.Connection, item_type: ReviewItemType | None = None
) -> list[ReviewItem]:
    """Load a learner's whole collection; the scheduler filters it in memory."""
    if item_type:
        cursor = await db.execute(
            f"SELECT {_ITEM_COLUMNS} FROM review_items WHERE type = ?",
            (item_type.value,),
        )
    else:
        cursor = await db.execute(f"SELECT {_ITEM_COLUMNS} FROM review_items")
    rows = await cursor.fetchall()
    return [_row_to_item(r) for r in rows]


async def save_review(
    db: aiosqlite.Connection, previous: ReviewItem, item: ReviewItem, quality: int
) -> ReviewItem | None:
    """
    Persist a rescheduled item and append the review to the log.

    The update only applies if the stored row still matches `previous`, the
    state the new schedule was computed from. Returns None when another review
    of the same item got there first.
    """
    await db.execute("BEGIN IMMEDIATE")
    cursor = await db.execute(
        """UPDATE review_items
           SET last_reviewed = ?, next_review = ?, interval = ?, ease_factor = ?,
               consecutive_correct = ?, updated_at = ?
           WHERE id = ? AND last_reviewed = ? AND next_review = ?
             AND consecutive_correct = ?""",
        (
            item.last_reviewed,
            item.next_review,
            item.interval,
            item.ease_factor,
            item.consecutive_correct,
            _now(),
            item.id,
            previous.last_reviewed,
            previous.next_review,
            previous.consecutive_correct,
        ),
    )
    if cursor.rowcount == 0:
        await db.rollback()
        return None
    await db.execute(
        """INSERT INTO review_log (id, item_id, quality, reviewed_at, interval, ease_factor)
           VALUES (?, ?, ?, ?, ?, ?)""",
        (
            str(uuid.uuid4()),
            item.id,
            quality,
            item.last_reviewed,
            item.interval,
            item.ease_factor,
        ),
    )
    await db.commit()
    return await get_review_item(db, item.id)


# --- Stats ---

async def get_review_stats(db: aiosqlite.Connection, now: int) -> ReviewStats:
    """Collection totals plus today's (UTC) review activity."""
    day_start = now - now % DAY_MS

    total_cursor = await db.execute("SELECT COUNT(*) FROM review_items")
    total = (await total_cursor.fetchone())[0]

    due_cursor = await db.execute(
        "SELECT COUNT(*) FROM review_items WHERE next_review <= ?", (now,)
    )
    due = (await due_cursor.fetchone())[0]

    learned_cursor = await db.execute(
        "SELECT COUNT(*) FROM review_items WHERE next_review > ? AND consecutive_correct >= ?",
        (now, LEARNED_THRESHOLD),
    )
    learned = (await learned_cursor.fetchone())[0]

    today_cursor = await db.execute(
        "SELECT COUNT(*), AVG(quality) FROM review_log WHERE reviewed_at >= ?",
        (day_start,),
    )
    reviewed_today, avg_quality = await today_cursor.fetchone()

    return ReviewStats(
        total_items=total,
        due_now=due,
        learned=learned,
        reviewed_today=reviewed_today,
        average_quality_today=avg_quality,
    )
