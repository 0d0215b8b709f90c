"""Data access layer for messages: keyset pagination and inserts."""

import logging
from datetime import datetime

from src.db.client import get_supabase
from src.db.models import MESSAGES
from src.utils.cursor import Cursor, format_timestamp

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

# Author projection: id and display name only, never credentials
MESSAGE_COLUMNS = "id, room_id, content, created_at, updated_at, author:users(id, name)"


def clamp_limit(limit: int) -> int:
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, limit))


def seek_filter(cursor: Cursor) -> str:
    """PostgREST `or` filter selecting rows strictly older than `cursor`.

    (created_at, id) < (cAt, cId) under the created_at DESC, id DESC order:
    created_at < cAt OR (created_at = cAt AND id < cId).
    """
    ts = format_timestamp(cursor.created_at)
    return f'created_at.lt."{ts}",and(created_at.eq."{ts}",id.lt.{cursor.id})'


def _parse_row(row: dict) -> dict:
    return {
        **row,
        "created_at": datetime.fromisoformat(row["created_at"]),
        "updated_at": datetime.fromisoformat(row["updated_at"]),
    }


def fetch_page(room_id: str, cursor: Cursor | None, limit: int) -> tuple[list[dict], bool]:
    """Fetch one newest-first page of a room's messages.

    One extra row is requested beyond `limit`; its presence is the
    `has_more` signal and it is dropped from the returned page.
    """
    limit = clamp_limit(limit)
    db = get_supabase()

    query = db.table(MESSAGES).select(MESSAGE_COLUMNS).eq("room_id", room_id)
    if cursor is not None:
        query = query.or_(seek_filter(cursor))

    result = (
        query
        .order("created_at", desc=True)
        .order("id", desc=True)
        .limit(limit + 1)
        .execute()
    )

    rows = [_parse_row(r) for r in result.data]
    has_more = len(rows) > limit
    logger.debug("Fetched %d rows for room %s (limit=%d, has_more=%s)", len(rows), room_id, limit, has_more)
    return rows[:limit], has_more


def create(room_id: str, user_id: str, content: str) -> dict:
    db = get_supabase()
    result = db.table(MESSAGES).insert({"room_id": room_id, "user_id": user_id, "content": content}).execute()
    return _parse_row(result.data[0])
