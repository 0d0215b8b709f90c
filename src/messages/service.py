"""Message business logic: access-checked cursor pagination and posting."""

import logging
from datetime import datetime, timezone

from fastapi import HTTPException

from src.messages import repository
from src.messages.schemas import MessageAuthor, MessagePageResponse, MessageResponse
from src.rooms import repository as rooms_repository
from src.rooms.service import authorize_room_read, require_membership
from src.utils.cursor import InvalidCursorError, decode_cursor, encode_cursor

logger = logging.getLogger(__name__)


def to_message_response(row: dict) -> MessageResponse:
    created_at = row["created_at"]
    updated_at = row["updated_at"]
    return MessageResponse(
        id=row["id"],
        message_id=row["id"],
        room_id=row["room_id"],
        content=row["content"],
        created_at=created_at,
        edited_at=updated_at if updated_at > created_at else None,
        author=MessageAuthor(id=row["author"]["id"], name=row["author"]["name"]),
    )


def assemble_page(rows: list[dict], has_more: bool, now: datetime | None = None) -> MessagePageResponse:
    """Build the response page from already-ordered rows.

    The next cursor points at the last row and is only issued while more
    rows remain.
    """
    next_cursor = None
    if rows and has_more:
        last = rows[-1]
        next_cursor = encode_cursor(last["created_at"], last["id"])

    return MessagePageResponse(
        items=[to_message_response(row) for row in rows],
        next_cursor=next_cursor,
        has_more=has_more,
        server_time=now or datetime.now(timezone.utc),
    )


def list_room_messages(room_id: str, user_id: str | None, limit: int, cursor: str | None = None) -> MessagePageResponse:
    """List a room's messages newest first.

    Authorization runs before the cursor is looked at, so an unknown room is
    a 404 and an unreadable private room a 403 whatever the cursor holds.
    """
    authorize_room_read(room_id, user_id)

    position = None
    if cursor is not None:
        try:
            position = decode_cursor(cursor)
        except InvalidCursorError:
            logger.info("Rejected invalid cursor for room %s", room_id)
            raise HTTPException(status_code=400, detail="Invalid cursor")

    rows, has_more = repository.fetch_page(room_id, position, limit)
    return assemble_page(rows, has_more)


def post_message(room_id: str, author: dict, content: str) -> MessageResponse:
    """Append a message from a room member and bump the room's activity time."""
    require_membership(room_id, author["id"])
    row = repository.create(room_id, author["id"], content)
    rooms_repository.touch(room_id, row["created_at"])
    return to_message_response({**row, "author": {"id": author["id"], "name": author["name"]}})
