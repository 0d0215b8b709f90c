"""Message endpoints: paginated listing and posting."""

from fastapi import APIRouter, Depends, HTTPException, Query

from src.auth.dependencies import CurrentUser, get_current_user, get_optional_user
from src.config.settings import get_settings
from src.messages.schemas import MessagePageResponse, SendMessageRequest
from src.messages.service import list_room_messages, post_message
from src.users import repository as users

router = APIRouter(prefix="/api/v1/rooms/{room_id}", tags=["Messages"])


@router.get("/messages", response_model=MessagePageResponse, summary="List messages", description="Newest-first page of a room's messages. Pass `next_cursor` back as `cursor` to load older messages.")
async def list_messages(
    room_id: str,
    limit: int | None = Query(None, ge=1, le=100),
    cursor: str | None = Query(None),
    user: CurrentUser | None = Depends(get_optional_user),
):
    if limit is None:
        limit = get_settings().MESSAGES_DEFAULT_LIMIT
    return list_room_messages(room_id, user.id if user else None, limit, cursor)


@router.post("/messages", status_code=201, summary="Send a message", description="Post a message to a room the caller is a member of.")
async def send(
    room_id: str,
    body: SendMessageRequest,
    user: CurrentUser = Depends(get_current_user),
):
    author = users.get_by_id(user.id)
    if not author:
        raise HTTPException(status_code=401, detail="User no longer exists")
    message = post_message(room_id, author, body.content)
    return {"status": "success", "data": message}
