"""Business logic for rooms, including read authorization."""

import logging

from fastapi import HTTPException

from src.db.models import ROLE_ADMIN, ROLE_MEMBER
from src.rooms import repository

logger = logging.getLogger(__name__)


def get_room_or_404(room_id: str) -> dict:
    room = repository.get_visibility(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


def authorize_room_read(room_id: str, user_id: str | None) -> dict:
    """Gate access to a room's messages.

    Missing room -> 404. Public rooms are readable by anyone, anonymous
    callers included. Private rooms need a membership row for `user_id`,
    otherwise 403. Re-checked on every call; nothing is cached.
    """
    room = get_room_or_404(room_id)
    if not room["is_private"]:
        return room

    if user_id is None or not repository.is_member(user_id, room_id):
        logger.info("Denied read on private room %s for %s", room_id, user_id or "anonymous")
        raise HTTPException(status_code=403, detail="You do not have access to this room")
    return room


def require_membership(room_id: str, user_id: str) -> dict:
    room = get_room_or_404(room_id)
    if not repository.is_member(user_id, room_id):
        raise HTTPException(status_code=403, detail="You are not a member of this room")
    return room


def _with_last_message(room: dict) -> dict:
    room = dict(room)
    messages = room.pop("messages", None) or []
    room["last_message"] = messages[0] if messages else None
    return room


def list_rooms(user_id: str | None) -> list[dict]:
    return [_with_last_message(room) for room in repository.list_visible(user_id)]


def create_room(owner_id: str, name: str, is_private: bool) -> dict:
    room = repository.create(name, is_private)
    try:
        repository.add_member(room["id"], owner_id, role=ROLE_ADMIN)
    except Exception:
        logger.exception("Failed to add owner %s to room %s, rolling back", owner_id, room["id"])
        repository.delete(room["id"])
        raise
    logger.info("User %s created %s room %s", owner_id, "private" if is_private else "public", room["id"])
    return {**room, "last_message": None}


def join_room(room_id: str, user_id: str) -> dict:
    """Join a public room. Idempotent; private rooms cannot be self-joined."""
    room = get_room_or_404(room_id)
    if room["is_private"]:
        raise HTTPException(status_code=403, detail="Private rooms cannot be joined")
    if repository.is_member(user_id, room_id):
        return {"room_id": room_id, "joined": False}
    repository.add_member(room_id, user_id, role=ROLE_MEMBER)
    return {"room_id": room_id, "joined": True}
