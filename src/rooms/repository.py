"""Data access layer for rooms and memberships."""

from datetime import datetime

from src.db.client import get_supabase
from src.db.models import MEMBERSHIPS, MESSAGES, ROLE_MEMBER, ROOMS, VALID_ROLES
from src.utils.cursor import format_timestamp

ROOM_COLUMNS = "id, name, is_private, updated_at"
ROOM_LIST_COLUMNS = f"{ROOM_COLUMNS}, messages(content, created_at)"
MAX_LISTED_ROOMS = 100


def get_visibility(room_id: str) -> dict | None:
    """Fetch only what authorization needs: existence and the private flag."""
    db = get_supabase()
    result = db.table(ROOMS).select("id, is_private").eq("id", room_id).execute()
    return result.data[0] if result.data else None


def is_member(user_id: str, room_id: str) -> bool:
    db = get_supabase()
    result = (
        db.table(MEMBERSHIPS)
        .select("user_id", count="exact")
        .eq("user_id", user_id)
        .eq("room_id", room_id)
        .execute()
    )
    return (result.count or 0) > 0


def member_room_ids(user_id: str) -> list[str]:
    db = get_supabase()
    result = db.table(MEMBERSHIPS).select("room_id").eq("user_id", user_id).execute()
    return [row["room_id"] for row in result.data]


def visibility_filter(member_ids: list[str]) -> str:
    """PostgREST `or` filter: public rooms, or one of `member_ids`."""
    quoted = ",".join(f'"{room_id}"' for room_id in member_ids)
    return f"is_private.eq.false,id.in.({quoted})"


def list_visible(user_id: str | None) -> list[dict]:
    """Public rooms, plus the private rooms `user_id` belongs to.

    One query: ordering and the cap run in the database, and each room
    embeds at most its newest message under `messages`.
    """
    db = get_supabase()
    query = db.table(ROOMS).select(ROOM_LIST_COLUMNS)

    member_ids = member_room_ids(user_id) if user_id else []
    if member_ids:
        query = query.or_(visibility_filter(member_ids))
    else:
        query = query.eq("is_private", False)

    result = (
        query
        .order("updated_at", desc=True)
        .order("id", desc=True)
        .order("created_at", desc=True, foreign_table=MESSAGES)
        .order("id", desc=True, foreign_table=MESSAGES)
        .limit(1, foreign_table=MESSAGES)
        .limit(MAX_LISTED_ROOMS)
        .execute()
    )
    return result.data


def create(name: str, is_private: bool) -> dict:
    db = get_supabase()
    result = db.table(ROOMS).insert({"name": name, "is_private": is_private}).execute()
    return result.data[0]


def delete(room_id: str) -> None:
    db = get_supabase()
    db.table(ROOMS).delete().eq("id", room_id).execute()


def add_member(room_id: str, user_id: str, role: str = ROLE_MEMBER) -> dict:
    if role not in VALID_ROLES:
        raise ValueError(f"Unknown membership role: {role}")
    db = get_supabase()
    result = db.table(MEMBERSHIPS).insert({"room_id": room_id, "user_id": user_id, "role": role}).execute()
    return result.data[0]


def touch(room_id: str, at: datetime) -> None:
    """Record activity in a room by bumping its updated_at."""
    db = get_supabase()
    db.table(ROOMS).update({"updated_at": format_timestamp(at)}).eq("id", room_id).execute()
