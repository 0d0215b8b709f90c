"""Data access layer for users."""

from datetime import datetime, timezone

from src.db.client import get_supabase
from src.db.models import USERS
from src.utils.cursor import format_timestamp


def create(email: str, name: str, password_hash: str) -> dict:
    db = get_supabase()
    result = db.table(USERS).insert({
        "email": email,
        "name": name,
        "password_hash": password_hash,
    }).execute()
    return result.data[0]


def get_by_email(email: str) -> dict | None:
    db = get_supabase()
    result = db.table(USERS).select("*").eq("email", email).execute()
    return result.data[0] if result.data else None


def get_by_id(user_id: str) -> dict | None:
    db = get_supabase()
    result = db.table(USERS).select("*").eq("id", user_id).execute()
    return result.data[0] if result.data else None


def update_last_login(user_id: str) -> None:
    db = get_supabase()
    now = format_timestamp(datetime.now(timezone.utc))
    db.table(USERS).update({"last_login_at": now}).eq("id", user_id).execute()
