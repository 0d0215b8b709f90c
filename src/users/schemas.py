"""Pydantic schemas for user profiles."""

from datetime import datetime

from pydantic import BaseModel


class UserResponse(BaseModel):
    """Safe user projection: never carries the password hash."""

    id: str
    email: str
    name: str
    disabled: bool = False
    created_at: datetime
    last_login_at: datetime | None = None

    model_config = {"from_attributes": True}
