"""Pydantic schemas for room requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


# --- Requests ---

class CreateRoomRequest(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    is_private: bool = False

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


# --- Responses ---

class LastMessage(BaseModel):
    content: str
    created_at: datetime


class RoomResponse(BaseModel):
    id: str
    name: str
    is_private: bool
    updated_at: datetime
    last_message: LastMessage | None = None

    model_config = {"from_attributes": True}


class RoomListResponse(BaseModel):
    status: str = "success"
    data: list[RoomResponse]
    server_time: datetime


class JoinResult(BaseModel):
    room_id: str
    joined: bool


class JoinRoomResponse(BaseModel):
    status: str = "success"
    data: JoinResult
