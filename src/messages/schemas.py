"""Pydantic schemas for message requests and responses."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class SendMessageRequest(BaseModel):
    content: str = Field(min_length=1, max_length=2000)

    @field_validator("content", mode="before")
    @classmethod
    def strip_content(cls, value):
        return value.strip() if isinstance(value, str) else value


class MessageAuthor(BaseModel):
    id: str
    name: str


class MessageResponse(BaseModel):
    id: str
    message_id: str
    room_id: str
    content: str
    created_at: datetime
    edited_at: datetime | None = None
    author: MessageAuthor


class MessagePageResponse(BaseModel):
    status: str = "success"
    items: list[MessageResponse]
    next_cursor: str | None = None
    has_more: bool
    server_time: datetime
