"""Pydantic schemas for auth requests and responses."""

from pydantic import BaseModel, EmailStr, Field, field_validator

MAX_EMAIL_LENGTH = 254
# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _normalize_email(value):
    if not isinstance(value, str):
        return value
    value = value.strip().lower()
    if len(value) > MAX_EMAIL_LENGTH:
        raise ValueError(f"email must be at most {MAX_EMAIL_LENGTH} characters")
    return value


# --- Requests ---

class RegisterRequest(BaseModel):
    email: EmailStr
    name: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=8, max_length=MAX_PASSWORD_BYTES)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return _normalize_email(value)


class RefreshRequest(BaseModel):
    refresh_token: str


# --- Responses ---

class TokenResponse(BaseModel):
    status: str = "success"
    data: dict
