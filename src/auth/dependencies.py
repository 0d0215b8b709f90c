"""Auth dependencies for FastAPI route injection."""

import logging
from dataclasses import dataclass

import jwt
from fastapi import HTTPException, Request

from src.auth.jwt import ACCESS, verify_token

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    id: str
    email: str


def _extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.strip().lower().startswith("bearer "):
        return auth.strip()[7:].strip()
    return None


def _user_from_token(token: str) -> CurrentUser:
    try:
        payload = verify_token(token, ACCESS)
    except jwt.InvalidTokenError:
        logger.info("Rejected invalid or expired access token")
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return CurrentUser(id=payload["sub"], email=payload.get("email", ""))


async def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency: require a valid Bearer access token."""
    token = _extract_bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Missing authentication credentials")
    return _user_from_token(token)


async def get_optional_user(request: Request) -> CurrentUser | None:
    """FastAPI dependency: anonymous when no Bearer token is sent.

    A Bearer token that is present but invalid is still a 401.
    """
    token = _extract_bearer_token(request)
    if token is None:
        return None
    return _user_from_token(token)
