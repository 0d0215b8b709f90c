"""JWT access/refresh token minting and verification."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from src.config.settings import get_settings

ALGORITHM = "HS256"
ACCESS = "access"
REFRESH = "refresh"


def _encode(claims: dict, lifetime: timedelta) -> str:
    issued_at = datetime.now(timezone.utc)
    payload = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(payload, get_settings().JWT_SECRET, algorithm=ALGORITHM)


def create_access_token(user_id: str, email: str) -> str:
    lifetime = timedelta(minutes=get_settings().JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode({"sub": user_id, "email": email, "type": ACCESS}, lifetime)


def create_refresh_token(user_id: str) -> str:
    lifetime = timedelta(days=get_settings().JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    # jti keeps two tokens minted in the same second distinct
    return _encode({"sub": user_id, "type": REFRESH, "jti": uuid.uuid4().hex}, lifetime)


def verify_token(token: str, expected_type: str) -> dict:
    """Decode a JWT and check it is the expected kind of token.

    Raises jwt.InvalidTokenError (expiry included) on any failure, including
    an access token presented where a refresh token is required.
    """
    payload = jwt.decode(
        token,
        get_settings().JWT_SECRET,
        algorithms=[ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"expected a {expected_type} token")
    return payload
