"""Auth endpoints: register, login, refresh, logout, me."""

import hashlib
import logging
from datetime import datetime, timezone

import bcrypt as _bcrypt
import jwt
from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import CurrentUser, get_current_user
from src.auth.jwt import REFRESH, create_access_token, create_refresh_token, verify_token
from src.auth.schemas import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from src.config.settings import get_settings
from src.db.client import get_supabase
from src.db.models import REFRESH_TOKENS
from src.users import repository as users
from src.users.schemas import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# --- Helpers ---

def _hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _epoch_to_iso(epoch: int) -> str:
    return datetime.fromtimestamp(epoch, tz=timezone.utc).isoformat()


def _token_pair(user_id: str, email: str) -> dict:
    settings = get_settings()
    return {
        "access_token": create_access_token(user_id, email),
        "refresh_token": create_refresh_token(user_id),
        "token_type": "bearer",
        "expires_in": settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


def _store_refresh_token(user_id: str, refresh_token: str) -> None:
    db = get_supabase()
    db.table(REFRESH_TOKENS).insert({
        "user_id": user_id,
        "token_hash": _hash_refresh_token(refresh_token),
        "expires_at": _epoch_to_iso(verify_token(refresh_token, REFRESH)["exp"]),
    }).execute()


def _issue_tokens(user_id: str, email: str) -> dict:
    tokens = _token_pair(user_id, email)
    _store_refresh_token(user_id, tokens["refresh_token"])
    return tokens


# --- Endpoints ---

@router.post("/register", status_code=201, response_model=TokenResponse, summary="Register a new user", description="Create a new user account and return JWT tokens with the user profile.")
async def register(body: RegisterRequest):
    if users.get_by_email(body.email):
        raise HTTPException(status_code=409, detail="Email already registered")

    settings = get_settings()
    password_hash = _bcrypt.hashpw(body.password.encode(), _bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode()
    user = users.create(body.email, body.name, password_hash)
    logger.info("Registered user %s", user["id"])

    tokens = _issue_tokens(user["id"], user["email"])
    profile = UserResponse.model_validate(user).model_dump(mode="json")
    return TokenResponse(data={**tokens, "user": profile})


@router.post("/login", response_model=TokenResponse, summary="Login", description="Authenticate with email and password, returns JWT access and refresh tokens.")
async def login(body: LoginRequest):
    user = users.get_by_email(body.email)
    if not user or not _bcrypt.checkpw(body.password.encode(), user["password_hash"].encode()):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if user.get("disabled"):
        raise HTTPException(status_code=403, detail="Account disabled")

    users.update_last_login(user["id"])
    return TokenResponse(data=_issue_tokens(user["id"], user["email"]))


@router.post("/refresh", response_model=TokenResponse, summary="Refresh access token", description="Exchange a valid refresh token for a new token pair. Old refresh token is revoked.")
async def refresh(body: RefreshRequest):
    try:
        payload = verify_token(body.refresh_token, REFRESH)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    db = get_supabase()
    token_hash = _hash_refresh_token(body.refresh_token)

    stored = db.table(REFRESH_TOKENS).select("id, is_revoked").eq("token_hash", token_hash).execute()
    if not stored.data or stored.data[0]["is_revoked"]:
        raise HTTPException(status_code=401, detail="Refresh token revoked or not found")

    db.table(REFRESH_TOKENS).update({"is_revoked": True}).eq("id", stored.data[0]["id"]).execute()

    user = users.get_by_id(payload["sub"])
    if not user or user.get("disabled"):
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    return TokenResponse(data=_issue_tokens(user["id"], user["email"]))


@router.post("/logout", summary="Logout", description="Revoke the refresh token. Requires a valid access token.")
async def logout(body: RefreshRequest, user: CurrentUser = Depends(get_current_user)):
    db = get_supabase()
    token_hash = _hash_refresh_token(body.refresh_token)
    db.table(REFRESH_TOKENS).update({"is_revoked": True}).eq("token_hash", token_hash).eq("user_id", user.id).execute()
    return {"status": "success", "data": {"message": "Logged out successfully"}}


@router.get("/me", summary="Current user", description="Return the authenticated user's profile.")
async def me(user: CurrentUser = Depends(get_current_user)):
    row = users.get_by_id(user.id)
    if not row:
        raise HTTPException(status_code=401, detail="User no longer exists")
    return {"status": "success", "data": UserResponse.model_validate(row)}
