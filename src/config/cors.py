"""CORS origin resolution and security headers."""

import re

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.config.settings import get_settings

# Development-safe defaults; production requires an explicit allowlist.
DEFAULT_DEV_ORIGIN_PATTERNS = [r"https?://localhost:\d+", r"https?://127\.0\.0\.1:\d+"]

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}


def resolve_cors_origins(src: str | None, environment: str = "development") -> list[str]:
    """Parse a comma-separated origin list.

    Entries are trimmed, lose trailing slashes and are de-duplicated in order.
    An empty result means "no origins" in production and the localhost
    patterns everywhere else.
    """
    items = [re.sub(r"/+$", "", s.strip()) for s in (src or "").split(",")]
    seen: set[str] = set()
    origins: list[str] = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            origins.append(item)

    if origins:
        return origins
    if environment.lower() == "production":
        return []
    return list(DEFAULT_DEV_ORIGIN_PATTERNS)


def configure_cors(app: FastAPI) -> None:
    settings = get_settings()
    origins = resolve_cors_origins(settings.CORS_ORIGINS, settings.ENVIRONMENT)

    kwargs: dict = {
        "allow_credentials": True,
        "allow_methods": ["*"],
        "allow_headers": ["*"],
        "expose_headers": ["X-Request-ID"],
    }
    if origins == DEFAULT_DEV_ORIGIN_PATTERNS:
        kwargs["allow_origin_regex"] = "|".join(origins)
    else:
        kwargs["allow_origins"] = origins

    app.add_middleware(CORSMiddleware, **kwargs)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
