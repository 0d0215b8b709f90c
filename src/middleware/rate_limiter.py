"""In-memory sliding window throttle for the login and register endpoints, keyed by client IP."""

import time
from collections import deque

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.config.settings import get_settings

THROTTLED_PATHS = {"/api/v1/auth/login", "/api/v1/auth/register"}


def _expire(window: deque[float], cutoff: float) -> None:
    while window and window[0] <= cutoff:
        window.popleft()


class SlidingWindowLimiter:
    """Per-key request timestamps; keys whose window has emptied are dropped."""

    SWEEP_EVERY = 1000

    def __init__(self):
        # key -> request timestamps, oldest first
        self._windows: dict[str, deque[float]] = {}
        self._checks = 0

    def check(self, key: str, limit: int, period: float, now: float) -> tuple[bool, int]:
        """Remove expired entries, check if under limit. Returns (allowed, retry_after_seconds)."""
        cutoff = now - period
        self._checks += 1
        if self._checks % self.SWEEP_EVERY == 0:
            self._sweep(cutoff)

        window = self._windows.get(key)
        if window is None:
            window = self._windows[key] = deque()
        _expire(window, cutoff)

        if len(window) >= limit:
            retry_after = int(window[0] - cutoff) + 1
            return False, retry_after

        window.append(now)
        return True, 0

    def _sweep(self, cutoff: float) -> None:
        for key in list(self._windows):
            window = self._windows[key]
            _expire(window, cutoff)
            if not window:
                del self._windows[key]

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        self._windows.clear()
        self._checks = 0


auth_limiter = SlidingWindowLimiter()


class RateLimiterMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, limiter: SlidingWindowLimiter = auth_limiter):
        super().__init__(app)
        self._limiter = limiter

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method != "POST" or request.url.path.rstrip("/") not in THROTTLED_PATHS:
            return await call_next(request)

        settings = get_settings()
        client = request.client.host if request.client else "unknown"
        key = f"{client}:{request.url.path.rstrip('/')}"

        allowed, retry_after = self._limiter.check(
            key, settings.AUTH_THROTTLE_LIMIT, settings.AUTH_THROTTLE_WINDOW_SECONDS, time.monotonic(),
        )
        if not allowed:
            return JSONResponse(
                status_code=429,
                content={
                    "status": "error",
                    "error": {
                        "type": "rate_limit",
                        "message": "Too many attempts, try again later",
                        "request_id": getattr(request.state, "request_id", "unknown"),
                    },
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
