"""Chat API: FastAPI application entry point."""

from fastapi import FastAPI

from src.auth.routes import router as auth_router
from src.config.cors import SecurityHeadersMiddleware, configure_cors
from src.config.logging import setup_logging
from src.config.settings import get_settings
from src.health.routes import router as health_router
from src.messages.routes import router as messages_router
from src.middleware.error_handler import register_error_handlers
from src.middleware.rate_limiter import RateLimiterMiddleware
from src.middleware.request_id import RequestIDMiddleware
from src.rooms.routes import router as rooms_router

setup_logging(get_settings().LOG_LEVEL)

app = FastAPI(
    title="Chat API",
    description=(
        "REST API for chat rooms and messages.\n\n"
        "## Features\n"
        "- JWT authentication with refresh token rotation\n"
        "- Public and private rooms with memberships\n"
        "- Newest-first message history with opaque cursor pagination\n"
        "- Login/register throttling per client\n\n"
        "## Authentication\n"
        "Use `Authorization: Bearer <jwt>`. Listing rooms and reading public rooms works anonymously; "
        "private rooms require membership."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Liveness and readiness probes"},
        {"name": "Auth", "description": "Authentication: register, login, token refresh, logout, profile"},
        {"name": "Rooms", "description": "List, create and join rooms"},
        {"name": "Messages", "description": "Paginated message history and posting"},
    ],
)

# --- Middleware (order matters: the last one added runs outermost) ---
app.add_middleware(RateLimiterMiddleware)
configure_cors(app)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(rooms_router)
app.include_router(messages_router)
