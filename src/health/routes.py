"""Liveness and readiness probes."""

import logging

from fastapi import APIRouter
from starlette.responses import JSONResponse

from src.db.client import get_supabase
from src.db.models import ROOMS

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


def _database_up() -> bool:
    try:
        get_supabase().table(ROOMS).select("id").limit(1).execute()
    except Exception:
        logger.warning("Database readiness probe failed", exc_info=True)
        return False
    return True


def _readiness() -> JSONResponse:
    if _database_up():
        return JSONResponse(status_code=200, content={"status": "ok", "db": "up"})
    return JSONResponse(status_code=503, content={"status": "degraded", "db": "down"})


@router.get("/livez", summary="Liveness", description="Returns OK while the process is serving requests.")
async def livez():
    return {"status": "ok"}


@router.get("/readyz", summary="Readiness", description="Checks the database; 503 when it is unreachable.")
async def readyz():
    return _readiness()


@router.get("/healthz", summary="Health check", description="Alias of /readyz.")
async def healthz():
    return _readiness()


@router.get("/health", summary="Health check", description="Alias of /readyz.")
async def health():
    return _readiness()
