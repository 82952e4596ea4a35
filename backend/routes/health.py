"""Health and readiness check routes."""

from fastapi import APIRouter, Depends

from config import Settings
from dependencies import get_settings

router = APIRouter()


@router.get("/")
async def root() -> dict:
    """Liveness check used by the hosting platform."""
    return {"status": "ok"}


@router.get("/ready")
async def ready(settings: Settings = Depends(get_settings)) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "product-proxy", "commit": settings.git_sha}
