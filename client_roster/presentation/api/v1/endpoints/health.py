"""Health check endpoint — no dependencies, always available."""

from datetime import datetime, timezone

from fastapi import APIRouter

from client_roster.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "store_backend": settings.store_backend,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
