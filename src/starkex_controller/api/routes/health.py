"""Health check endpoints."""

from fastapi import APIRouter

from starkex_controller.config import get_settings
from starkex_controller.services.dispatcher import get_supported_methods

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "starkex-controller"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration info."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "starkex-controller",
        "version": "0.1.0",
        "methods": get_supported_methods(),
        "config": settings.get_safe_dict(),
    }
