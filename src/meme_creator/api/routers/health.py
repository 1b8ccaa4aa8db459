"""Health check router."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...config.config import Settings
from ..dependencies import get_app_settings

router = APIRouter()


@router.get("/health", response_model=Dict[str, Any])
async def health_check(settings: Settings = Depends(get_app_settings)) -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns:
        Dict containing health status information
    """
    return {
        "status": "healthy",
        "version": settings.app_version,
        "env": settings.app_env,
        "blob_backend": settings.blob_backend,
        "dispatcher": settings.dispatcher_backend,
    }


@router.get("/liveness", response_model=Dict[str, Any])
async def liveness_check() -> Dict[str, Any]:
    """Liveness probe endpoint."""
    return {"status": "alive"}


@router.get("/readiness", response_model=Dict[str, Any])
async def readiness_check() -> Dict[str, Any]:
    """Readiness probe endpoint."""
    return {"status": "ready"}
