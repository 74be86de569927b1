"""
Health check endpoint
"""

from fastapi import APIRouter, Depends

from page_relay.config import Settings
from page_relay.dependencies.app_state import get_settings

health_router = APIRouter(prefix="", tags=["health"])


@health_router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Report service status and which credentials are configured (never their values)"""
    return {
        "status": "healthy",
        "version": settings.version,
        "environment": settings.environment,
        "dry_run": settings.dry_run,
        "config": {
            "verify_token": bool(settings.verify_token),
            "page_access_token": bool(settings.page_access_token),
            "gemini_api_key": bool(settings.gemini_api_key),
        },
    }
