"""Liveness, connectivity and example auth probes."""

from datetime import datetime, timezone

from fastapi import APIRouter

from studyhub.api.deps import CurrentIdentity
from studyhub.config import get_settings

router = APIRouter(tags=["system"])


@router.get("/")
async def root() -> dict:
    """Welcome message with the server's mode."""
    settings = get_settings()
    return {
        "success": True,
        "message": f"Welcome to {settings.app_name} Backend API",
        "mode": settings.environment,
        "authDisabled": settings.disable_auth,
    }


@router.get("/api/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "success": True,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/api/public")
async def public() -> dict:
    """Connectivity probe for the frontend; no authentication."""
    return {
        "success": True,
        "message": "This is a public route (no authentication needed)",
    }


@router.get("/api/protected")
async def protected(identity: CurrentIdentity) -> dict:
    """Example protected route echoing the caller's identity."""
    return {
        "success": True,
        "message": "This is a protected route",
        "user": identity.model_dump(mode="json", by_alias=True),
    }
