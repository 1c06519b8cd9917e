"""
Service status endpoints.
"""

from fastapi import APIRouter, Request

from ..config import settings
from ..core.fallback_monitor import fallback_monitor
from ..models import utc_now

router = APIRouter(tags=["status"])

ROUTE_MAP = {
    "auth": "/api/auth",
    "chat": "/api/chat",
    "routines": "/api/routines",
    "symptoms": "/api/symptoms",
    "healthMetrics": "/api/health-metrics",
    "moods": "/api/moods",
    "nutrition": "/api/nutrition",
    "workouts": "/api/workouts",
    "users": "/api/users",
    "notifications": "/api/notifications",
}


@router.get("/health")
async def health_check(request: Request):
    """Liveness plus store readiness and AI fallback counters."""
    store = getattr(request.app.state, "store", None)
    store_ready = bool(store and store.is_ready())
    return {
        "success": True,
        "status": "healthy" if store_ready else "degraded",
        "version": settings.app_version,
        "timestamp": utc_now().isoformat(),
        "database": "connected" if store_ready else "disconnected",
        "llm": {
            "provider": settings.llm_provider,
            "configured": getattr(request.app.state, "llm_provider", None) is not None,
        },
        "aiFallbacks": fallback_monitor.snapshot(),
    }


@router.get("/api/status")
async def api_status():
    return {
        "success": True,
        "message": f"{settings.app_name} API is running",
        "version": settings.app_version,
        "timestamp": utc_now().isoformat(),
        "endpoints": ROUTE_MAP,
    }
