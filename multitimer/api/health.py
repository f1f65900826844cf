"""Health check endpoint"""

from fastapi import APIRouter, Depends

from multitimer.api.deps import get_registry
from multitimer.services.registry import TimerRegistry

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(registry: TimerRegistry = Depends(get_registry)):
    """Basic health check with driver counts"""
    return {
        "status": "healthy",
        "service": "multitimer",
        "timers": len(registry.list_timers()),
        "active_drivers": len(registry.scheduler.active_ids()),
    }
