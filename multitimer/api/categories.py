"""Per-category bulk operations"""

from fastapi import APIRouter, Depends

from multitimer.api.deps import get_registry
from multitimer.api.schemas import BulkOperationResponse, to_views
from multitimer.services.registry import TimerRegistry

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.post("/{category}/start", response_model=BulkOperationResponse)
async def start_category(category: str, registry: TimerRegistry = Depends(get_registry)):
    """Start every paused timer in the category. Completed timers are skipped."""
    timers = await registry.start_all(category)
    return {"category": category, "timers": to_views(timers), "count": len(timers)}


@router.post("/{category}/pause", response_model=BulkOperationResponse)
async def pause_category(category: str, registry: TimerRegistry = Depends(get_registry)):
    """Pause every running timer in the category"""
    timers = await registry.pause_all(category)
    return {"category": category, "timers": to_views(timers), "count": len(timers)}


@router.post("/{category}/reset", response_model=BulkOperationResponse)
async def reset_category(category: str, registry: TimerRegistry = Depends(get_registry)):
    timers = await registry.reset_all(category)
    return {"category": category, "timers": to_views(timers), "count": len(timers)}
