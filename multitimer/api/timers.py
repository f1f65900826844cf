"""Timer endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException

from multitimer.api.deps import get_registry
from multitimer.api.schemas import (
    CategoryGroup,
    CreateTimerRequest,
    GroupedTimersResponse,
    TimerListResponse,
    TimerResponse,
    TimerView,
    to_views,
)
from multitimer.exceptions import TimerNotFoundError, ValidationError
from multitimer.services.registry import TimerRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timers", tags=["timers"])


@router.get("", response_model=TimerListResponse)
async def list_timers(registry: TimerRegistry = Depends(get_registry)):
    """List all timers in creation order"""
    timers = registry.list_timers()
    return {
        "timers": to_views(timers),
        "count": len(timers)
    }


@router.post("", response_model=TimerResponse, status_code=201)
async def create_timer(
    request: CreateTimerRequest,
    registry: TimerRegistry = Depends(get_registry)
):
    """
    Create a paused timer.

    Raises:
        422: Empty name or category, or a duration that is not a positive whole number
    """
    try:
        timer = await registry.create(
            request.name,
            request.category,
            request.duration,
            request.halfway_alert_enabled,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"timer": TimerView.from_timer(timer)}


@router.get("/grouped", response_model=GroupedTimersResponse)
async def list_grouped_timers(registry: TimerRegistry = Depends(get_registry)):
    """Timers partitioned by category, in first-seen category order"""
    groups = [
        CategoryGroup(category=category, timers=to_views(timers))
        for category, timers in registry.grouped().items()
    ]
    return {"groups": groups}


@router.get("/{timer_id}", response_model=TimerResponse)
async def get_timer(timer_id: str, registry: TimerRegistry = Depends(get_registry)):
    try:
        timer = registry.get(timer_id)
    except TimerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"timer": TimerView.from_timer(timer)}


@router.delete("/{timer_id}", response_model=TimerResponse)
async def delete_timer(timer_id: str, registry: TimerRegistry = Depends(get_registry)):
    try:
        timer = await registry.delete(timer_id)
    except TimerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"timer": TimerView.from_timer(timer)}


@router.post("/{timer_id}/start", response_model=TimerResponse)
async def start_timer(timer_id: str, registry: TimerRegistry = Depends(get_registry)):
    """Start a paused timer. Running and completed timers are returned unchanged."""
    try:
        timer = await registry.start(timer_id)
    except TimerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"timer": TimerView.from_timer(timer)}


@router.post("/{timer_id}/pause", response_model=TimerResponse)
async def pause_timer(timer_id: str, registry: TimerRegistry = Depends(get_registry)):
    """Pause a running timer. Other timers are returned unchanged."""
    try:
        timer = await registry.pause(timer_id)
    except TimerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"timer": TimerView.from_timer(timer)}


@router.post("/{timer_id}/reset", response_model=TimerResponse)
async def reset_timer(timer_id: str, registry: TimerRegistry = Depends(get_registry)):
    try:
        timer = await registry.reset(timer_id)
    except TimerNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"timer": TimerView.from_timer(timer)}
