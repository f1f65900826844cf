"""Completion history endpoints"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from multitimer.api.deps import get_history
from multitimer.models.history import HistoryEntry
from multitimer.services.history import HistoryLog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/history", tags=["history"])


class HistoryResponse(BaseModel):
    entries: List[HistoryEntry]
    count: int


class ClearHistoryResponse(BaseModel):
    success: bool
    persisted: bool


@router.get("", response_model=HistoryResponse)
async def list_history(history: HistoryLog = Depends(get_history)):
    """Completed timers, newest first"""
    entries = history.entries()
    return {"entries": entries, "count": len(entries)}


@router.delete("", response_model=ClearHistoryResponse)
async def clear_history(history: HistoryLog = Depends(get_history)):
    """Wipe the whole history. This cannot be undone."""
    persisted = await history.clear()
    if not persisted:
        logger.warning("History cleared in memory but the store write failed")
    return {"success": True, "persisted": persisted}
