"""Notification feed endpoint"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from multitimer.api.deps import get_notification_feed
from multitimer.models.notification import TimerNotification
from multitimer.services.notifications import NotificationFeed

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


class NotificationListResponse(BaseModel):
    notifications: List[TimerNotification]


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of notifications to return"),
    feed: NotificationFeed = Depends(get_notification_feed)
):
    """Recent halfway, completion and save-failure alerts, newest first"""
    return {"notifications": feed.recent(limit)}
