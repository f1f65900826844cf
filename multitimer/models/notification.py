"""Notification models"""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class NotificationKind(str, Enum):
    """What a notification reports"""
    HALFWAY = "halfway"
    COMPLETION = "completion"
    SAVE_FAILED = "save_failed"


class TimerNotification(BaseModel):
    """A user-facing alert raised by the engine"""
    kind: NotificationKind
    timer_name: str
    timer_id: Optional[str] = None
    title: str
    body: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        alias_generator = to_camel
        populate_by_name = True
