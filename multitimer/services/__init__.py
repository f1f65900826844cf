"""Services module"""

from multitimer.services.grouping import group_by_category
from multitimer.services.history import HistoryLog
from multitimer.services.notifications import (
    CompositeNotificationSink,
    ExpoPushNotificationSink,
    LoggingNotificationSink,
    NotificationFeed,
    NotificationSink,
    build_notification,
    notify_timer_event,
)
from multitimer.services.registry import TimerRegistry, parse_duration
from multitimer.services.scheduler import TickOutcome, TickScheduler, advance_timer

__all__ = [
    "group_by_category",
    "HistoryLog",
    "CompositeNotificationSink",
    "ExpoPushNotificationSink",
    "LoggingNotificationSink",
    "NotificationFeed",
    "NotificationSink",
    "build_notification",
    "notify_timer_event",
    "TimerRegistry",
    "parse_duration",
    "TickOutcome",
    "TickScheduler",
    "advance_timer",
]
