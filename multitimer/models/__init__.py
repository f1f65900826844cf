"""Domain models for the timer engine"""
from .timer import Timer, TimerStatus
from .history import HistoryEntry
from .notification import NotificationKind, TimerNotification

__all__ = [
    'Timer', 'TimerStatus',
    'HistoryEntry',
    'NotificationKind', 'TimerNotification',
]
