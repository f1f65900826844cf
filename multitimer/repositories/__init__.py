"""Document repositories"""
from .base import DocumentRepository
from .timers import TimerRepository, TIMERS_KEY
from .history import HistoryRepository, HISTORY_KEY

__all__ = [
    "DocumentRepository",
    "TimerRepository",
    "TIMERS_KEY",
    "HistoryRepository",
    "HISTORY_KEY",
]
