"""Timer list repository"""
from multitimer.infra.store.base import KeyValueStore
from multitimer.models.timer import Timer

from .base import DocumentRepository

TIMERS_KEY = "@timers"


class TimerRepository(DocumentRepository[Timer]):
    """Repository for the timer list document"""

    def __init__(self, store: KeyValueStore, key: str = TIMERS_KEY):
        super().__init__(store, key, Timer)
