"""Shared fixtures for the engine tests"""
import asyncio
from typing import List, Optional

import pytest

from multitimer.exceptions import PersistenceError
from multitimer.infra.store.memory import InMemoryStore
from multitimer.models.notification import NotificationKind, TimerNotification
from multitimer.repositories.history import HistoryRepository
from multitimer.repositories.timers import TimerRepository
from multitimer.services.history import HistoryLog
from multitimer.services.notifications import NotificationSink
from multitimer.services.registry import TimerRegistry
from multitimer.services.scheduler import TickScheduler

# Drivers created with this interval never fire during a test; ticks are driven by hand
IDLE_INTERVAL = 3600


class FlakyStore(InMemoryStore):
    """In-memory store whose reads or writes can be switched to fail"""

    def __init__(self, initial=None, write_delay: float = 0.0):
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.write_delay = write_delay
        self.writes = 0

    async def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise PersistenceError("store unavailable")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.write_delay:
            await asyncio.sleep(self.write_delay)
        if self.fail_writes:
            raise PersistenceError("disk full")
        self.writes += 1
        await super().set(key, value)


class RecordingSink(NotificationSink):
    """Keeps every notification it receives"""

    def __init__(self):
        self.notifications: List[TimerNotification] = []

    async def notify(self, notification: TimerNotification) -> None:
        self.notifications.append(notification)

    def of_kind(self, kind: NotificationKind) -> List[TimerNotification]:
        return [n for n in self.notifications if n.kind == kind]


@pytest.fixture
def store():
    return FlakyStore()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def history(store):
    return HistoryLog(HistoryRepository(store))


@pytest.fixture
async def registry(store, history, sink):
    registry = TimerRegistry(
        TimerRepository(store),
        history,
        scheduler=TickScheduler(IDLE_INTERVAL),
        sink=sink,
    )
    yield registry
    await registry.shutdown()


async def tick_times(registry: TimerRegistry, timer_id: str, count: int):
    outcomes = []
    for _ in range(count):
        outcomes.append(await registry.tick(timer_id))
    return outcomes
