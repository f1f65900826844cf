"""
Tick Scheduler

One asyncio task per running timer. Each task sleeps one interval and then
asks its tick callback to advance the timer, until the timer stops running.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from multitimer.models.timer import Timer, TimerStatus

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 1.0


@dataclass(frozen=True)
class TickOutcome:
    """Result of advancing one timer by one tick"""
    timer_id: str
    timer_name: str
    remaining: int
    changed: bool = False
    halfway_reached: bool = False
    completed: bool = False

    @property
    def keeps_running(self) -> bool:
        return self.changed and not self.completed


def advance_timer(timer: Timer) -> TickOutcome:
    """
    Apply one tick to a timer in place.

    A timer that is not Running, or is already at zero, is left untouched;
    this covers ticks that race with pause or reset. The halfway alert fires
    only on the exact tick where remaining equals duration // 2, and at most
    once per run cycle.
    """
    if timer.status != TimerStatus.RUNNING or timer.remaining <= 0:
        return TickOutcome(timer.id, timer.name, timer.remaining)

    timer.remaining -= 1

    halfway_reached = False
    if (
        timer.remaining == timer.halfway_mark
        and timer.halfway_alert_enabled
        and not timer.halfway_triggered
    ):
        timer.halfway_triggered = True
        halfway_reached = True

    completed = False
    if timer.remaining == 0:
        timer.status = TimerStatus.COMPLETED
        completed = True

    return TickOutcome(
        timer_id=timer.id,
        timer_name=timer.name,
        remaining=timer.remaining,
        changed=True,
        halfway_reached=halfway_reached,
        completed=completed,
    )


TickCallback = Callable[[str], Awaitable[Optional[TickOutcome]]]


class TickScheduler:
    """Keeps at most one driver task per timer id"""

    def __init__(self, interval: float = DEFAULT_TICK_INTERVAL):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval
        self._drivers: Dict[str, asyncio.Task] = {}

    def start(self, timer_id: str, on_tick: TickCallback) -> bool:
        """
        Start a driver for timer_id.

        Returns:
            False if a driver for this timer is already active
        """
        existing = self._drivers.get(timer_id)
        if existing is not None and not existing.done():
            return False

        task = asyncio.create_task(self._drive(timer_id, on_tick), name=f"timer-{timer_id}")
        self._drivers[timer_id] = task
        logger.debug(f"Driver started for timer {timer_id}")
        return True

    def stop(self, timer_id: str) -> bool:
        """
        Cancel the driver for timer_id without waiting for it.

        A driver stopping itself from inside its own tick is only forgotten;
        it exits once the tick returns.

        Returns:
            True if a driver was active
        """
        task = self._drivers.pop(timer_id, None)
        if task is None:
            return False
        if not task.done() and task is not asyncio.current_task():
            task.cancel()
        logger.debug(f"Driver stopped for timer {timer_id}")
        return True

    def is_running(self, timer_id: str) -> bool:
        task = self._drivers.get(timer_id)
        return task is not None and not task.done()

    def active_ids(self) -> List[str]:
        return [timer_id for timer_id, task in self._drivers.items() if not task.done()]

    async def shutdown(self) -> None:
        """Cancel every driver and wait until all of them have exited"""
        tasks = list(self._drivers.values())
        self._drivers.clear()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info(f"Tick scheduler shut down ({len(tasks)} driver(s) stopped)")

    async def _drive(self, timer_id: str, on_tick: TickCallback) -> None:
        current = asyncio.current_task()
        try:
            while True:
                await asyncio.sleep(self.interval)
                outcome = await on_tick(timer_id)
                if outcome is None or not outcome.keeps_running:
                    break
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception(f"Driver for timer {timer_id} failed")
        finally:
            if self._drivers.get(timer_id) is current:
                del self._drivers[timer_id]
