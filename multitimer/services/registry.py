"""
Timer Registry

In-memory source of truth for all timers. Every mutation goes through this
class: it is serialized by one lock, snapshotted to a document while the lock
is held, and written through to the store after the lock is released.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Set, Tuple
from uuid import uuid4

from multitimer.exceptions import PersistenceError, TimerNotFoundError, ValidationError
from multitimer.models.history import HistoryEntry
from multitimer.models.notification import NotificationKind
from multitimer.models.timer import Timer, TimerStatus
from multitimer.repositories.timers import TimerRepository
from multitimer.services.grouping import group_by_category
from multitimer.services.history import HistoryLog
from multitimer.services.notifications import LoggingNotificationSink, NotificationSink, notify_timer_event
from multitimer.services.scheduler import TickOutcome, TickScheduler, advance_timer

logger = logging.getLogger(__name__)


def _require_text(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must be a non-empty string")
    return value.strip()


def parse_duration(value: Any) -> int:
    """
    Validate a duration in seconds.

    Accepts ints, integer-valued floats and strings such as "90".

    Raises:
        ValidationError: If the value is not a positive whole number
    """
    if isinstance(value, bool):
        raise ValidationError("duration must be a positive whole number of seconds")

    if isinstance(value, int):
        seconds = value
    elif isinstance(value, float) and value.is_integer():
        seconds = int(value)
    elif isinstance(value, str):
        try:
            seconds = int(value.strip())
        except ValueError:
            raise ValidationError(f"duration must be a whole number of seconds, got '{value}'")
    else:
        raise ValidationError("duration must be a positive whole number of seconds")

    if seconds <= 0:
        raise ValidationError(f"duration must be positive, got {seconds}")
    return seconds


class TimerRegistry:
    """Owns the timers and drives their schedulers and persistence"""

    def __init__(
        self,
        repository: TimerRepository,
        history: HistoryLog,
        scheduler: Optional[TickScheduler] = None,
        sink: Optional[NotificationSink] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self._repository = repository
        self._history = history
        self._scheduler = scheduler or TickScheduler()
        self._sink = sink or LoggingNotificationSink()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

        self._timers: Dict[str, Timer] = {}
        self._lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()
        self._snapshot_seq = 0
        self._latest_written_seq = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    # --- Reads ---

    def get(self, timer_id: str) -> Timer:
        return self._get_or_raise(timer_id).model_copy()

    def list_timers(self) -> List[Timer]:
        """All timers in creation order"""
        return [timer.model_copy() for timer in self._timers.values()]

    def grouped(self) -> Dict[str, List[Timer]]:
        return group_by_category(self.list_timers())

    def is_driving(self, timer_id: str) -> bool:
        return self._scheduler.is_running(timer_id)

    # --- Lifecycle ---

    async def load(self) -> List[Timer]:
        """
        Restore the registry from the store.

        No driver survives a restart, so timers stored as Running are
        restored as Paused with their remaining time kept, and the corrected
        list is written back. Completed timers stay Completed. An unreadable
        document leaves the registry empty.
        """
        async with self._lock:
            try:
                stored = await self._repository.load()
            except PersistenceError as e:
                logger.error(f"Failed to load timers, starting empty: {e}")
                stored = []

            for timer_id in self._scheduler.active_ids():
                self._scheduler.stop(timer_id)

            restored: Dict[str, Timer] = {}
            normalized = False
            for timer in stored:
                if timer.id in restored:
                    logger.warning(f"Skipping duplicate timer id {timer.id} in stored document")
                    normalized = True
                    continue
                if timer.status == TimerStatus.RUNNING:
                    timer.status = TimerStatus.PAUSED
                    normalized = True
                restored[timer.id] = timer

            self._timers = restored
            snapshot = self._snapshot() if normalized else None
            result = self.list_timers()

        logger.info(f"Timers loaded: {len(result)} timer(s)")
        if snapshot is not None:
            logger.info("Stored running timers were restored as paused")
            await self._persist(snapshot, "timers")
        return result

    async def shutdown(self) -> None:
        """
        Stop all drivers, then wait for in-flight tick follow-ups.

        A completing tick drops its own driver before persisting and
        recording history, so the scheduler alone does not cover that work.
        """
        await self._scheduler.shutdown()
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # --- Mutations ---

    async def create(
        self,
        name: Any,
        category: Any,
        duration: Any,
        halfway_alert_enabled: bool = False
    ) -> Timer:
        """
        Create a paused timer with remaining == duration and persist the list.

        Raises:
            ValidationError: If name or category is empty or duration is not a
                positive whole number. Nothing is mutated in that case.
        """
        name = _require_text(name, "name")
        category = _require_text(category, "category")
        duration = parse_duration(duration)
        if not isinstance(halfway_alert_enabled, bool):
            raise ValidationError("halfway_alert_enabled must be a boolean")

        async with self._lock:
            timer = Timer(
                id=self._new_id(),
                name=name,
                category=category,
                duration=duration,
                remaining=duration,
                status=TimerStatus.PAUSED,
                halfway_alert_enabled=halfway_alert_enabled,
                halfway_triggered=False,
            )
            self._timers[timer.id] = timer
            snapshot = self._snapshot()
            created = timer.model_copy()

        logger.info(f"Timer created: {created.name} ({created.duration}s) in '{created.category}'")
        await self._persist(snapshot, created.name)
        return created

    async def start(self, timer_id: str) -> Timer:
        """Start a paused timer. Running or completed timers are left as they are."""
        return await self._apply_to_one(timer_id, self._start_locked, "started")

    async def pause(self, timer_id: str) -> Timer:
        """Pause a running timer. Anything else is left as it is."""
        return await self._apply_to_one(timer_id, self._pause_locked, "paused")

    async def reset(self, timer_id: str) -> Timer:
        """Stop the driver and rewind to a paused, full-length, untriggered timer"""
        return await self._apply_to_one(timer_id, self._reset_locked, "reset")

    async def delete(self, timer_id: str) -> Timer:
        """Stop the driver and remove the timer"""
        async with self._lock:
            timer = self._get_or_raise(timer_id)
            self._scheduler.stop(timer_id)
            del self._timers[timer_id]
            snapshot = self._snapshot()

        logger.info(f"Timer deleted: {timer.name}")
        await self._persist(snapshot, timer.name)
        return timer

    async def start_all(self, category: str) -> List[Timer]:
        """Start every paused timer in category; completed timers are skipped"""
        return await self._apply_to_category(category, self._start_locked, "started")

    async def pause_all(self, category: str) -> List[Timer]:
        """Pause every running timer in category"""
        return await self._apply_to_category(category, self._pause_locked, "paused")

    async def reset_all(self, category: str) -> List[Timer]:
        """Reset every timer in category"""
        return await self._apply_to_category(category, self._reset_locked, "reset")

    async def tick(self, timer_id: str) -> Optional[TickOutcome]:
        """
        Advance one timer by one tick. Called by the timer's driver.

        The state change happens under the registry lock. Persisting,
        notifying and recording history run shielded afterwards so that a
        pause landing mid-tick cannot drop them.

        Returns:
            None if the timer no longer exists
        """
        async with self._lock:
            timer = self._timers.get(timer_id)
            if timer is None:
                return None

            outcome = advance_timer(timer)
            if not outcome.changed:
                return outcome

            if outcome.completed:
                self._scheduler.stop(timer_id)
            snapshot = self._snapshot()

        follow_up = asyncio.ensure_future(self._after_tick(outcome, snapshot))
        self._pending.add(follow_up)
        follow_up.add_done_callback(self._pending.discard)
        await asyncio.shield(follow_up)
        return outcome

    # --- Internals ---

    def _get_or_raise(self, timer_id: str) -> Timer:
        timer = self._timers.get(timer_id)
        if timer is None:
            raise TimerNotFoundError(timer_id)
        return timer

    def _new_id(self) -> str:
        timer_id = uuid4().hex
        while timer_id in self._timers:
            timer_id = uuid4().hex
        return timer_id

    def _start_locked(self, timer: Timer) -> bool:
        if timer.status != TimerStatus.PAUSED:
            return False
        timer.status = TimerStatus.RUNNING
        self._scheduler.start(timer.id, self.tick)
        return True

    def _pause_locked(self, timer: Timer) -> bool:
        if timer.status != TimerStatus.RUNNING:
            return False
        self._scheduler.stop(timer.id)
        timer.status = TimerStatus.PAUSED
        return True

    def _reset_locked(self, timer: Timer) -> bool:
        self._scheduler.stop(timer.id)
        timer.remaining = timer.duration
        timer.status = TimerStatus.PAUSED
        timer.halfway_triggered = False
        return True

    async def _apply_to_one(
        self,
        timer_id: str,
        operation: Callable[[Timer], bool],
        label: str
    ) -> Timer:
        async with self._lock:
            timer = self._get_or_raise(timer_id)
            changed = operation(timer)
            snapshot = self._snapshot() if changed else None
            result = timer.model_copy()

        if snapshot is not None:
            logger.info(f"Timer {label}: {result.name}")
            await self._persist(snapshot, result.name)
        return result

    async def _apply_to_category(
        self,
        category: str,
        operation: Callable[[Timer], bool],
        label: str
    ) -> List[Timer]:
        async with self._lock:
            affected = []
            for timer in self._timers.values():
                if timer.category == category and operation(timer):
                    affected.append(timer.model_copy())
            snapshot = self._snapshot() if affected else None

        if snapshot is not None:
            logger.info(f"{len(affected)} timer(s) {label} in category '{category}'")
            await self._persist(snapshot, category)
        return affected

    def _snapshot(self) -> Tuple[int, str]:
        """Serialize the registry. Must be called with the registry lock held."""
        self._snapshot_seq += 1
        return self._snapshot_seq, self._repository.dump(list(self._timers.values()))

    async def _persist(self, snapshot: Tuple[int, str], subject: str) -> bool:
        """
        Write a snapshot unless a newer one has already been written.

        A failed write is logged and reported to the user; the in-memory
        state is kept and the next write supersedes it.
        """
        seq, document = snapshot
        async with self._write_lock:
            if seq <= self._latest_written_seq:
                return True
            self._latest_written_seq = seq
            try:
                await self._repository.save_document(document)
                return True
            except PersistenceError as e:
                logger.error(f"Failed to save timers: {e}")

        await self._notify(NotificationKind.SAVE_FAILED, subject)
        return False

    async def _after_tick(self, outcome: TickOutcome, snapshot: Tuple[int, str]) -> None:
        await self._persist(snapshot, outcome.timer_name)

        if outcome.halfway_reached:
            await self._notify(NotificationKind.HALFWAY, outcome.timer_name, outcome.timer_id)

        if outcome.completed:
            logger.info(f"Timer completed: {outcome.timer_name}")
            entry = HistoryEntry(name=outcome.timer_name, completed_at=self._clock())
            if not await self._history.append(entry):
                await self._notify(NotificationKind.SAVE_FAILED, "history")
            await self._notify(NotificationKind.COMPLETION, outcome.timer_name, outcome.timer_id)

    async def _notify(self, kind: NotificationKind, timer_name: str, timer_id: Optional[str] = None) -> None:
        try:
            await notify_timer_event(self._sink, kind, timer_name, timer_id)
        except Exception:
            logger.exception(f"Failed to deliver {kind.value} notification for {timer_name}")
