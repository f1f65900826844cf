"""History Log - append-only record of completed timers"""
import asyncio
import logging
from typing import List

from multitimer.exceptions import PersistenceError
from multitimer.models.history import HistoryEntry
from multitimer.repositories.history import HistoryRepository

logger = logging.getLogger(__name__)


class HistoryLog:
    """
    Newest-first list of completion records.

    Entries are never reordered or edited; the only removal is a full wipe.
    A failed write keeps the in-memory list and is superseded by the next
    successful one.
    """

    def __init__(self, repository: HistoryRepository):
        self._repository = repository
        self._entries: List[HistoryEntry] = []
        self._lock = asyncio.Lock()

    async def load(self) -> List[HistoryEntry]:
        """Restore the history from the store. Unreadable history starts empty."""
        async with self._lock:
            try:
                self._entries = await self._repository.load()
            except PersistenceError as e:
                logger.error(f"Failed to load history, starting empty: {e}")
                self._entries = []
            logger.info(f"History loaded: {len(self._entries)} entries")
            return list(self._entries)

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    async def append(self, entry: HistoryEntry) -> bool:
        """
        Insert an entry at the front and persist the whole list.

        Returns:
            True if the write succeeded
        """
        async with self._lock:
            self._entries.insert(0, entry.model_copy())
            return await self._persist()

    async def clear(self) -> bool:
        """
        Remove every entry and persist the empty list.

        Returns:
            True if the write succeeded
        """
        async with self._lock:
            self._entries = []
            logger.info("History cleared")
            return await self._persist()

    async def _persist(self) -> bool:
        try:
            await self._repository.save(self._entries)
            return True
        except PersistenceError as e:
            logger.error(f"Failed to save history: {e}")
            return False
