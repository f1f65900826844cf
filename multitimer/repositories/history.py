"""Completion history repository"""
import json
import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError

from multitimer.exceptions import PersistenceError
from multitimer.infra.store.base import KeyValueStore
from multitimer.models.history import HistoryEntry

from .base import DocumentRepository

logger = logging.getLogger(__name__)

HISTORY_KEY = "@timer_history"


class HistoryRepository(DocumentRepository[HistoryEntry]):
    """Repository for the newest-first completion history document"""

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY):
        super().__init__(store, key, HistoryEntry)

    async def load(self) -> List[HistoryEntry]:
        """
        Return the stored entries, skipping records that cannot be read.

        One bad record does not cost the rest of the history; it is logged
        and dropped from the next save.

        Raises:
            PersistenceError: If the document is not a JSON array
        """
        raw = await self._store.get(self.key)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except ValueError as e:
            raise PersistenceError(f"Stored document '{self.key}' is not valid JSON: {e}") from e
        if not isinstance(records, list):
            raise PersistenceError(f"Stored document '{self.key}' is not a list")

        entries = []
        for index, record in enumerate(records):
            try:
                entries.append(HistoryEntry.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(f"Skipping unreadable history record {index}: {e.error_count()} error(s)")
        return entries
