"""Base repository for whole-document persistence"""
import json
from typing import Generic, List, Type, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from multitimer.exceptions import PersistenceError
from multitimer.infra.store.base import KeyValueStore

T = TypeVar('T', bound=BaseModel)


class DocumentRepository(Generic[T]):
    """
    Reads and writes an ordered list of records stored as one JSON document.
    Every save rewrites the whole document. Hides the store from the services.
    """

    def __init__(self, store: KeyValueStore, key: str, model_class: Type[T]):
        self._store = store
        self._key = key
        self._model_class = model_class
        self._adapter = TypeAdapter(List[model_class])

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> List[T]:
        """Return the stored records, or an empty list if none are stored"""
        raw = await self._store.get(self._key)
        if raw is None:
            return []
        try:
            return self._adapter.validate_json(raw)
        except PydanticValidationError as e:
            raise PersistenceError(f"Stored document '{self._key}' is invalid: {e}") from e

    def dump(self, records: List[T]) -> str:
        """Serialize records to the document format"""
        return json.dumps([record.model_dump(mode="json", by_alias=True) for record in records])

    async def save_document(self, document: str) -> None:
        """Write an already serialized document"""
        await self._store.set(self._key, document)

    async def save(self, records: List[T]) -> None:
        await self.save_document(self.dump(records))

    async def clear(self) -> None:
        await self._store.delete(self._key)
