"""Persistence port"""
from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Blob store holding whole serialized documents by key.
    Implementations raise PersistenceError on any read or write failure.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the stored document, or None if the key is absent"""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Overwrite the document stored under key"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the key. Removing an absent key is not an error."""

    async def close(self) -> None:
        """Release any resources held by the store"""
        return None
