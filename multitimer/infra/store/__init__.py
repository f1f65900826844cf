"""Key-value store adapters"""
from .base import KeyValueStore
from .memory import InMemoryStore
from .sqlalchemy_store import SqlAlchemyStore

__all__ = ["KeyValueStore", "InMemoryStore", "SqlAlchemyStore"]
