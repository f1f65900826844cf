"""SQLAlchemy-backed key-value store"""
import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from multitimer.db.base import Base
from multitimer.db.models.kv_record import KeyValueRecord
from multitimer.db.session import create_engine_and_session
from multitimer.exceptions import PersistenceError

from .base import KeyValueStore

logger = logging.getLogger(__name__)


class SqlAlchemyStore(KeyValueStore):
    """Stores each document as one row of the kv_records table"""

    def __init__(self, database_url: str):
        self._engine, self._session_factory = create_engine_and_session(database_url)
        self._initialized = False

    async def init(self) -> None:
        """Create the kv_records table if it does not exist"""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to initialize store: {e}") from e
        self._initialized = True

    async def _ensure_initialized(self) -> None:
        if not self._initialized:
            await self.init()

    async def get(self, key: str) -> Optional[str]:
        await self._ensure_initialized()
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(KeyValueRecord.value).where(KeyValueRecord.key == key)
                )
                return result.scalar_one_or_none()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e

    async def set(self, key: str, value: str) -> None:
        await self._ensure_initialized()
        try:
            async with self._session_factory() as session:
                await session.merge(KeyValueRecord(key=key, value=value))
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to write '{key}': {e}") from e

    async def delete(self, key: str) -> None:
        await self._ensure_initialized()
        try:
            async with self._session_factory() as session:
                await session.execute(delete(KeyValueRecord).where(KeyValueRecord.key == key))
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            raise PersistenceError(f"Failed to delete '{key}': {e}") from e

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("Database engine disposed")
