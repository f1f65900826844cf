"""Database session configuration"""

import logging
from typing import Tuple

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

logger = logging.getLogger(__name__)


def create_engine_and_session(database_url: str) -> Tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """
    Create an async engine and its session factory.

    Args:
        database_url: SQLAlchemy async URL, e.g. sqlite+aiosqlite:///./multitimer.db

    Returns:
        (engine, session factory)
    """
    if database_url.startswith("sqlite://"):
        # Plain sqlite URLs need the async driver
        database_url = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    engine = create_async_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using them
        echo=False,  # Set to True to see SQL queries in logs
    )

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )

    logger.info(f"Database engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine, session_factory
