import logging

from multitimer import config

# Log configuration (before other imports)
# ruff: noqa: E402
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True
)

from contextlib import asynccontextmanager  # noqa: E402
from typing import Optional  # noqa: E402

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from multitimer import __version__  # noqa: E402
from multitimer.api.base import api_router  # noqa: E402
from multitimer.infra.store import InMemoryStore, KeyValueStore, SqlAlchemyStore  # noqa: E402
from multitimer.repositories import HistoryRepository, TimerRepository  # noqa: E402
from multitimer.services.history import HistoryLog  # noqa: E402
from multitimer.services.notifications import (  # noqa: E402
    CompositeNotificationSink,
    ExpoPushNotificationSink,
    LoggingNotificationSink,
    NotificationFeed,
    NotificationSink,
)
from multitimer.services.registry import TimerRegistry  # noqa: E402
from multitimer.services.scheduler import TickScheduler  # noqa: E402

logger = logging.getLogger(__name__)


def build_store() -> KeyValueStore:
    """Create the key-value store selected by STORE_BACKEND"""
    if config.STORE_BACKEND == "memory":
        return InMemoryStore()
    if config.STORE_BACKEND == "sqlalchemy":
        return SqlAlchemyStore(config.DATABASE_URL)
    raise ValueError(f"Unsupported STORE_BACKEND: {config.STORE_BACKEND}")


def build_sink(feed: NotificationFeed) -> NotificationSink:
    sinks = [LoggingNotificationSink(), feed]
    if config.EXPO_PUSH_TOKENS:
        sinks.append(ExpoPushNotificationSink(config.EXPO_PUSH_TOKENS))
        logger.info(f"Expo push enabled for {len(config.EXPO_PUSH_TOKENS)} device(s)")
    return CompositeNotificationSink(sinks)


def create_app(
    store: Optional[KeyValueStore] = None,
    tick_interval: Optional[float] = None
) -> FastAPI:
    """
    Build the API application.

    The engine is assembled and loaded from the store when the app starts and
    every timer driver is stopped when it shuts down.

    Args:
        store: Key-value store to use instead of the configured one
        tick_interval: Seconds between ticks, defaults to TICK_INTERVAL_SECONDS
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        kv_store = store if store is not None else build_store()
        interval = tick_interval if tick_interval is not None else config.TICK_INTERVAL_SECONDS

        feed = NotificationFeed(config.NOTIFICATION_FEED_SIZE)
        history = HistoryLog(HistoryRepository(kv_store))
        registry = TimerRegistry(
            TimerRepository(kv_store),
            history,
            scheduler=TickScheduler(interval),
            sink=build_sink(feed),
        )

        await history.load()
        await registry.load()

        app.state.registry = registry
        app.state.history = history
        app.state.notification_feed = feed
        logger.info("Timer engine started")
        try:
            yield
        finally:
            await registry.shutdown()
            await kv_store.close()
            logger.info("Timer engine stopped")

    app = FastAPI(
        title="Multitimer API",
        description="Timer lifecycle and scheduling engine for the multi-timer app",
        version=__version__,
        lifespan=lifespan
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Specify your frontend URL in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include all API routes
    app.include_router(api_router)

    @app.get("/")
    def read_root():
        return {
            "message": "Multitimer API",
            "docs": "/docs",
            "version": __version__
        }

    return app


app = create_app()
