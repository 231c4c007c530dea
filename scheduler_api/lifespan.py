"""Lifespan management for the FastAPI application.

Builds the store, Redis client and event bus on startup and releases them
on shutdown.
"""

import logging
from dataclasses import dataclass

import redis.asyncio as redis
from redis.asyncio import BlockingConnectionPool as RedisConnectionPool

from scheduler_api import state
from scheduler_api.bus import EventBus
from scheduler_api.config import get_settings
from scheduler_api.db import core as db_core
from scheduler_api.db.memory import MemoryStore
from scheduler_api.db.postgres import PostgresStore
from scheduler_api.db.store import SchedulingStore

logger = logging.getLogger(__name__)


@dataclass
class LifespanResources:
    """Container for resources initialized during lifespan."""

    store: SchedulingStore | None = None
    redis_client: redis.Redis | None = None
    event_bus: EventBus | None = None
    db_enabled: bool = False


async def init_redis() -> redis.Redis:
    """Initialize Redis connection with connection pool.

    Returns:
        Configured Redis client.
    """
    settings = get_settings()

    redis_pool = RedisConnectionPool(
        host=settings.redis.host,
        port=settings.redis.port,
        password=settings.redis.password if settings.redis.password else None,
        max_connections=settings.redis.max_connections,
        timeout=settings.redis.pool_timeout_sec,
        socket_timeout=settings.redis.socket_timeout,
        socket_connect_timeout=settings.redis.socket_connect_timeout,
    )

    candidate_client = redis.Redis(connection_pool=redis_pool, decode_responses=True)
    if hasattr(candidate_client, "__await__"):
        redis_client = await candidate_client
    else:
        redis_client = candidate_client
    return redis_client


async def init_store() -> tuple[SchedulingStore, bool]:
    """Create the configured store.

    Returns:
        The store and whether a database pool was opened for it.
    """
    backend = get_settings().store.backend
    if backend == "postgres":
        await db_core.init_pool()
        logger.info("Using PostgreSQL scheduling store")
        return PostgresStore(), True
    logger.info("Using in-memory scheduling store")
    return MemoryStore(), False


async def setup_resources(enable_event_bus: bool | None = None) -> LifespanResources:
    """Set up all shared resources.

    Args:
        enable_event_bus: Override for the ENABLE_EVENT_BUS feature flag.
    """
    if enable_event_bus is None:
        enable_event_bus = get_settings().features.event_bus

    resources = LifespanResources()
    resources.store, resources.db_enabled = await init_store()

    if enable_event_bus:
        resources.redis_client = await init_redis()
        resources.event_bus = EventBus(resources.redis_client)

    state.store = resources.store
    state.redis_client = resources.redis_client
    state.event_bus = resources.event_bus
    return resources


async def cleanup_resources(resources: LifespanResources) -> None:
    """Clean up all resources on shutdown."""
    if resources.store is not None:
        try:
            await resources.store.close()
        except Exception as e:
            logger.warning("Failed to close store: %s", e)

    if resources.redis_client:
        aclose = getattr(resources.redis_client, "aclose", None)
        if callable(aclose):
            await aclose()
        else:
            close = getattr(resources.redis_client, "close", None)
            if callable(close):
                close()

    state.store = None
    state.redis_client = None
    state.event_bus = None
