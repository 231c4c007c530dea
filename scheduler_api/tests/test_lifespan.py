"""Tests for lifespan management."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from scheduler_api import state


class TestLifespanResources:

    def test_lifespan_resources_defaults(self):
        from scheduler_api.lifespan import LifespanResources

        resources = LifespanResources()
        assert resources.store is None
        assert resources.redis_client is None
        assert resources.event_bus is None
        assert resources.db_enabled is False


class TestInitRedis:

    @pytest.mark.asyncio
    async def test_init_redis_creates_client(self):
        from scheduler_api.lifespan import init_redis

        mock_redis_class = MagicMock()
        mock_client = MagicMock(spec=["ping"])
        mock_redis_class.return_value = mock_client

        with patch("scheduler_api.lifespan.redis.Redis", mock_redis_class):
            result = await init_redis()

        assert result is mock_client
        mock_redis_class.assert_called_once()


class TestInitStore:

    @pytest.mark.asyncio
    async def test_memory_backend(self):
        from scheduler_api.db.memory import MemoryStore
        from scheduler_api.lifespan import init_store

        with patch("scheduler_api.lifespan.get_settings") as mock_settings:
            mock_settings.return_value.store.backend = "memory"
            store, db_enabled = await init_store()

        assert isinstance(store, MemoryStore)
        assert db_enabled is False

    @pytest.mark.asyncio
    async def test_postgres_backend_opens_pool(self):
        from scheduler_api.db.postgres import PostgresStore
        from scheduler_api.lifespan import init_store

        with patch("scheduler_api.lifespan.get_settings") as mock_settings, \
             patch("scheduler_api.lifespan.db_core.init_pool", new_callable=AsyncMock) as mock_init:
            mock_settings.return_value.store.backend = "postgres"
            store, db_enabled = await init_store()

        mock_init.assert_called_once()
        assert isinstance(store, PostgresStore)
        assert db_enabled is True


class TestSetupResources:

    @pytest.mark.asyncio
    async def test_setup_resources_populates_state(self):
        from scheduler_api.lifespan import cleanup_resources, setup_resources

        mock_store = MagicMock()
        mock_store.close = AsyncMock()
        mock_redis = MagicMock()
        mock_redis.aclose = AsyncMock()

        with patch("scheduler_api.lifespan.init_store", new_callable=AsyncMock, return_value=(mock_store, False)), \
             patch("scheduler_api.lifespan.init_redis", new_callable=AsyncMock, return_value=mock_redis):
            resources = await setup_resources(enable_event_bus=True)

        assert state.store is mock_store
        assert state.redis_client is mock_redis
        assert state.event_bus is resources.event_bus
        assert resources.event_bus.redis_client is mock_redis

        await cleanup_resources(resources)

        mock_store.close.assert_called_once()
        mock_redis.aclose.assert_called_once()
        assert state.store is None
        assert state.event_bus is None

    @pytest.mark.asyncio
    async def test_setup_without_event_bus(self):
        from scheduler_api.lifespan import cleanup_resources, setup_resources

        with patch("scheduler_api.lifespan.init_redis", new_callable=AsyncMock) as mock_init_redis:
            resources = await setup_resources(enable_event_bus=False)

        mock_init_redis.assert_not_called()
        assert resources.event_bus is None
        assert state.event_bus is None
        await cleanup_resources(resources)
