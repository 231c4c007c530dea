"""
Event bus for scheduling change notifications, backed by Redis pub/sub.
"""
import json
from typing import Final

import redis.asyncio as redis

from scheduler_api.events import SchedulingChangeEvent

CHANNEL_SCHEDULING_PREFIX: Final[str] = "scheduling:"


class EventBus:
    def __init__(self, redis_client: redis.Redis):
        self.redis_client = redis_client

    @staticmethod
    def event_channel(event_id: str) -> str:
        return f"{CHANNEL_SCHEDULING_PREFIX}{event_id}"

    async def publish_change(self, change: SchedulingChangeEvent) -> int:
        """Publish a change on its event's channel; returns the subscriber count."""
        return await self.redis_client.publish(self.event_channel(change["event_id"]), json.dumps(change))
