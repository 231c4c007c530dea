from typing import Optional

import redis.asyncio as redis

from scheduler_api.bus import EventBus
from scheduler_api.db.store import SchedulingStore

# Global runtime state initialized in lifespan.setup_resources
store: Optional[SchedulingStore] = None
redis_client: Optional[redis.Redis] = None
event_bus: Optional[EventBus] = None
