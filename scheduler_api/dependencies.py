"""Dependency injection for FastAPI endpoints.

Controllers receive the store, the recommendation engine and the event bus
through these providers instead of reaching into global state.

Usage in controllers:
    from scheduler_api.dependencies import Store

    @router.get("/events/{event_id}")
    async def get_event(event_id: str, store: Store):
        return await store.get_event(event_id)
"""

from typing import Annotated

from fastapi import Depends

from scheduler_api import state
from scheduler_api.bus import EventBus
from scheduler_api.config import get_settings
from scheduler_api.db.store import SchedulingStore
from scheduler_api.errors import ServiceUnavailableError
from scheduler_api.recommendations import RecommendationEngine


def get_store() -> SchedulingStore:
    """Get the scheduling store.

    Raises:
        ServiceUnavailableError: If no store has been initialized.
    """
    if state.store is None:
        raise ServiceUnavailableError(detail="Store not initialized")
    return state.store


def get_engine(store: Annotated[SchedulingStore, Depends(get_store)]) -> RecommendationEngine:
    """Build a recommendation engine over the current store."""
    return RecommendationEngine(store, read_timeout=get_settings().store.read_timeout_sec)


def get_optional_event_bus() -> EventBus | None:
    """Get the EventBus if available, or None."""
    return state.event_bus


Store = Annotated[SchedulingStore, Depends(get_store)]
Engine = Annotated[RecommendationEngine, Depends(get_engine)]
OptionalBus = Annotated[EventBus | None, Depends(get_optional_event_bus)]
