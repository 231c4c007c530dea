import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Response

from scheduler_api.db.store import SchedulingStore
from scheduler_api.dependencies import OptionalBus, Store
from scheduler_api.errors import NotFoundError
from scheduler_api.models.scheduling import CreateEventRequest, Event, UpdateEventRequest
from scheduler_api.producers.scheduling_producer import build_change, publish_change

logger = logging.getLogger("scheduler_api.events")
router = APIRouter(prefix="/events", tags=["events"])


async def require_event(store: SchedulingStore, event_id: str) -> Event:
    event = await store.get_event(event_id)
    if event is None:
        logger.warning("Event not found: %s", event_id)
        raise NotFoundError(detail="Event not found", resource_type="event", resource_id=event_id)
    return event


@router.post("", status_code=201, response_model=Event)
async def create_event(req: CreateEventRequest, store: Store, bus: OptionalBus) -> Event:
    now = datetime.now(timezone.utc)
    event = Event(
        id=str(uuid.uuid4()),
        title=req.title,
        description=req.description,
        organizer_id=req.organizer_id,
        required_duration=req.required_duration,
        status="active",
        created_at=now,
        updated_at=now,
    )
    event = await store.create_event(event)
    logger.info("Created event id=%s duration=%d", event.id, event.required_duration)
    await publish_change(bus, build_change("event_created", event.id))
    return event


@router.get("", response_model=list[Event])
async def list_events(store: Store) -> list[Event]:
    return await store.list_events()


@router.get("/{event_id}", response_model=Event)
async def get_event(event_id: str, store: Store) -> Event:
    return await require_event(store, event_id)


@router.put("/{event_id}", response_model=Event)
async def update_event(event_id: str, req: UpdateEventRequest, store: Store, bus: OptionalBus) -> Event:
    existing = await require_event(store, event_id)
    changes = req.model_dump(exclude={"status"})
    if req.status is not None:
        changes["status"] = req.status
    changes["updated_at"] = datetime.now(timezone.utc)
    updated = await store.update_event(existing.model_copy(update=changes))
    if updated is None:
        # deleted between the lookup and the update
        raise NotFoundError(detail="Event not found", resource_type="event", resource_id=event_id)
    logger.info("Updated event id=%s", event_id)
    await publish_change(bus, build_change("event_updated", event_id))
    return updated


@router.delete("/{event_id}", status_code=204)
async def delete_event(event_id: str, store: Store, bus: OptionalBus) -> Response:
    if not await store.delete_event(event_id):
        logger.warning("Event not found: %s", event_id)
        raise NotFoundError(detail="Event not found", resource_type="event", resource_id=event_id)
    logger.info("Deleted event id=%s", event_id)
    await publish_change(bus, build_change("event_deleted", event_id))
    return Response(status_code=204)
