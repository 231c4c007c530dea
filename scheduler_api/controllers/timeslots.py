import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Response

from scheduler_api.controllers.events import require_event
from scheduler_api.dependencies import OptionalBus, Store
from scheduler_api.errors import NotFoundError
from scheduler_api.models.scheduling import TimeSlot, TimeSlotRequest
from scheduler_api.producers.scheduling_producer import build_change, publish_change

logger = logging.getLogger("scheduler_api.timeslots")
router = APIRouter(prefix="/events/{event_id}/timeslots", tags=["timeslots"])


def _slot_not_found(slot_id: str) -> NotFoundError:
    return NotFoundError(detail="Time slot not found", resource_type="timeslot", resource_id=slot_id)


@router.post("", status_code=201, response_model=TimeSlot)
async def create_timeslot(event_id: str, req: TimeSlotRequest, store: Store, bus: OptionalBus) -> TimeSlot:
    await require_event(store, event_id)
    now = datetime.now(timezone.utc)
    slot = TimeSlot(
        id=str(uuid.uuid4()),
        event_id=event_id,
        start_time=req.start_time,
        end_time=req.end_time,
        created_at=now,
        updated_at=now,
    )
    slot = await store.create_slot(slot)
    logger.info("Created timeslot id=%s event=%s", slot.id, event_id)
    await publish_change(bus, build_change("timeslot_created", event_id, timeslot_id=slot.id))
    return slot


@router.get("", response_model=list[TimeSlot])
async def list_timeslots(event_id: str, store: Store) -> list[TimeSlot]:
    return await store.list_slots(event_id)


@router.put("/{timeslot_id}", response_model=TimeSlot)
async def update_timeslot(
    event_id: str, timeslot_id: str, req: TimeSlotRequest, store: Store, bus: OptionalBus
) -> TimeSlot:
    existing = await store.get_slot(event_id, timeslot_id)
    if existing is None:
        raise _slot_not_found(timeslot_id)
    updated = await store.update_slot(
        existing.model_copy(
            update={
                "start_time": req.start_time,
                "end_time": req.end_time,
                "updated_at": datetime.now(timezone.utc),
            }
        )
    )
    if updated is None:
        raise _slot_not_found(timeslot_id)
    logger.info("Updated timeslot id=%s event=%s", timeslot_id, event_id)
    await publish_change(bus, build_change("timeslot_updated", event_id, timeslot_id=timeslot_id))
    return updated


@router.delete("/{timeslot_id}", status_code=204)
async def delete_timeslot(event_id: str, timeslot_id: str, store: Store, bus: OptionalBus) -> Response:
    if not await store.delete_slot(event_id, timeslot_id):
        raise _slot_not_found(timeslot_id)
    logger.info("Deleted timeslot id=%s event=%s", timeslot_id, event_id)
    await publish_change(bus, build_change("timeslot_deleted", event_id, timeslot_id=timeslot_id))
    return Response(status_code=204)
