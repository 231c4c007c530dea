import logging
import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Response

from scheduler_api.controllers.events import require_event
from scheduler_api.dependencies import OptionalBus, Store
from scheduler_api.errors import NotFoundError
from scheduler_api.models.scheduling import (
    AvailabilityRecord,
    AvailabilityRequest,
    AvailabilityStatusRequest,
)
from scheduler_api.producers.scheduling_producer import build_change, publish_change

logger = logging.getLogger("scheduler_api.availability")
router = APIRouter(prefix="/events/{event_id}/users/{user_id}/availability", tags=["availability"])


def _record_not_found(user_id: str, timeslot_id: str) -> NotFoundError:
    return NotFoundError(
        detail="Availability record not found",
        resource_type="availability",
        user_id=user_id,
        timeslot_id=timeslot_id,
    )


@router.post("", status_code=201, response_model=AvailabilityRecord)
async def submit_availability(
    event_id: str, user_id: str, req: AvailabilityRequest, store: Store, bus: OptionalBus
) -> AvailabilityRecord:
    await require_event(store, event_id)
    if await store.get_slot(event_id, req.timeslot_id) is None:
        logger.warning("Time slot %s not found for event %s", req.timeslot_id, event_id)
        raise NotFoundError(detail="Time slot not found", resource_type="timeslot", resource_id=req.timeslot_id)
    now = datetime.now(timezone.utc)
    record = await store.upsert_availability(
        AvailabilityRecord(
            id=str(uuid.uuid4()),
            user_id=user_id,
            event_id=event_id,
            timeslot_id=req.timeslot_id,
            status=req.status,
            created_at=now,
            updated_at=now,
        )
    )
    logger.info("Upserted availability user=%s event=%s slot=%s status=%s",
                user_id, event_id, req.timeslot_id, record.status)
    await publish_change(
        bus, build_change("availability_upserted", event_id, timeslot_id=req.timeslot_id, user_id=user_id)
    )
    return record


@router.get("", response_model=list[AvailabilityRecord])
async def get_user_availability(event_id: str, user_id: str, store: Store) -> list[AvailabilityRecord]:
    return await store.list_availability(event_id, user_id=user_id)


@router.put("/{timeslot_id}", response_model=AvailabilityRecord)
async def update_availability(
    event_id: str,
    user_id: str,
    timeslot_id: str,
    req: AvailabilityStatusRequest,
    store: Store,
    bus: OptionalBus,
) -> AvailabilityRecord:
    existing = await store.get_availability(event_id, user_id, timeslot_id)
    if existing is None:
        raise _record_not_found(user_id, timeslot_id)
    record = await store.upsert_availability(
        existing.model_copy(update={"status": req.status, "updated_at": datetime.now(timezone.utc)})
    )
    logger.info("Updated availability user=%s event=%s slot=%s status=%s",
                user_id, event_id, timeslot_id, record.status)
    await publish_change(
        bus, build_change("availability_upserted", event_id, timeslot_id=timeslot_id, user_id=user_id)
    )
    return record


@router.delete("/{timeslot_id}", status_code=204)
async def delete_availability(
    event_id: str, user_id: str, timeslot_id: str, store: Store, bus: OptionalBus
) -> Response:
    if not await store.delete_availability(event_id, user_id, timeslot_id):
        raise _record_not_found(user_id, timeslot_id)
    logger.info("Deleted availability user=%s event=%s slot=%s", user_id, event_id, timeslot_id)
    await publish_change(
        bus, build_change("availability_deleted", event_id, timeslot_id=timeslot_id, user_id=user_id)
    )
    return Response(status_code=204)
