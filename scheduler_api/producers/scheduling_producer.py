import logging
from datetime import datetime, timezone

from scheduler_api.bus import EventBus
from scheduler_api.events import ChangeType, SchedulingChangeEvent

logger = logging.getLogger("scheduler_api.producers")


def build_change(
    change_type: ChangeType,
    event_id: str,
    timeslot_id: str | None = None,
    user_id: str | None = None,
) -> SchedulingChangeEvent:
    change: SchedulingChangeEvent = {
        "type": change_type,
        "event_id": event_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if timeslot_id is not None:
        change["timeslot_id"] = timeslot_id
    if user_id is not None:
        change["user_id"] = user_id
    return change


async def publish_change(event_bus: EventBus | None, change: SchedulingChangeEvent) -> None:
    if event_bus is None:
        return
    try:
        await event_bus.publish_change(change)
    except Exception as e:
        # Notifications are best effort; the write already succeeded
        logger.warning("Failed to publish %s for event %s: %r", change["type"], change["event_id"], e)
