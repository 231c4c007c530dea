from typing import Literal, NotRequired, TypedDict

ChangeType = Literal[
    "event_created",
    "event_updated",
    "event_deleted",
    "timeslot_created",
    "timeslot_updated",
    "timeslot_deleted",
    "availability_upserted",
    "availability_deleted",
]


class SchedulingChangeEvent(TypedDict):
    type: ChangeType
    event_id: str
    timestamp: str
    timeslot_id: NotRequired[str]
    user_id: NotRequired[str]
