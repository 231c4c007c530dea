from scheduler_api.models.scheduling import TimeSlot


def slot_duration_minutes(slot: TimeSlot) -> float:
    """Length of a slot in real-valued minutes."""
    return (slot.end_time - slot.start_time).total_seconds() / 60


def is_eligible(required_duration: int, slot: TimeSlot) -> bool:
    """Whether the slot is long enough to host an event of ``required_duration`` minutes.

    The comparison is on unrounded minutes, so a slot one second short fails.
    """
    return slot_duration_minutes(slot) >= required_duration


def eligible_slots(required_duration: int, slots: list[TimeSlot]) -> list[TimeSlot]:
    return [slot for slot in slots if is_eligible(required_duration, slot)]
