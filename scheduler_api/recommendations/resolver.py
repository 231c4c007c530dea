"""Classify the users who responded to an event as available or not per slot."""

from dataclasses import dataclass

from scheduler_api.models.scheduling import AvailabilityRecord


@dataclass(frozen=True)
class AvailabilityPartition:
    available: list[str]
    unavailable: list[str]


def known_users(event_id: str, records: list[AvailabilityRecord]) -> list[str]:
    """Distinct users with at least one record for the event, sorted."""
    return sorted({r.user_id for r in records if r.event_id == event_id})


class AvailabilityResolver:
    """Partitions an event's known users for any of its slots.

    A user is available for a slot only if a record for (event, user, slot)
    says ``available``. An ``unavailable`` record and a missing record both
    put the user in the unavailable partition. Users who never responded to
    the event are not part of either partition.
    """

    def __init__(self, event_id: str, records: list[AvailabilityRecord]):
        self.event_id = event_id
        self.users = known_users(event_id, records)
        self._available: set[tuple[str, str]] = {
            (r.user_id, r.timeslot_id)
            for r in records
            if r.event_id == event_id and r.status == "available"
        }

    def resolve(self, slot_id: str) -> AvailabilityPartition:
        available: list[str] = []
        unavailable: list[str] = []
        for user_id in self.users:
            if (user_id, slot_id) in self._available:
                available.append(user_id)
            else:
                unavailable.append(user_id)
        return AvailabilityPartition(available=available, unavailable=unavailable)
