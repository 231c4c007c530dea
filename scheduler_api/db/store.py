"""Store interface consumed by the controllers and the recommendation engine."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from scheduler_api.models.scheduling import AvailabilityRecord, Event, TimeSlot


def slot_sort_key(slot: TimeSlot) -> tuple[float, str]:
    """Order slots by start instant, then ID."""
    return (slot.start_time.timestamp(), slot.id)


@dataclass(frozen=True)
class StoreSnapshot:
    """Event, slots and availability read together for one event."""

    event: Event
    slots: list[TimeSlot] = field(default_factory=list)
    records: list[AvailabilityRecord] = field(default_factory=list)


class SchedulingStore(ABC):
    """Repository for events, time slots and availability records.

    Availability is unique per (event, user, slot): ``upsert_availability``
    replaces the status of an existing record instead of adding a second one.
    Deleting an event removes its slots and records; deleting a slot removes
    its records. Implementations raise ``StoreUnavailableError`` on I/O failure.
    """

    @abstractmethod
    async def get_event(self, event_id: str) -> Event | None:
        """Get event by ID."""

    @abstractmethod
    async def list_events(self) -> list[Event]:
        """List all events ordered by creation time, then ID."""

    @abstractmethod
    async def create_event(self, event: Event) -> Event:
        """Insert a new event."""

    @abstractmethod
    async def update_event(self, event: Event) -> Event | None:
        """Replace the mutable fields of an existing event."""

    @abstractmethod
    async def delete_event(self, event_id: str) -> bool:
        """Delete an event with its slots and availability."""

    @abstractmethod
    async def list_slots(self, event_id: str) -> list[TimeSlot]:
        """List an event's slots ordered by start time, then ID."""

    @abstractmethod
    async def get_slot(self, event_id: str, slot_id: str) -> TimeSlot | None:
        """Get a slot that belongs to the given event."""

    @abstractmethod
    async def create_slot(self, slot: TimeSlot) -> TimeSlot:
        """Insert a new slot."""

    @abstractmethod
    async def update_slot(self, slot: TimeSlot) -> TimeSlot | None:
        """Replace the time range of an existing slot."""

    @abstractmethod
    async def delete_slot(self, event_id: str, slot_id: str) -> bool:
        """Delete a slot with its availability records."""

    @abstractmethod
    async def list_availability(
        self, event_id: str, user_id: str | None = None
    ) -> list[AvailabilityRecord]:
        """List availability for an event, optionally for one user."""

    @abstractmethod
    async def get_availability(
        self, event_id: str, user_id: str, slot_id: str
    ) -> AvailabilityRecord | None:
        """Get the record for one (event, user, slot)."""

    @abstractmethod
    async def upsert_availability(self, record: AvailabilityRecord) -> AvailabilityRecord:
        """Insert a record or update the status of the existing one.

        On conflict the stored ``id`` and ``created_at`` are kept and the
        stored record is returned.
        """

    @abstractmethod
    async def delete_availability(self, event_id: str, user_id: str, slot_id: str) -> bool:
        """Delete the record for one (event, user, slot)."""

    @abstractmethod
    async def snapshot(self, event_id: str) -> StoreSnapshot | None:
        """Read an event, its slots and its availability in one consistent read.

        Returns None when the event does not exist.
        """

    async def ping(self) -> bool:
        """Report whether the backing storage is reachable."""
        return True

    async def close(self) -> None:
        """Release resources held by the store."""
        return None
