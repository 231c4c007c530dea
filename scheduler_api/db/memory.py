"""Process-local store backed by dictionaries.

Suited to development and tests. Every operation runs under one
``asyncio.Lock`` so a snapshot never interleaves with a write.
"""

import asyncio

from scheduler_api.db.store import SchedulingStore, StoreSnapshot, slot_sort_key
from scheduler_api.models.scheduling import AvailabilityRecord, Event, TimeSlot

AvailabilityKey = tuple[str, str, str]


class MemoryStore(SchedulingStore):
    def __init__(self) -> None:
        self._events: dict[str, Event] = {}
        self._slots: dict[str, TimeSlot] = {}
        self._availability: dict[AvailabilityKey, AvailabilityRecord] = {}
        self._lock = asyncio.Lock()

    async def get_event(self, event_id: str) -> Event | None:
        async with self._lock:
            return self._events.get(event_id)

    async def list_events(self) -> list[Event]:
        async with self._lock:
            return sorted(self._events.values(), key=lambda e: (e.created_at.timestamp(), e.id))

    async def create_event(self, event: Event) -> Event:
        async with self._lock:
            self._events[event.id] = event
            return event

    async def update_event(self, event: Event) -> Event | None:
        async with self._lock:
            if event.id not in self._events:
                return None
            self._events[event.id] = event
            return event

    async def delete_event(self, event_id: str) -> bool:
        async with self._lock:
            if self._events.pop(event_id, None) is None:
                return False
            self._slots = {k: s for k, s in self._slots.items() if s.event_id != event_id}
            self._availability = {
                k: r for k, r in self._availability.items() if r.event_id != event_id
            }
            return True

    def _event_slots(self, event_id: str) -> list[TimeSlot]:
        return sorted(
            (s for s in self._slots.values() if s.event_id == event_id),
            key=slot_sort_key,
        )

    def _event_records(self, event_id: str, user_id: str | None = None) -> list[AvailabilityRecord]:
        records = [
            r
            for r in self._availability.values()
            if r.event_id == event_id and (user_id is None or r.user_id == user_id)
        ]
        records.sort(key=lambda r: (r.user_id, r.timeslot_id))
        return records

    async def list_slots(self, event_id: str) -> list[TimeSlot]:
        async with self._lock:
            return self._event_slots(event_id)

    async def get_slot(self, event_id: str, slot_id: str) -> TimeSlot | None:
        async with self._lock:
            slot = self._slots.get(slot_id)
            if slot is None or slot.event_id != event_id:
                return None
            return slot

    async def create_slot(self, slot: TimeSlot) -> TimeSlot:
        async with self._lock:
            self._slots[slot.id] = slot
            return slot

    async def update_slot(self, slot: TimeSlot) -> TimeSlot | None:
        async with self._lock:
            existing = self._slots.get(slot.id)
            if existing is None or existing.event_id != slot.event_id:
                return None
            self._slots[slot.id] = slot
            return slot

    async def delete_slot(self, event_id: str, slot_id: str) -> bool:
        async with self._lock:
            existing = self._slots.get(slot_id)
            if existing is None or existing.event_id != event_id:
                return False
            del self._slots[slot_id]
            self._availability = {
                k: r for k, r in self._availability.items() if r.timeslot_id != slot_id
            }
            return True

    async def list_availability(
        self, event_id: str, user_id: str | None = None
    ) -> list[AvailabilityRecord]:
        async with self._lock:
            return self._event_records(event_id, user_id)

    async def get_availability(
        self, event_id: str, user_id: str, slot_id: str
    ) -> AvailabilityRecord | None:
        async with self._lock:
            return self._availability.get((event_id, user_id, slot_id))

    async def upsert_availability(self, record: AvailabilityRecord) -> AvailabilityRecord:
        key = (record.event_id, record.user_id, record.timeslot_id)
        async with self._lock:
            existing = self._availability.get(key)
            if existing is not None:
                record = existing.model_copy(
                    update={"status": record.status, "updated_at": record.updated_at}
                )
            self._availability[key] = record
            return record

    async def delete_availability(self, event_id: str, user_id: str, slot_id: str) -> bool:
        async with self._lock:
            return self._availability.pop((event_id, user_id, slot_id), None) is not None

    async def snapshot(self, event_id: str) -> StoreSnapshot | None:
        async with self._lock:
            event = self._events.get(event_id)
            if event is None:
                return None
            return StoreSnapshot(
                event=event,
                slots=self._event_slots(event_id),
                records=self._event_records(event_id),
            )
