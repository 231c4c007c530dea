"""PostgreSQL-backed scheduling store."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from scheduler_api.db.core import _get_connection, close_pool
from scheduler_api.db.store import SchedulingStore, StoreSnapshot, slot_sort_key
from scheduler_api.models.scheduling import AvailabilityRecord, Event, TimeSlot

logger = logging.getLogger(__name__)

_EVENT_COLUMNS = "id, title, description, organizer_id, required_duration, status, created_at, updated_at"
_SLOT_COLUMNS = "id, event_id, start_time, start_offset, end_time, end_offset, created_at, updated_at"
_AVAILABILITY_COLUMNS = "id, user_id, event_id, timeslot_id, status, created_at, updated_at"


def _event_from_row(row: tuple[Any, ...]) -> Event:
    return Event(
        id=row[0],
        title=row[1],
        description=row[2],
        organizer_id=row[3],
        required_duration=row[4],
        status=row[5],
        created_at=row[6],
        updated_at=row[7],
    )


def _split_wall_clock(value: datetime) -> tuple[datetime, int | None]:
    """Split a datetime into its naive wall-clock part and UTC offset in seconds."""
    offset = value.utcoffset()
    if offset is None:
        return value, None
    return value.replace(tzinfo=None), int(offset.total_seconds())


def _join_wall_clock(wall: datetime, offset: int | None) -> datetime:
    if offset is None:
        return wall
    return wall.replace(tzinfo=timezone(timedelta(seconds=offset)))


def _slot_params(slot: TimeSlot) -> tuple[Any, ...]:
    return (*_split_wall_clock(slot.start_time), *_split_wall_clock(slot.end_time))


def _slot_from_row(row: tuple[Any, ...]) -> TimeSlot:
    return TimeSlot(
        id=row[0],
        event_id=row[1],
        start_time=_join_wall_clock(row[2], row[3]),
        end_time=_join_wall_clock(row[4], row[5]),
        created_at=row[6],
        updated_at=row[7],
    )


def _availability_from_row(row: tuple[Any, ...]) -> AvailabilityRecord:
    return AvailabilityRecord(
        id=row[0],
        user_id=row[1],
        event_id=row[2],
        timeslot_id=row[3],
        status=row[4],
        created_at=row[5],
        updated_at=row[6],
    )


class PostgresStore(SchedulingStore):
    """Store over the ``events``, ``time_slots`` and ``availability`` tables.

    Foreign keys cascade deletes from events to slots to availability, and a
    unique constraint on (event_id, user_id, timeslot_id) backs the upsert.
    Slot times keep the UTC offset they were submitted with, or none.
    """

    async def get_event(self, event_id: str) -> Event | None:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = %s",
                (event_id,),
            )
            row = await cur.fetchone()
            return _event_from_row(row) if row else None

    async def list_events(self) -> list[Event]:
        async with _get_connection() as conn:
            cur = await conn.execute(f"SELECT {_EVENT_COLUMNS} FROM events ORDER BY created_at, id")
            return [_event_from_row(row) async for row in cur]

    async def create_event(self, event: Event) -> Event:
        async with _get_connection() as conn:
            await conn.execute(
                f"INSERT INTO events ({_EVENT_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    event.id,
                    event.title,
                    event.description,
                    event.organizer_id,
                    event.required_duration,
                    event.status,
                    event.created_at,
                    event.updated_at,
                ),
            )
        return event

    async def update_event(self, event: Event) -> Event | None:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"""UPDATE events
                    SET title = %s, description = %s, organizer_id = %s,
                        required_duration = %s, status = %s, updated_at = %s
                    WHERE id = %s
                    RETURNING {_EVENT_COLUMNS}""",
                (
                    event.title,
                    event.description,
                    event.organizer_id,
                    event.required_duration,
                    event.status,
                    event.updated_at,
                    event.id,
                ),
            )
            row = await cur.fetchone()
            return _event_from_row(row) if row else None

    async def delete_event(self, event_id: str) -> bool:
        async with _get_connection() as conn:
            cur = await conn.execute("DELETE FROM events WHERE id = %s", (event_id,))
            return cur.rowcount > 0

    async def list_slots(self, event_id: str) -> list[TimeSlot]:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"SELECT {_SLOT_COLUMNS} FROM time_slots WHERE event_id = %s",
                (event_id,),
            )
            return sorted([_slot_from_row(row) async for row in cur], key=slot_sort_key)

    async def get_slot(self, event_id: str, slot_id: str) -> TimeSlot | None:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"SELECT {_SLOT_COLUMNS} FROM time_slots WHERE id = %s AND event_id = %s",
                (slot_id, event_id),
            )
            row = await cur.fetchone()
            return _slot_from_row(row) if row else None

    async def create_slot(self, slot: TimeSlot) -> TimeSlot:
        async with _get_connection() as conn:
            await conn.execute(
                f"INSERT INTO time_slots ({_SLOT_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)",
                (
                    slot.id,
                    slot.event_id,
                    *_slot_params(slot),
                    slot.created_at,
                    slot.updated_at,
                ),
            )
        return slot

    async def update_slot(self, slot: TimeSlot) -> TimeSlot | None:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"""UPDATE time_slots
                    SET start_time = %s, start_offset = %s, end_time = %s, end_offset = %s,
                        updated_at = %s
                    WHERE id = %s AND event_id = %s
                    RETURNING {_SLOT_COLUMNS}""",
                (*_slot_params(slot), slot.updated_at, slot.id, slot.event_id),
            )
            row = await cur.fetchone()
            return _slot_from_row(row) if row else None

    async def delete_slot(self, event_id: str, slot_id: str) -> bool:
        async with _get_connection() as conn:
            cur = await conn.execute(
                "DELETE FROM time_slots WHERE id = %s AND event_id = %s",
                (slot_id, event_id),
            )
            return cur.rowcount > 0

    async def list_availability(
        self, event_id: str, user_id: str | None = None
    ) -> list[AvailabilityRecord]:
        clauses = ["event_id = %s"]
        params: list[Any] = [event_id]
        if user_id is not None:
            clauses.append("user_id = %s")
            params.append(user_id)
        where = " AND ".join(clauses)
        sql = f"SELECT {_AVAILABILITY_COLUMNS} FROM availability WHERE {where} ORDER BY user_id, timeslot_id"
        async with _get_connection() as conn:
            cur = await conn.execute(sql, tuple(params))
            return [_availability_from_row(row) async for row in cur]

    async def get_availability(
        self, event_id: str, user_id: str, slot_id: str
    ) -> AvailabilityRecord | None:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"""SELECT {_AVAILABILITY_COLUMNS} FROM availability
                    WHERE event_id = %s AND user_id = %s AND timeslot_id = %s""",
                (event_id, user_id, slot_id),
            )
            row = await cur.fetchone()
            return _availability_from_row(row) if row else None

    async def upsert_availability(self, record: AvailabilityRecord) -> AvailabilityRecord:
        async with _get_connection() as conn:
            cur = await conn.execute(
                f"""INSERT INTO availability ({_AVAILABILITY_COLUMNS})
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (event_id, user_id, timeslot_id)
                    DO UPDATE SET status = EXCLUDED.status, updated_at = EXCLUDED.updated_at
                    RETURNING {_AVAILABILITY_COLUMNS}""",
                (
                    record.id,
                    record.user_id,
                    record.event_id,
                    record.timeslot_id,
                    record.status,
                    record.created_at,
                    record.updated_at,
                ),
            )
            row = await cur.fetchone()
            return _availability_from_row(row)

    async def delete_availability(self, event_id: str, user_id: str, slot_id: str) -> bool:
        async with _get_connection() as conn:
            cur = await conn.execute(
                "DELETE FROM availability WHERE event_id = %s AND user_id = %s AND timeslot_id = %s",
                (event_id, user_id, slot_id),
            )
            return cur.rowcount > 0

    async def snapshot(self, event_id: str) -> StoreSnapshot | None:
        async with _get_connection(autocommit=False) as conn:
            async with conn.transaction():
                await conn.execute("SET TRANSACTION ISOLATION LEVEL REPEATABLE READ, READ ONLY")
                cur = await conn.execute(
                    f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = %s",
                    (event_id,),
                )
                row = await cur.fetchone()
                if not row:
                    return None
                event = _event_from_row(row)
                cur = await conn.execute(
                    f"SELECT {_SLOT_COLUMNS} FROM time_slots WHERE event_id = %s",
                    (event_id,),
                )
                slots = sorted([_slot_from_row(r) async for r in cur], key=slot_sort_key)
                cur = await conn.execute(
                    f"""SELECT {_AVAILABILITY_COLUMNS} FROM availability
                        WHERE event_id = %s ORDER BY user_id, timeslot_id""",
                    (event_id,),
                )
                records = [_availability_from_row(r) async for r in cur]
        logger.debug(
            "Snapshot event=%s slots=%d records=%d", event_id, len(slots), len(records)
        )
        return StoreSnapshot(event=event, slots=slots, records=records)

    async def ping(self) -> bool:
        try:
            async with _get_connection() as conn:
                await conn.execute("SELECT 1")
            return True
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return False

    async def close(self) -> None:
        await close_pool()
