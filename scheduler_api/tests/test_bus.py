"""Tests for scheduling change notifications."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from scheduler_api.bus import EventBus
from scheduler_api.producers.scheduling_producer import build_change, publish_change


def test_build_change_omits_unset_ids():
    change = build_change("event_created", "evt-1")
    assert change["type"] == "event_created"
    assert change["event_id"] == "evt-1"
    assert "timeslot_id" not in change
    assert "user_id" not in change
    assert change["timestamp"]


def test_build_change_with_slot_and_user():
    change = build_change("availability_upserted", "evt-1", timeslot_id="slot-1", user_id="alice")
    assert change["timeslot_id"] == "slot-1"
    assert change["user_id"] == "alice"


def test_event_channel():
    assert EventBus.event_channel("evt-1") == "scheduling:evt-1"


@pytest.mark.asyncio
async def test_publish_change_uses_event_channel():
    redis_client = MagicMock()
    redis_client.publish = AsyncMock(return_value=2)
    bus = EventBus(redis_client)
    change = build_change("timeslot_deleted", "evt-1", timeslot_id="slot-1")

    receivers = await bus.publish_change(change)

    assert receivers == 2
    channel, payload = redis_client.publish.call_args[0]
    assert channel == "scheduling:evt-1"
    assert json.loads(payload) == change


@pytest.mark.asyncio
async def test_publish_failure_is_logged_not_raised(caplog):
    bus = MagicMock()
    bus.publish_change = AsyncMock(side_effect=ConnectionError("redis down"))

    await publish_change(bus, build_change("event_updated", "evt-1"))

    assert "Failed to publish event_updated" in caplog.text


@pytest.mark.asyncio
async def test_publish_without_bus_is_noop():
    await publish_change(None, build_change("event_deleted", "evt-1"))
