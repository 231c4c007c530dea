import os
import sys
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
import fakeredis.aioredis as fakeredis

import scheduler_api.lifespan as lifespan
import scheduler_api.main as main
from scheduler_api.config import clear_settings_cache

BASE_TIME = datetime(2030, 1, 7, 9, 0, tzinfo=timezone.utc)


class _AwaitableRedis:
    def __init__(self, client):
        self._client = client

    def __await__(self):
        async def _coro():
            return self._client

        return _coro().__await__()


@pytest.fixture
def client(monkeypatch):
    def fake_redis_constructor(*_args, **_kwargs):
        fake = fakeredis.FakeRedis(decode_responses=True)
        return _AwaitableRedis(fake)

    monkeypatch.setenv("STORE_BACKEND", "memory")
    monkeypatch.setenv("ENABLE_EVENT_BUS", "1")
    monkeypatch.setattr(lifespan.redis, "Redis", fake_redis_constructor)
    clear_settings_cache()

    with TestClient(main.app) as c:
        yield c
    main.app.dependency_overrides.clear()
    clear_settings_cache()


@pytest.fixture
def make_event(client):
    def _make(required_duration: int = 60, title: str = "Team Meeting") -> dict:
        res = client.post(
            "/api/v1/events",
            json={
                "title": title,
                "description": "Weekly team sync",
                "organizerId": "organizer-1",
                "requiredDuration": required_duration,
            },
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def make_slot(client):
    def _make(event_id: str, start_offset_min: int = 0, minutes: int = 60) -> dict:
        start = BASE_TIME + timedelta(minutes=start_offset_min)
        end = start + timedelta(minutes=minutes)
        res = client.post(
            f"/api/v1/events/{event_id}/timeslots",
            json={"startTime": start.isoformat(), "endTime": end.isoformat()},
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _make


@pytest.fixture
def respond(client):
    def _respond(event_id: str, user_id: str, slot_id: str, status: str = "available") -> dict:
        res = client.post(
            f"/api/v1/events/{event_id}/users/{user_id}/availability",
            json={"timeslotId": slot_id, "status": status},
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _respond
