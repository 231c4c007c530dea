def test_create_event(client):
    res = client.post(
        "/api/v1/events",
        json={
            "title": "Team Meeting",
            "description": "Weekly team sync",
            "organizerId": "user1",
            "requiredDuration": 60,
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["title"] == "Team Meeting"
    assert body["description"] == "Weekly team sync"
    assert body["organizerId"] == "user1"
    assert body["requiredDuration"] == 60
    assert body["status"] == "active"
    assert body["id"]
    assert body["createdAt"] == body["updatedAt"]


def test_create_event_requires_positive_duration(client):
    res = client.post(
        "/api/v1/events",
        json={"title": "Sync", "organizerId": "user1", "requiredDuration": 0},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "bad_request"


def test_create_event_rejects_duration_beyond_integer_column(client):
    res = client.post(
        "/api/v1/events",
        json={"title": "Sync", "organizerId": "user1", "requiredDuration": 2**40},
    )
    assert res.status_code == 400
    assert res.json()["error"] == "bad_request"
    assert "requiredDuration" in res.json()["detail"]


def test_update_event_rejects_duration_beyond_integer_column(client, make_event):
    event = make_event()
    res = client.put(
        f"/api/v1/events/{event['id']}",
        json={"title": "Sync", "organizerId": "user1", "requiredDuration": 2**31},
    )
    assert res.status_code == 400


def test_create_event_requires_title(client):
    res = client.post("/api/v1/events", json={"organizerId": "user1", "requiredDuration": 30})
    assert res.status_code == 400


def test_get_and_list_events(client, make_event):
    first = make_event(title="First")
    second = make_event(title="Second")

    res = client.get(f"/api/v1/events/{first['id']}")
    assert res.status_code == 200
    assert res.json()["title"] == "First"

    res = client.get("/api/v1/events")
    assert res.status_code == 200
    ids = [e["id"] for e in res.json()]
    assert set(ids) == {first["id"], second["id"]}


def test_get_missing_event(client):
    res = client.get("/api/v1/events/missing")
    assert res.status_code == 404
    body = res.json()
    assert body["error"] == "not_found"
    assert body["context"] == {"resource_type": "event", "resource_id": "missing"}


def test_update_event(client, make_event):
    event = make_event(required_duration=30)
    res = client.put(
        f"/api/v1/events/{event['id']}",
        json={
            "title": "Renamed",
            "organizerId": "user2",
            "requiredDuration": 45,
            "status": "cancelled",
        },
    )
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == event["id"]
    assert body["title"] == "Renamed"
    assert body["organizerId"] == "user2"
    assert body["requiredDuration"] == 45
    assert body["status"] == "cancelled"
    assert body["createdAt"] == event["createdAt"]


def test_update_event_keeps_status_when_omitted(client, make_event):
    event = make_event()
    res = client.put(
        f"/api/v1/events/{event['id']}",
        json={"title": "Renamed", "organizerId": "user1", "requiredDuration": 60},
    )
    assert res.status_code == 200
    assert res.json()["status"] == "active"


def test_update_missing_event(client):
    res = client.put(
        "/api/v1/events/missing",
        json={"title": "x", "organizerId": "user1", "requiredDuration": 60},
    )
    assert res.status_code == 404


def test_delete_event_cascades(client, make_event, make_slot, respond):
    event = make_event()
    slot = make_slot(event["id"])
    respond(event["id"], "alice", slot["id"])

    res = client.delete(f"/api/v1/events/{event['id']}")
    assert res.status_code == 204

    assert client.get(f"/api/v1/events/{event['id']}").status_code == 404
    assert client.get(f"/api/v1/events/{event['id']}/timeslots").json() == []
    assert client.get(f"/api/v1/events/{event['id']}/users/alice/availability").json() == []
    assert client.delete(f"/api/v1/events/{event['id']}").status_code == 404
