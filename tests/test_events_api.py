from __future__ import annotations

from datetime import datetime, timedelta, timezone
import dataclasses

from fastapi.testclient import TestClient

from launchpad.repositories.events import EVENTS


def event_body(**overrides):
    start = datetime(2025, 6, 1, 18, tzinfo=timezone.utc)
    payload = {
        "title": "Integration Test Event",
        "description": "Integration test event description",
        "location": "Testville",
        "start": start.isoformat(),
        "end": (start + timedelta(hours=2)).isoformat(),
        "priceType": "free",
        "capacity": 100,
    }
    payload.update(overrides)
    return payload


def create_event(client: TestClient, headers: dict[str, str], **overrides):
    return client.post("/events", json=event_body(**overrides), headers=headers)


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["X-Request-ID"]
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


def test_list_events_empty(client: TestClient):
    resp = client.get("/events")
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_without_passcode_is_forbidden(client: TestClient, store):
    resp = client.post("/events", json=event_body())
    assert resp.status_code == 403
    assert store.query(EVENTS) == []


def test_create_with_wrong_passcode_is_forbidden(client: TestClient):
    resp = create_event(client, {"x-admin-passcode": "wrong-pass"})
    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "UNAUTHORIZED"


def test_empty_server_secret_fails_closed(client: TestClient, monkeypatch):
    import launchpad.auth.deps as deps

    monkeypatch.setattr(deps, "settings", dataclasses.replace(deps.settings, admin_passcode=""))

    assert create_event(client, {"x-admin-passcode": ""}).status_code == 403
    assert create_event(client, {}).status_code == 403


def test_create_event(client: TestClient, admin_headers):
    resp = create_event(client, admin_headers, isPaid=True, movieId="27205")

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"]
    assert body["title"] == "Integration Test Event"
    assert body["capacity"] == 100
    assert body["isPaid"] is False
    assert body["priceType"] == "free"
    assert body["movieId"] == "27205"
    assert body["start"] == "2025-06-01T18:00:00.000Z"
    assert body["end"] == "2025-06-01T20:00:00.000Z"
    assert body["createdAt"]


def test_create_event_end_before_start(client: TestClient, admin_headers, store):
    resp = client.post(
        "/events",
        json={
            "title": "T",
            "description": "Description long enough",
            "location": "Hall",
            "start": "2025-01-01T10:00:00Z",
            "end": "2025-01-01T09:00:00Z",
            "priceType": "free",
        },
        headers=admin_headers,
    )

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "VALIDATION_FAILED"
    assert "end" in {e["field"] for e in detail["errors"]}
    assert store.query(EVENTS) == []


def test_create_fixed_event_without_price(client: TestClient, admin_headers):
    resp = create_event(client, admin_headers, priceType="fixed")

    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["detail"]["errors"]}
    assert fields == {"pricePence"}


def test_create_with_non_json_body(client: TestClient, admin_headers):
    resp = client.post(
        "/events",
        content=b"not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "VALIDATION_FAILED"
    assert [e["field"] for e in detail["errors"]] == ["body"]


def test_get_event_is_idempotent(client: TestClient, admin_headers):
    event_id = create_event(client, admin_headers).json()["id"]

    first = client.get(f"/events/{event_id}")
    second = client.get(f"/events/{event_id}")

    assert first.status_code == 200
    assert first.json()["id"] == event_id
    assert first.json() == second.json()


def test_get_missing_event(client: TestClient):
    resp = client.get("/events/nonexistent")
    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "EVENT_NOT_FOUND"


def test_list_orders_by_start(client: TestClient, admin_headers):
    late = create_event(
        client, admin_headers, start="2025-09-01T18:00:00Z", end="2025-09-01T19:00:00Z"
    ).json()["id"]
    early = create_event(
        client, admin_headers, start="2025-03-01T18:00:00Z", end="2025-03-01T19:00:00Z"
    ).json()["id"]

    resp = client.get("/events")

    assert [e["id"] for e in resp.json()] == [early, late]


def test_list_normalizes_legacy_records(client: TestClient, store):
    store.insert(
        EVENTS,
        {
            "title": "Legacy",
            "start": {"seconds": 1748800800, "nanoseconds": 0},
            "end": "2025-06-01 20:00:00",
            "priceType": "fixed",
            "pricePence": 500,
            "isPaid": False,
        },
    )

    [event] = client.get("/events").json()

    assert event["start"] == "2025-06-01T18:00:00.000Z"
    assert event["end"] == "2025-06-01T20:00:00.000Z"
    assert event["isPaid"] is True


def test_event_ics(client: TestClient, admin_headers):
    event_id = create_event(
        client, admin_headers, description="Bring a chair, and snacks\nAll welcome"
    ).json()["id"]

    resp = client.get(f"/events/{event_id}/ics")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/calendar")
    assert resp.headers["content-disposition"].startswith("attachment")
    body = resp.text
    assert "BEGIN:VEVENT" in body
    assert "END:VEVENT" in body
    lines = body.split("\r\n")
    assert f"UID:{event_id}@launchpad-events" in lines
    assert "DTSTART:20250601T180000Z" in lines
    assert "DESCRIPTION:Bring a chair\\, and snacks\\nAll welcome" in lines
    assert f"URL:https://events.example.org/events/{event_id}" in lines


def test_event_ics_missing_event(client: TestClient):
    assert client.get("/events/nonexistent/ics").status_code == 404


def test_event_ics_without_schedule(client: TestClient, store):
    doc = store.insert(EVENTS, {"title": "Someday", "start": "tbc", "priceType": "free"})

    resp = client.get(f"/events/{doc.id}/ics")

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "MISSING_SCHEDULE"


def test_delete_event(client: TestClient, admin_headers, store):
    event_id = create_event(client, admin_headers).json()["id"]

    assert client.delete(f"/events/{event_id}").status_code == 403

    resp = client.delete(f"/events/{event_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert store.get(EVENTS, event_id) is None

    assert client.delete(f"/events/{event_id}", headers=admin_headers).status_code == 404


def test_store_failure_is_generic_500(client: TestClient, store, monkeypatch):
    from launchpad.store import StoreError

    def boom(collection):
        raise StoreError("connection reset by peer")

    monkeypatch.setattr(store, "query", boom)

    resp = client.get("/events")

    assert resp.status_code == 500
    assert resp.json() == {
        "detail": {"code": "UPSTREAM_FAILURE", "message": "internal server error"}
    }


def test_malformed_body_without_passcode_is_forbidden(client: TestClient):
    resp = client.post(
        "/events",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 403
    assert resp.json()["detail"]["code"] == "UNAUTHORIZED"


def test_start_outside_utc_range_is_rejected(client: TestClient, admin_headers, store):
    resp = create_event(client, admin_headers, start="0001-01-01T00:30:00+01:00")

    assert resp.status_code == 400
    assert {e["field"] for e in resp.json()["detail"]["errors"]} == {"start"}
    assert store.query(EVENTS) == []


def test_list_tolerates_numeric_movie_id(client: TestClient, store):
    store.insert(
        EVENTS,
        {"title": "Legacy Screening", "movieId": 27205, "priceType": "free", "start": "2025-06-01T18:00:00Z"},
    )

    resp = client.get("/events")

    assert resp.status_code == 200
    assert resp.json()[0]["movieId"] == "27205"
