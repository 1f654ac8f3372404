from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from launchpad.repositories.signups import SIGNUPS
from tests.test_events_api import create_event


def signup(client: TestClient, event_id: str, **overrides):
    payload = {"eventId": event_id, "name": "Test User", "email": "test@example.com"}
    payload.update(overrides)
    return client.post("/signups", json=payload)


@pytest.fixture
def event_factory(client: TestClient, admin_headers):
    def _make(**overrides) -> str:
        resp = create_event(client, admin_headers, **overrides)
        assert resp.status_code == 201, resp.text
        return resp.json()["id"]

    return _make


def test_missing_fields(client: TestClient, store):
    resp = client.post("/signups", json={})

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "VALIDATION_FAILED"
    assert {e["field"] for e in detail["errors"]} == {"eventId", "name", "email"}
    assert store.query(SIGNUPS) == []


def test_invalid_event_reference(client: TestClient, store):
    resp = signup(client, "nonexistent", name="Bad User", email="bad@example.com")

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "INVALID_REFERENCE"
    assert detail["message"] == "Invalid eventId"
    assert store.query(SIGNUPS) == []


def test_signup_for_free_event(client: TestClient, event_factory, store):
    event_id = event_factory()

    resp = signup(client, event_id)

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"]
    assert body["eventId"] == event_id
    assert body["name"] == "Test User"
    assert body["email"] == "test@example.com"
    assert body["createdAt"]
    assert [d.id for d in store.query(SIGNUPS)] == [body["id"]]


def test_free_event_rejects_payment(client: TestClient, event_factory, store):
    event_id = event_factory()

    resp = signup(client, event_id, amountPence=500)

    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert detail["code"] == "POLICY_VIOLATION"
    assert detail["message"] == "This event is free; no payment allowed"
    assert store.query(SIGNUPS) == []


@pytest.mark.parametrize("amount,status", [(500, 201), (499, 400), (501, 400), (None, 400)])
def test_fixed_event_requires_exact_price(client: TestClient, event_factory, amount, status):
    event_id = event_factory(priceType="fixed", pricePence=500)
    overrides = {} if amount is None else {"amountPence": amount}

    resp = signup(client, event_id, **overrides)

    assert resp.status_code == status
    if status == 400:
        assert resp.json()["detail"]["message"] == "Must pay fixed price"


@pytest.mark.parametrize("amount", [None, 1, 2500])
def test_pay_what_you_feel_accepts_any_positive_amount(client: TestClient, event_factory, amount):
    event_id = event_factory(priceType="pay_what_you_feel")
    overrides = {} if amount is None else {"amountPence": amount}

    resp = signup(client, event_id, **overrides)

    assert resp.status_code == 201
    assert resp.json()["amountPence"] == amount


def test_zero_amount_is_a_shape_error(client: TestClient, event_factory):
    event_id = event_factory(priceType="pay_what_you_feel")

    resp = signup(client, event_id, amountPence=0)

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "VALIDATION_FAILED"


def test_legacy_price_type_is_unconstrained(client: TestClient, store):
    legacy = store.insert("events", {"title": "Old", "priceType": "paid"})

    assert signup(client, legacy.id, amountPence=700).status_code == 201
