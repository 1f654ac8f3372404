from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


@pytest.mark.parametrize(
    "origin",
    [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://192.168.1.20:3000",
        "https://launchpad-events.netlify.app",
    ],
)
def test_allowed_origin_is_echoed(client: TestClient, origin):
    resp = client.get("/health", headers={"Origin": origin})

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == origin


def test_disallowed_origin_gets_no_cors_header(client: TestClient):
    resp = client.get("/health", headers={"Origin": "http://evil.com"})

    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers


def test_no_origin_header(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert "access-control-allow-origin" not in resp.headers


def test_preflight_allows_admin_header(client: TestClient):
    resp = client.options(
        "/events",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "x-admin-passcode, content-type",
        },
    )

    assert resp.status_code == 200
    assert "x-admin-passcode" in resp.headers["access-control-allow-headers"].lower()
