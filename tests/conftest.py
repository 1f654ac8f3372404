from __future__ import annotations

import os

import pytest
from fastapi.testclient import TestClient

# Ensure config is set before app import
os.environ.setdefault("ENV", "local")
os.environ.setdefault("ADMIN_PASSCODE", "test_admin_passcode")
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("FRONTEND_URL", "https://events.example.org")
os.environ["TMDB_API_KEY"] = ""

from launchpad.main import app  # noqa: E402
from launchpad.store import MemoryDocumentStore, get_store  # noqa: E402

ADMIN_PASSCODE = os.environ["ADMIN_PASSCODE"]


@pytest.fixture
def store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def client(store: MemoryDocumentStore):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_store, None)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"x-admin-passcode": ADMIN_PASSCODE}
