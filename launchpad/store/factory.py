from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine

from launchpad.core.config import settings
from launchpad.store.base import DocumentStore
from launchpad.store.memory import MemoryDocumentStore
from launchpad.store.sql import SqlDocumentStore


def create_store(
    backend: str | None = None,
    database_url: str | None = None,
) -> DocumentStore:
    selected_backend = (backend or settings.store_backend).strip().lower()
    if selected_backend == "memory":
        return MemoryDocumentStore()
    if selected_backend == "sql":
        url = database_url or settings.database_url
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        engine = create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)
        return SqlDocumentStore(engine)
    raise ValueError(f"unsupported store backend: {selected_backend}")


@lru_cache(maxsize=1)
def get_store() -> DocumentStore:
    return create_store()
