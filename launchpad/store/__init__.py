from __future__ import annotations

from launchpad.store.base import Document, DocumentStore, StoreError
from launchpad.store.memory import MemoryDocumentStore


def create_store(*args, **kwargs):
    from launchpad.store.factory import create_store as _create_store

    return _create_store(*args, **kwargs)


def get_store() -> DocumentStore:
    from launchpad.store.factory import get_store as _get_store

    return _get_store()


__all__ = [
    "Document",
    "DocumentStore",
    "MemoryDocumentStore",
    "StoreError",
    "create_store",
    "get_store",
]
