from __future__ import annotations

import copy
import threading
from typing import Any

from launchpad.store.base import Document, DocumentStore, new_document_id


class MemoryDocumentStore(DocumentStore):
    """Process-local store. Keeps datetimes as native objects."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def get(self, collection: str, doc_id: str) -> Document | None:
        with self._lock:
            data = self._collection(collection).get(doc_id)
            if data is None:
                return None
            return Document(id=doc_id, data=copy.deepcopy(data))

    def query(self, collection: str) -> list[Document]:
        with self._lock:
            return [
                Document(id=doc_id, data=copy.deepcopy(data))
                for doc_id, data in self._collection(collection).items()
            ]

    def insert(self, collection: str, data: dict[str, Any]) -> Document:
        with self._lock:
            docs = self._collection(collection)
            doc_id = new_document_id()
            while doc_id in docs:
                doc_id = new_document_id()
            docs[doc_id] = copy.deepcopy(data)
            return Document(id=doc_id, data=copy.deepcopy(data))

    def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> bool:
        with self._lock:
            existing = self._collection(collection).get(doc_id)
            if existing is None:
                return False
            existing.update(copy.deepcopy(changes))
            return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._collection(collection).pop(doc_id, None) is not None
