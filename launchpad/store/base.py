from __future__ import annotations

import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

DOC_ID_BYTES = 10


def new_document_id() -> str:
    """20 hex chars, the same length as the ids the hosted store hands out."""
    return secrets.token_hex(DOC_ID_BYTES)


class StoreError(Exception):
    """Raised when the backing store fails unexpectedly."""


@dataclass(frozen=True)
class Document:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Document | None:
        """Return the document, or None if it does not exist."""

    @abstractmethod
    def query(self, collection: str) -> list[Document]:
        """Return every document in a collection, in no particular order."""

    @abstractmethod
    def insert(self, collection: str, data: dict[str, Any]) -> Document:
        """Store data under a freshly generated id and return the stored document."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> bool:
        """Merge changes into an existing document; False if it does not exist."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document; False if it did not exist."""
