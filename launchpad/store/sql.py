from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from launchpad.models import Base, StoredDocument
from launchpad.store.base import Document, DocumentStore, StoreError, new_document_id

logger = structlog.get_logger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def encode_value(value: Any) -> Any:
    """Make a document JSON-safe. Datetimes become {seconds, nanoseconds} pairs."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - EPOCH
        return {
            "seconds": delta.days * 86400 + delta.seconds,
            "nanoseconds": delta.microseconds * 1000,
        }
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    return value


class SqlDocumentStore(DocumentStore):
    """Documents as JSON rows in a single SQLAlchemy-managed table."""

    def __init__(self, engine: Engine) -> None:
        self._session_factory = sessionmaker(bind=engine, future=True, expire_on_commit=False)
        Base.metadata.create_all(bind=engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("store_error", error=str(exc))
            raise StoreError("document store operation failed") from exc
        finally:
            db.close()

    def get(self, collection: str, doc_id: str) -> Document | None:
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            if row is None:
                return None
            return Document(id=row.id, data=dict(row.data))

    def query(self, collection: str) -> list[Document]:
        with self._session() as db:
            rows = db.scalars(
                select(StoredDocument).where(StoredDocument.collection == collection)
            ).all()
            return [Document(id=row.id, data=dict(row.data)) for row in rows]

    def insert(self, collection: str, data: dict[str, Any]) -> Document:
        encoded = encode_value(data)
        with self._session() as db:
            row = StoredDocument(collection=collection, id=new_document_id(), data=encoded)
            db.add(row)
            db.commit()
            return Document(id=row.id, data=dict(encoded))

    def update(self, collection: str, doc_id: str, changes: dict[str, Any]) -> bool:
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            if row is None:
                return False
            # Reassign so the JSON column is flagged dirty
            row.data = {**row.data, **encode_value(changes)}
            db.commit()
            return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._session() as db:
            row = db.get(StoredDocument, (collection, doc_id))
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True
