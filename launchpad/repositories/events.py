from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from launchpad.api.schemas.events import EventCreate, EventOut, PriceType
from launchpad.repositories.timestamps import coerce_timestamp, to_iso
from launchpad.store.base import Document, DocumentStore

EVENTS = "events"

_TIMESTAMP_FIELDS = ("start", "end", "createdAt")


def to_document(record: EventCreate, created_at: datetime) -> dict[str, Any]:
    data = record.model_dump(by_alias=True, mode="python", exclude_none=True)
    data["priceType"] = record.price_type.value
    data["isPaid"] = record.price_type != PriceType.FREE
    data["createdAt"] = created_at
    return data


def from_document(doc: Document) -> EventOut:
    data: dict[str, Any] = {**doc.data, "id": doc.id}
    for key in _TIMESTAMP_FIELDS:
        data[key] = to_iso(data.get(key))

    price_type = data.get("priceType")
    if price_type is not None:
        data["isPaid"] = price_type != PriceType.FREE.value
    return EventOut.model_validate(data)


def _start_sort_key(event: EventOut) -> tuple[bool, datetime]:
    start = coerce_timestamp(event.start)
    return (start is None, start or datetime.max.replace(tzinfo=timezone.utc))


class EventRepository:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def create(self, record: EventCreate) -> EventOut:
        data = to_document(record, created_at=datetime.now(timezone.utc))
        return from_document(self._store.insert(EVENTS, data))

    def get(self, event_id: str) -> EventOut | None:
        doc = self._store.get(EVENTS, event_id)
        return from_document(doc) if doc else None

    def list(self) -> list[EventOut]:
        events = [from_document(doc) for doc in self._store.query(EVENTS)]
        # Stable on id so equal starts keep a repeatable order
        events.sort(key=lambda event: event.id)
        events.sort(key=_start_sort_key)
        return events

    def delete(self, event_id: str) -> bool:
        return self._store.delete(EVENTS, event_id)
