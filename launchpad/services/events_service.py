from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

from launchpad.api.schemas.events import EventOut
from launchpad.core.config import settings
from launchpad.repositories.events import EventRepository
from launchpad.repositories.timestamps import coerce_timestamp
from launchpad.services.calendar import CalendarEvent, build_ics
from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import NotFoundError
from launchpad.services.validation import validate_event
from launchpad.store.base import DocumentStore

logger = structlog.get_logger(__name__)


def _require_event(repo: EventRepository, event_id: str) -> EventOut:
    event = repo.get(event_id)
    if not event:
        raise NotFoundError(ErrorCode.EVENT_NOT_FOUND.value, "event not found")
    return event


def create_event(store: DocumentStore, payload: Any) -> EventOut:
    record = validate_event(payload)
    event = EventRepository(store).create(record)
    logger.info("event_created", event_id=event.id, price_type=event.price_type)
    return event


def get_event(store: DocumentStore, event_id: str) -> EventOut:
    return _require_event(EventRepository(store), event_id)


def list_events(store: DocumentStore) -> list[EventOut]:
    return EventRepository(store).list()


def delete_event(store: DocumentStore, event_id: str) -> None:
    repo = EventRepository(store)
    _require_event(repo, event_id)
    repo.delete(event_id)
    logger.info("event_deleted", event_id=event_id)


def event_url(event_id: str, frontend_url: str | None) -> str | None:
    if not frontend_url:
        return None
    return f"{frontend_url.rstrip('/')}/events/{event_id}"


def to_calendar_event(
    event: EventOut, url: str | None = None, uid_domain: str | None = None
) -> CalendarEvent:
    return CalendarEvent(
        uid=f"{event.id}@{uid_domain or settings.ics_uid_domain}",
        title=event.title or "",
        start=coerce_timestamp(event.start),
        end=coerce_timestamp(event.end),
        description=event.description,
        location=event.location,
        url=url,
    )


def event_calendar(
    store: DocumentStore,
    event_id: str,
    frontend_url: str | None = None,
    dtstamp: datetime | None = None,
) -> str:
    event = _require_event(EventRepository(store), event_id)
    calendar_event = to_calendar_event(event, url=event_url(event.id, frontend_url))
    return build_ics(calendar_event, dtstamp=dtstamp)
