import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request, Response

from launchpad.api.errors import http_error_from_service
from launchpad.api.schemas.events import DeletedOut, EventOut
from launchpad.auth.deps import require_admin
from launchpad.core.config import settings
from launchpad.services import events_service
from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import FieldError, ServiceError, ValidationError
from launchpad.store import DocumentStore, get_store

router = APIRouter(prefix="/events", tags=["events"])

Store = Annotated[DocumentStore, Depends(get_store)]


async def json_body(request: Request) -> Any:
    """Raw JSON body, decoded only once route-level guards have passed."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise http_error_from_service(
            ValidationError(
                ErrorCode.VALIDATION_FAILED.value,
                "invalid request",
                errors=[FieldError(field="body", message="body is not valid JSON")],
            )
        ) from None


@router.get("", response_model=list[EventOut])
def list_events(store: Store):
    return events_service.list_events(store)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, store: Store):
    try:
        return events_service.get_event(store, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None


@router.get("/{event_id}/ics")
def get_event_ics(event_id: str, store: Store):
    try:
        body = events_service.event_calendar(store, event_id, frontend_url=settings.frontend_url)
    except ServiceError as err:
        raise http_error_from_service(err) from None

    return Response(
        content=body,
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="event-{event_id}.ics"'},
    )


@router.post(
    "",
    response_model=EventOut,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
def create_event(store: Store, payload: Annotated[Any, Depends(json_body)]):
    try:
        return events_service.create_event(store, payload)
    except ServiceError as err:
        raise http_error_from_service(err) from None


@router.delete(
    "/{event_id}",
    response_model=DeletedOut,
    dependencies=[Depends(require_admin)],
)
def delete_event(event_id: str, store: Store):
    try:
        events_service.delete_event(store, event_id)
    except ServiceError as err:
        raise http_error_from_service(err) from None
    return DeletedOut(success=True)
