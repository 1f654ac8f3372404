from launchpad.services.calendar import CalendarEvent, build_ics
from launchpad.services.events_service import (
    create_event,
    delete_event,
    event_calendar,
    get_event,
    list_events,
)
from launchpad.services.signups_service import create_signup
from launchpad.services.validation import validate_event, validate_signup

__all__ = [
    "CalendarEvent",
    "build_ics",
    "create_event",
    "get_event",
    "list_events",
    "delete_event",
    "event_calendar",
    "create_signup",
    "validate_event",
    "validate_signup",
]
