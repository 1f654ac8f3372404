"""iCalendar (RFC 5545) export for a single event.

Output is byte-for-byte deterministic for a given event and DTSTAMP;
callers that need stable output pass ``dtstamp`` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import MissingScheduleError

PRODID = "-//Events Platform//Launchpad//EN"
CRLF = "\r\n"


@dataclass(frozen=True)
class CalendarEvent:
    uid: str
    title: str
    start: datetime | None
    end: datetime | None
    description: str | None = None
    location: str | None = None
    url: str | None = None


def format_utc(value: datetime) -> str:
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return f"{value.year:04d}{value:%m%dT%H%M%S}Z"


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace(";", "\\;")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
        .replace("\r", "\\n")
    )


def build_ics(event: CalendarEvent, dtstamp: datetime | None = None) -> str:
    if event.start is None or event.end is None:
        raise MissingScheduleError(
            ErrorCode.MISSING_SCHEDULE.value, "event has no usable start/end"
        )

    stamp = dtstamp or datetime.now(timezone.utc)
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        "BEGIN:VEVENT",
        f"UID:{event.uid}",
        f"DTSTAMP:{format_utc(stamp)}",
        f"DTSTART:{format_utc(event.start)}",
        f"DTEND:{format_utc(event.end)}",
        f"SUMMARY:{escape_text(event.title)}",
    ]
    if event.description:
        lines.append(f"DESCRIPTION:{escape_text(event.description)}")
    if event.location:
        lines.append(f"LOCATION:{escape_text(event.location)}")
    if event.url:
        lines.append(f"URL:{event.url}")
    lines += ["END:VEVENT", "END:VCALENDAR"]

    return CRLF.join(lines)
