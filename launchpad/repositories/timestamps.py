from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _parse_iso(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _from_pair(value: Mapping[str, Any]) -> datetime | None:
    seconds = value.get("seconds", value.get("_seconds"))
    nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return None
    if isinstance(nanos, bool) or not isinstance(nanos, (int, float)):
        return None
    try:
        return EPOCH + timedelta(seconds=seconds, microseconds=nanos // 1000)
    except (OverflowError, ValueError):
        # Out of datetime range, or NaN/inf
        return None


def coerce_timestamp(value: Any) -> datetime | None:
    """Map any stored timestamp shape to an aware UTC datetime.

    Accepts ISO-8601 strings, native datetimes and ``{seconds, nanoseconds}``
    pairs. Anything else comes back as None instead of raising.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = _parse_iso(value)
    elif isinstance(value, Mapping):
        parsed = _from_pair(value)
    else:
        parsed = None

    if parsed is None:
        return None
    if parsed.tzinfo is None or parsed.tzinfo.utcoffset(parsed) is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def to_iso(value: Any) -> str | None:
    """Canonical ``YYYY-MM-DDThh:mm:ss.sssZ`` rendering, or None if unknown."""
    parsed = coerce_timestamp(value)
    if parsed is None:
        return None
    # %Y is not zero-padded below year 1000 on every platform
    return (
        f"{parsed.year:04d}-{parsed:%m-%dT%H:%M:%S}"
        f".{parsed.microsecond // 1000:03d}Z"
    )
