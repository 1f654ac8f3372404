"""Rewrite string-typed event start/end values as native store timestamps.

Older events were saved with ``start``/``end`` as free-form strings. This
walks the ``events`` collection once and converts every parseable string;
values that are already timestamps are left untouched.

Usage::

    STORE_BACKEND=sql DATABASE_URL=sqlite:///./launchpad.db launchpad-migrate-dates
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from launchpad.core.logging import configure_logging
from launchpad.repositories.events import EVENTS
from launchpad.repositories.timestamps import coerce_timestamp
from launchpad.store import DocumentStore, StoreError, get_store

logger = structlog.get_logger(__name__)

DATE_FIELDS = ("start", "end")


@dataclass
class MigrationReport:
    updated: int = 0
    skipped: int = 0


def migrate_event_dates(store: DocumentStore) -> MigrationReport:
    report = MigrationReport()

    for doc in store.query(EVENTS):
        changes: dict[str, Any] = {}
        for key in DATE_FIELDS:
            value = doc.data.get(key)
            if not isinstance(value, str):
                continue

            parsed = coerce_timestamp(value)
            if parsed is None:
                logger.warning("unparseable_event_date", event_id=doc.id, field=key, value=value)
                report.skipped += 1
                continue
            changes[key] = parsed

        if changes:
            store.update(EVENTS, doc.id, changes)
            report.updated += 1
            logger.info("event_dates_migrated", event_id=doc.id, fields=sorted(changes))

    return report


def main() -> int:
    configure_logging()
    try:
        report = migrate_event_dates(get_store())
    except StoreError:
        logger.exception("migration_failed")
        return 1

    logger.info("migration_complete", updated=report.updated, skipped=report.skipped)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
