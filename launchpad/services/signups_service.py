from __future__ import annotations

from typing import Any

import structlog

from launchpad.api.schemas.events import EventOut, PriceType
from launchpad.api.schemas.signups import SignupCreate, SignupOut
from launchpad.repositories.events import EventRepository
from launchpad.repositories.signups import SignupRepository
from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import InvalidReferenceError, PolicyViolationError
from launchpad.services.validation import validate_signup
from launchpad.store.base import DocumentStore

logger = structlog.get_logger(__name__)


def check_payment_policy(event: EventOut, amount_pence: int | None) -> None:
    """Raise PolicyViolationError if the amount does not fit the event's price type.

    Legacy price types other than free/fixed carry no constraint.
    """
    if event.price_type == PriceType.FREE.value and amount_pence:
        raise PolicyViolationError(
            ErrorCode.POLICY_VIOLATION.value, "This event is free; no payment allowed"
        )
    if event.price_type == PriceType.FIXED.value and amount_pence != event.price_pence:
        raise PolicyViolationError(ErrorCode.POLICY_VIOLATION.value, "Must pay fixed price")


def create_signup(store: DocumentStore, payload: Any) -> SignupOut:
    record: SignupCreate = validate_signup(payload)

    # Lookup and insert are separate operations; the event may change in between.
    event = EventRepository(store).get(record.event_id)
    if not event:
        logger.info(
            "signup_rejected",
            event_id=record.event_id,
            reason=ErrorCode.INVALID_REFERENCE.value,
        )
        raise InvalidReferenceError(ErrorCode.INVALID_REFERENCE.value, "Invalid eventId")

    try:
        check_payment_policy(event, record.amount_pence)
    except PolicyViolationError as err:
        logger.info("signup_rejected", event_id=event.id, reason=err.code)
        raise

    signup = SignupRepository(store).create(record)
    logger.info("signup_created", signup_id=signup.id, event_id=event.id)
    return signup
