"""Payload validation for event creation and signups.

Both validators return a fully normalized pydantic model or raise
``ValidationError`` carrying every field-level failure found.
"""

from __future__ import annotations

from typing import Any

import pydantic

from launchpad.api.schemas.events import EventCreate
from launchpad.api.schemas.signups import SignupCreate
from launchpad.services.error_codes import ErrorCode
from launchpad.services.exceptions import FieldError, ValidationError


def field_errors(
    exc: pydantic.ValidationError, model: type[pydantic.BaseModel] | None = None
) -> list[FieldError]:
    errors: list[FieldError] = []
    for err in exc.errors(include_url=False):
        loc = list(err["loc"])
        # Defaults are validated under the Python name; report the wire name
        if model is not None and loc and loc[0] in model.model_fields:
            loc[0] = model.model_fields[loc[0]].alias or loc[0]
        field = ".".join(str(part) for part in loc) or "body"
        errors.append(FieldError(field=field, message=err["msg"]))
    return errors


def _validate(model: type[pydantic.BaseModel], raw: Any, message: str):
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            ErrorCode.VALIDATION_FAILED.value, message, errors=field_errors(exc, model)
        ) from None


def validate_event(raw: Any) -> EventCreate:
    return _validate(EventCreate, raw, "invalid event payload")


def validate_signup(raw: Any) -> SignupCreate:
    return _validate(SignupCreate, raw, "invalid signup payload")
