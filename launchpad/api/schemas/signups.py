from __future__ import annotations

from typing import Annotated

from pydantic import EmailStr, Field, StringConstraints

from launchpad.api.schemas.events import SchemaBase


class SignupCreate(SchemaBase):
    event_id: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    email: EmailStr
    amount_pence: int | None = Field(default=None, gt=0)


class SignupOut(SchemaBase):
    id: str
    event_id: str
    name: str
    email: str
    amount_pence: int | None = None
    created_at: str | None = None
