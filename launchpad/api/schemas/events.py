from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


def _as_utc(value: datetime) -> datetime:
    # Naive input is read as UTC
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise PydanticCustomError(
            "datetime_out_of_range", "datetime is out of range in UTC"
        ) from None


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class SchemaBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )


class PriceType(str, Enum):
    FREE = "free"
    FIXED = "fixed"
    PAY_WHAT_YOU_FEEL = "pay_what_you_feel"


class EventCreate(SchemaBase):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=10)]
    location: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    start: UtcDatetime
    end: UtcDatetime
    # Accepted for compatibility, always recomputed from price_type
    is_paid: bool = False
    price_type: PriceType = PriceType.FREE
    price_pence: int | None = Field(default=None, gt=0, validate_default=True)
    capacity: int | None = Field(default=None, gt=0)
    movie_id: str | None = None

    @field_validator("movie_id", mode="before")
    @classmethod
    def _clean_movie_id(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("end")
    @classmethod
    def _end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = _as_utc(value)
        start = info.data.get("start")
        if start is not None and not value > start:
            raise PydanticCustomError("end_before_start", "end must be after start")
        return value

    @field_validator("price_pence")
    @classmethod
    def _price_matches_type(cls, value: int | None, info: ValidationInfo) -> int | None:
        price_type = info.data.get("price_type")
        if price_type == PriceType.FIXED and value is None:
            raise PydanticCustomError(
                "price_required", "pricePence is required for fixed price events"
            )
        if price_type == PriceType.FREE and value is not None:
            raise PydanticCustomError(
                "price_forbidden", "pricePence must be omitted for free events"
            )
        return value

    @model_validator(mode="after")
    def _normalize_is_paid(self):
        self.is_paid = self.price_type != PriceType.FREE
        return self


class EventOut(SchemaBase):
    id: str
    title: str | None = None
    description: str | None = None
    location: str | None = None
    start: str | None = None
    end: str | None = None
    is_paid: bool | None = None
    price_type: str | None = None
    price_pence: int | None = None
    capacity: int | None = None
    movie_id: str | None = None
    created_at: str | None = None

    # Stored documents predate validation; off-type values are coerced or dropped

    @field_validator("title", "description", "location", "price_type", "movie_id", mode="before")
    @classmethod
    def _legacy_text(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return None

    @field_validator("price_pence", "capacity", mode="before")
    @classmethod
    def _legacy_int(cls, value):
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    @field_validator("is_paid", mode="before")
    @classmethod
    def _legacy_bool(cls, value):
        return value if isinstance(value, bool) else None


class DeletedOut(SchemaBase):
    success: bool = True
