"""
person_registry.domain

In-memory values of the Person aggregate.

Responsibilities:
- Define Coordinates (mandatory) and Location (optional) value entities.
- Define the Person aggregate root and the hair color labels it stores.
"""

from __future__ import annotations

import enum
from datetime import UTC, date, datetime

from pydantic import BaseModel, Field, field_validator

INT32_MIN, INT32_MAX = -(2**31), 2**31 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def _utcnow() -> datetime:
    # Naive UTC, matching what the timestamp column stores.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class HairColor(enum.StrEnum):
    # Values are the labels written to person.hair_color.
    green = "green"
    red = "red"
    black = "black"
    blue = "blue"
    yellow = "yellow"


class Coordinates(BaseModel):
    id: int | None = None
    x: int = Field(ge=INT64_MIN, le=INT64_MAX)
    y: int = Field(ge=INT32_MIN, le=INT32_MAX)


class Location(BaseModel):
    id: int | None = None
    x: int = Field(ge=INT32_MIN, le=INT32_MAX)
    y: int = Field(ge=INT64_MIN, le=INT64_MAX)
    z: int = Field(ge=INT32_MIN, le=INT32_MAX)
    name: str | None = None


class Person(BaseModel):
    """
    Aggregate root. `id` and `owner_id` are assigned by the store on insert.
    """

    id: int | None = None
    name: str = Field(min_length=1)
    coordinates: Coordinates
    creation_date: datetime = Field(default_factory=_utcnow)
    height: int = Field(gt=0, le=INT32_MAX)
    birthday: date
    passport_id: str = Field(min_length=1)
    hair_color: HairColor | None = None
    location: Location | None = None
    owner_id: int | None = None

    @field_validator("creation_date")
    @classmethod
    def normalize_creation_date(cls, v: datetime) -> datetime:
        # The column stores naive UTC; convert aware values instead of dropping the offset.
        if v.tzinfo is not None:
            return v.astimezone(UTC).replace(tzinfo=None)
        return v
