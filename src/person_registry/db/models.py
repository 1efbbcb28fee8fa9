"""
person_registry.db.models

Relational schema for the Person aggregate.

Responsibilities:
- Define the three tables the stores write:
  - coordinates: mandatory value entity
  - location: optional value entity
  - person: aggregate root referencing both by foreign key
"""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import BigInteger, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from person_registry.db.base import Base


class CoordinatesRecord(Base):
    __tablename__ = "coordinates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    x: Mapped[int] = mapped_column("coordinates_x", BigInteger, nullable=False)
    y: Mapped[int] = mapped_column("coordinates_y", Integer, nullable=False)


class LocationRecord(Base):
    __tablename__ = "location"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    x: Mapped[int] = mapped_column("location_x", Integer, nullable=False)
    y: Mapped[int] = mapped_column("location_y", BigInteger, nullable=False)
    z: Mapped[int] = mapped_column("location_z", Integer, nullable=False)
    name: Mapped[str | None] = mapped_column("location_name", Text, nullable=True)


class PersonRecord(Base):
    __tablename__ = "person"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    coordinates_id: Mapped[int] = mapped_column(
        ForeignKey("coordinates.id"), nullable=False, index=True
    )
    creation_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    height: Mapped[int] = mapped_column(Integer, nullable=False)
    birthday: Mapped[date] = mapped_column(Date, nullable=False)
    passport_id: Mapped[str] = mapped_column(Text, nullable=False)
    # Stored as the HairColor label, not a DB enum.
    hair_color: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_id: Mapped[int | None] = mapped_column(
        ForeignKey("location.id"), nullable=True, index=True
    )
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)


# --- Module Notes -----------------------------------------------------------
# No ORM relationships are declared: several persons may alias one coordinates or
# location row, and the stores resolve those rows explicitly by id.
