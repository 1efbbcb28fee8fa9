"""
person_registry.results

Lookup outcome type.

Responsibilities:
- Distinguish a found value, a normal absence, and a storage fault without exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from person_registry.errors import PersonRegistryError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Absent:
    pass


@dataclass(frozen=True, slots=True)
class Fault:
    error: PersonRegistryError


Lookup = Union[Found[T], Absent, Fault]
