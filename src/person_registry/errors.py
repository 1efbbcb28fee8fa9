"""
person_registry.errors

Exception taxonomy for the registry.

Responsibilities:
- Separate storage faults from ownership refusals.
- Keep the "person not found on update" fault distinguishable from other storage faults.
"""

from __future__ import annotations


class PersonRegistryError(Exception):
    pass


class StorageError(PersonRegistryError):
    """
    A database round trip failed. The driver/SQLAlchemy error is chained as `__cause__`.
    """

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__


class PersonNotFoundError(StorageError):
    def __init__(self, person_id: int) -> None:
        super().__init__("Person not found")
        self.person_id = person_id


class AccessDeniedError(PersonRegistryError):
    def __init__(self, person_id: int, owner_id: int) -> None:
        super().__init__(f"User {owner_id} does not own person {person_id}")
        self.person_id = person_id
        self.owner_id = owner_id
