"""
Identity-based domain objects.

A learner's enrollment stays the same enrollment while its lesson count,
status and timestamps change, so entities compare by id only.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, TypeVar
from uuid import UUID


@dataclass(frozen=True)
class EntityId:
    """
    Typed wrapper around a database key.

    ``UserId(7)`` and ``CourseId(7)`` never compare equal, so keys of
    different tables cannot be passed for one another. Integer keys may be 0
    for rows that have not been inserted yet.
    """

    value: int | UUID

    def __post_init__(self) -> None:
        if isinstance(self.value, int) and self.value < 0:
            raise ValueError(f"{self.__class__.__name__} cannot be negative")

    def __str__(self) -> str:
        return str(self.value)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for learning records.

    Subclasses declare an ``id`` field and change state only through their
    transition methods.
    """

    id: IdType

    def __eq__(self, other: object) -> bool:
        return isinstance(other, self.__class__) and self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__, self.id))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.id}>"
