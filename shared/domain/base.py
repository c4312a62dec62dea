"""
Base Domain Classes

This module provides the foundational building blocks for the domain layer:
- Entity: Objects with unique identity
- ValueObject: Immutable objects compared by value
"""

from abc import ABC
from dataclasses import dataclass


class Entity(ABC):
    """
    Base class for all entities

    Entities have unique identity and are mutable.
    Two entities are equal if their IDs are equal. An entity that has not
    been persisted yet (id is None) is only equal to itself.
    """
    id: int | None

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self):
        if self.id is None:
            return id(self)
        return hash((self.__class__.__name__, self.id))


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects

    Value objects are immutable and have no identity.
    Two value objects are equal if all their attributes are equal.
    """
    pass
