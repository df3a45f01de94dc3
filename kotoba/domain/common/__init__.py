"""
Domain common module.

Contains base classes for domain modeling:
- EntityId: Strongly-typed identifiers
- Entity: Learning records compared by identity
"""

from .entity import Entity, EntityId
from .exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityConflictError,
    EntityNotFoundError,
    InvariantViolationError,
    ValidationError,
)

__all__ = [
    "BusinessRuleViolationError",
    "DomainError",
    "Entity",
    "EntityConflictError",
    "EntityId",
    "EntityNotFoundError",
    "InvariantViolationError",
    "ValidationError",
]
