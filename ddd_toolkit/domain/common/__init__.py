"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: Immutable objects defined by their attributes
- Entity: Objects with identity, version and change tracking
- AggregateRoot: Consistency boundaries with domain events
- DomainEvent: Notifications of significant domain occurrences
"""

from .aggregate_root import AggregateRoot
from .domain_event import DomainEvent
from .entity import Entity
from .exceptions import (
    DomainError,
    EntityNotFoundError,
    InvariantViolationError,
    StructuralError,
    ValidationError,
)
from .protocols import EventRecorder, Identifiable, Versioned
from .value_object import ValueObject
from .value_objects import EntityId, UuidEntityId

__all__ = [
    "AggregateRoot",
    "DomainError",
    "DomainEvent",
    "Entity",
    "EntityId",
    "EntityNotFoundError",
    "EventRecorder",
    "Identifiable",
    "InvariantViolationError",
    "StructuralError",
    "UuidEntityId",
    "ValidationError",
    "ValueObject",
    "Versioned",
]
