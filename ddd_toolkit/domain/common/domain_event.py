"""
Base class for Domain Events.

Domain Events represent something significant that happened in the domain.
They are immutable records of past occurrences that other parts of the
system can react to.

Example:
    @dataclass(frozen=True)
    class OrderShipped(DomainEvent):
        name: ClassVar[str | None] = "order.shipped"

    event = OrderShipped(order.id, {"old_status": "paid", "new_status": "shipped"})
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from types import MappingProxyType
from typing import ClassVar
from uuid import UUID, uuid4

from .exceptions import ValidationError
from .value_object import primitive_value
from .value_objects.ids import EntityId


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for Domain Events.

    Domain Events are:
    - Immutable (frozen dataclass, read-only payload)
    - Named in past tense (OrderShipped, not ShipOrder)
    - Tied to the aggregate that recorded them
    - Timestamped (when the event occurred)
    - Versioned (``event_version`` for forward-compatible deserialization)

    Subclasses should be decorated with @dataclass(frozen=True). The stable
    event name defaults to the class name; set ``name`` to override it.
    """

    name: ClassVar[str | None] = None

    aggregate_id: EntityId
    payload: Mapping[str, object] = field(default_factory=dict)
    event_version: int = field(default=1, kw_only=True)
    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(UTC), kw_only=True)

    def __post_init__(self) -> None:
        if self.event_version < 1:
            raise ValidationError("event_version must be at least 1", value=self.event_version)
        # Private deep copy behind a read-only view
        object.__setattr__(self, "payload", MappingProxyType(copy.deepcopy(dict(self.payload))))

    def __reduce__(self) -> tuple[object, ...]:
        # MappingProxyType cannot be pickled; rebuild through __init__
        state = {f.name: getattr(self, f.name) for f in fields(self) if f.init}
        state["payload"] = dict(self.payload)
        return (_restore_event, (self.__class__, state))

    @property
    def event_name(self) -> str:
        """Stable identifier of the event type."""
        return self.name or self.__class__.__name__

    def to_dict(self) -> dict[str, object]:
        """Convert event to dictionary for serialization."""
        return {
            "event_name": self.event_name,
            "event_id": str(self.event_id),
            "aggregate_id": self.aggregate_id.to_primitive(),
            "payload": {key: primitive_value(value) for key, value in self.payload.items()},
            "event_version": self.event_version,
            "occurred_on": self.occurred_on.isoformat(),
        }


def _restore_event(cls: type[DomainEvent], state: dict[str, object]) -> DomainEvent:
    return cls(**state)
