"""
Base class for Aggregate Roots.

Aggregate Roots are the entry point to an aggregate - a cluster of domain
objects that are treated as a single unit. All external references should
go through the aggregate root, and all invariants are enforced here.

Example:
    @dataclass(eq=False)
    class Order(AggregateRoot[OrderId]):
        id: OrderId
        status: str

        def ship(self) -> None:
            self.update_aggregate_root({"status": "shipped"}, event_factory=OrderShipped)
"""

import copy
from collections import Counter
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic

from .domain_event import DomainEvent
from .entity import Entity, IdType
from .exceptions import StructuralError
from .value_objects.ids import EntityId

EventFactory = Callable[[EntityId, dict[str, object]], DomainEvent]
EventType = str | type[DomainEvent]


def _matches(event: DomainEvent, event_type: EventType) -> bool:
    if isinstance(event_type, type):
        return isinstance(event, event_type)
    return event.event_name == event_type


@dataclass(eq=False)
class AggregateRoot(Entity[IdType], Generic[IdType]):
    """
    Base class for Aggregate Roots in the domain model.

    Aggregate Roots are:
    - Entry point to an aggregate (cluster of related entities)
    - Responsible for maintaining invariants
    - The only entity referenced from outside the aggregate
    - Can record domain events for later dispatch

    Domain events are buffered in recording order until the repository has
    persisted the aggregate and marks them as committed. The buffer belongs
    to this instance: copies and unpickled instances start empty.
    """

    _events: list[DomainEvent] = field(
        default_factory=list, init=False, repr=False, compare=False, kw_only=True
    )

    _transient_fields: ClassVar[frozenset[str]] = frozenset({"_events"})

    def update_aggregate_root(
        self,
        changes: Mapping[str, object],
        event_factory: EventFactory | None = None,
        event: DomainEvent | None = None,
        custom_setters: Mapping[str, Callable[[Any], None]] | None = None,
    ) -> dict[str, object]:
        """
        Update the aggregate and record an event when something changed.

        Args:
            changes: Field name to proposed value
            event_factory: Called with ``(aggregate_id, changeset)``; a
                ``DomainEvent`` subclass works as is
            event: Pre-built event, recorded when no factory is given
            custom_setters: Passed through to ``update_entity``

        Returns:
            The changeset; empty for a no-op update, which records nothing

        Raises:
            StructuralError: If a field is unknown or the factory does not
                build a ``DomainEvent``
        """
        changeset = self.update_entity(changes, custom_setters)
        if not changeset:
            return changeset

        if event_factory is not None:
            built = event_factory(self.id, changeset)
            if not isinstance(built, DomainEvent):
                raise StructuralError(
                    f"Event factory for {self.__class__.__name__} did not build a DomainEvent",
                    {"result_type": type(built).__name__},
                )
            self.record_event(built)
        elif event is not None:
            self.record_event(event)

        return changeset

    def record_event(self, event: DomainEvent) -> None:
        """Append an event to the uncommitted buffer."""
        self._events.append(event)

    def uncommitted_events(self) -> list[DomainEvent]:
        """
        Return copies of the pending events, oldest first.

        Neither the list, the events nor their payloads are shared with the buffer.
        """
        return [copy.deepcopy(event) for event in self._events]

    def has_uncommitted_events(self) -> bool:
        return bool(self._events)

    def mark_events_as_committed(self) -> None:
        """
        Clear the event buffer.

        Called by the infrastructure layer once the events have been
        published after a successful write.
        """
        self._events = []

    def event_by_type(self, event_type: EventType) -> DomainEvent | None:
        """First pending event matching a name or class, if any."""
        for event in self._events:
            if _matches(event, event_type):
                return copy.deepcopy(event)
        return None

    def events_of_type(self, event_type: EventType) -> list[DomainEvent]:
        return [copy.deepcopy(event) for event in self._events if _matches(event, event_type)]

    def count_events_of_type(self, event_type: EventType) -> int:
        return sum(1 for event in self._events if _matches(event, event_type))

    def clear_events_of_type(self, event_type: EventType) -> int:
        """Drop matching events, keeping the others in order. Returns how many were dropped."""
        kept = [event for event in self._events if not _matches(event, event_type)]
        removed = len(self._events) - len(kept)
        self._events = kept
        return removed

    def event_summary(self) -> dict[str, int]:
        """Pending event count per event name."""
        return dict(Counter(event.event_name for event in self._events))

    def metadata(self) -> dict[str, object]:
        return {
            **super().metadata(),
            "is_aggregate_root": True,
            "has_uncommitted_events": self.has_uncommitted_events(),
            "uncommitted_event_count": len(self._events),
        }

    def _reset_transient_state(self) -> None:
        self._events = []
