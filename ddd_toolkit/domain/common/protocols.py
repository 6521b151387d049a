"""
Capability protocols of domain objects.

The persistence layer depends on these capabilities rather than on
concrete base classes: anything ``Identifiable`` and ``Versioned`` can be
saved with optimistic locking, and anything that is also an
``EventRecorder`` gets its pending events published after a write.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from .domain_event import DomainEvent
from .value_objects.ids import EntityId


@runtime_checkable
class Identifiable(Protocol):
    id: EntityId


@runtime_checkable
class Versioned(Protocol):
    version: int
    created_at: datetime
    updated_at: datetime | None

    @property
    def persisted_version(self) -> int: ...

    def is_dirty(self) -> bool: ...


@runtime_checkable
class EventRecorder(Protocol):
    def record_event(self, event: DomainEvent) -> None: ...

    def uncommitted_events(self) -> Sequence[DomainEvent]: ...

    def has_uncommitted_events(self) -> bool: ...

    def mark_events_as_committed(self) -> None: ...


class PersistedState(Protocol):
    """Bookkeeping columns every storage record exposes."""

    version: int
    created_at: datetime
    updated_at: datetime | None
