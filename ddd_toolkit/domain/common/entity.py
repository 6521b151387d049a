"""
Base class for Entities.

Entities are objects that have a distinct identity that runs through time
and different states. Two entities are equal if they have the same identity,
regardless of their attributes.

State changes go through ``update_entity``, which diffs the proposed values
against the current ones, applies only what actually changed and bumps the
version exactly once per effective update.

Example:
    @dataclass(eq=False)
    class Customer(Entity[CustomerId]):
        id: CustomerId
        name: str
        email: Email

        def rename(self, name: str) -> None:
            self.update_entity({"name": name})

Subclasses must be declared with ``@dataclass(eq=False)`` so that the
identity-based equality defined here is kept.
"""

from abc import ABC
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar, Generic, Self, TypeVar

from .exceptions import InvariantViolationError, StructuralError
from .field_registry import field_registry
from .protocols import PersistedState
from .value_object import primitive_value
from .value_objects.ids import EntityId

IdType = TypeVar("IdType", bound=EntityId)

RECENT_WINDOW = timedelta(seconds=60)

_SCALAR_TYPES = (str, bytes, int, float, bool, type(None))


def utc_now() -> datetime:
    return datetime.now(UTC)


def has_changed(current: object, new: object) -> bool:
    """
    Type-aware comparison of a current field value with a proposed one.

    Objects with their own textual form (value objects, ids, enums with a
    custom ``__str__``) compare through ``str()``. Everything else must match
    in both type and value, so ``1`` and ``True`` or ``1`` and ``1.0`` count
    as a change.
    """
    if not isinstance(current, _SCALAR_TYPES) and type(current).__str__ is not object.__str__:
        return str(current) != str(new)
    return type(current) is not type(new) or current != new


@dataclass(eq=False)
class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Entities are:
    - Defined by identity (not attributes)
    - Mutable (state can change over time, one version per change)
    - Have lifecycle (created, modified, deleted)

    ``dirty`` holds the changeset of the most recent effective update only.
    ``persisted_version`` is the version the entity had when it was last
    loaded from or synced with storage; the repository compares it with the
    stored version to detect concurrent writers.
    """

    id: IdType
    created_at: datetime = field(default_factory=utc_now, kw_only=True)
    updated_at: datetime | None = field(default=None, kw_only=True)
    version: int = field(default=0, kw_only=True)

    _dirty: dict[str, object] = field(default_factory=dict, init=False, repr=False, kw_only=True)
    _persisted_version: int | None = field(default=None, init=False, repr=False, kw_only=True)

    # Dropped on copy and pickle, rebuilt by _reset_transient_state()
    _transient_fields: ClassVar[frozenset[str]] = frozenset()

    # Construction

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> Self:
        """
        Rebuild an entity from persisted state.

        Bypasses change tracking and event recording: the result is clean
        and its persisted version is the stored one.

        Raises:
            StructuralError: If ``state`` names a field the entity does not have
        """
        init_fields = {f.name for f in fields(cls) if f.init}
        unknown = sorted(set(state) - init_fields)
        if unknown:
            raise StructuralError(
                f"Unknown fields for {cls.__name__}: {', '.join(unknown)}",
                {"entity_type": cls.__name__, "fields": unknown},
            )
        entity = cls(**state)
        entity._persisted_version = entity.version
        return entity

    # Change tracking

    def update_entity(
        self,
        changes: Mapping[str, object],
        custom_setters: Mapping[str, Callable[[Any], None]] | None = None,
    ) -> dict[str, object]:
        """
        Apply the values in ``changes`` that differ from the current state.

        Args:
            changes: Field name to proposed value
            custom_setters: Optional field name to callable used instead of
                plain assignment when that field is applied

        Returns:
            The changeset, ``old_<field>``/``new_<field>`` pairs for every
            changed field. Empty when nothing changed, in which case the
            entity is left untouched.

        Raises:
            StructuralError: If a field name does not exist on the entity
        """
        changeset = self.collect_changes(changes)
        if not changeset:
            return {}

        changed = {name: value for name, value in changes.items() if f"new_{name}" in changeset}
        self.apply_changes(changed, custom_setters)
        self.touch()
        self._dirty = dict(changeset)
        return changeset

    def collect_changes(self, changes: Mapping[str, object]) -> dict[str, object]:
        """
        Diff ``changes`` against current values without modifying anything.

        Identity and bookkeeping fields never appear in the changeset.
        """
        registry = field_registry(type(self))
        changeset: dict[str, object] = {}
        for name, new_value in changes.items():
            accessor = registry.accessor(name)
            if not accessor.is_writable:
                continue
            current = accessor.getter(self)
            if has_changed(current, new_value):
                changeset[f"old_{name}"] = current
                changeset[f"new_{name}"] = new_value
        return changeset

    def apply_changes(
        self,
        changes: Mapping[str, object],
        custom_setters: Mapping[str, Callable[[Any], None]] | None = None,
    ) -> None:
        """Write field values by name; identity and bookkeeping fields are skipped."""
        registry = field_registry(type(self))
        setters = custom_setters or {}
        for name, value in changes.items():
            accessor = registry.accessor(name)
            if not accessor.is_writable:
                continue
            if name in setters:
                setters[name](value)
            else:
                registry.set(self, name, value)

    def touch(self) -> None:
        """Mark the entity as modified now and advance its version."""
        if self._persisted_version is None:
            self._persisted_version = self.version
        self.updated_at = utc_now()
        self.version += 1

    def is_dirty(self) -> bool:
        return bool(self._dirty)

    @property
    def dirty(self) -> dict[str, object]:
        return dict(self._dirty)

    @property
    def persisted_version(self) -> int:
        if self._persisted_version is None:
            return self.version
        return self._persisted_version

    def hydrate(self, record: PersistedState) -> None:
        """Take over the authoritative bookkeeping values of a stored record."""
        self.created_at = record.created_at
        self.updated_at = record.updated_at
        self.version = record.version
        self._persisted_version = record.version

    # Identity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}[id={self.id}, version={self.version}]"

    def equals(self, other: object) -> bool:
        return self == other

    # Copying and pickling

    def __getstate__(self) -> dict[str, object]:
        return {
            key: value
            for key, value in self.__dict__.items()
            if key not in self._transient_fields
        }

    def __setstate__(self, state: dict[str, object]) -> None:
        self.__dict__.update(state)
        self._dirty = dict(self._dirty)
        self._reset_transient_state()

    def _reset_transient_state(self) -> None:
        """Hook for subclasses holding per-instance state that must not be shared."""

    # Introspection

    def to_dict(self) -> dict[str, object]:
        """Public field values, reduced to primitives."""
        return {
            f.name: primitive_value(getattr(self, f.name))
            for f in fields(self)
            if not f.name.startswith("_")
        }

    def metadata(self) -> dict[str, object]:
        return {
            "class": self.__class__.__name__,
            "id": str(self.id),
            "version": self.version,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "is_dirty": self.is_dirty(),
            "dirty_fields": sorted(
                key.removeprefix("new_") for key in self._dirty if key.startswith("new_")
            ),
        }

    def age_in_seconds(self, now: datetime | None = None) -> float:
        return ((now or utc_now()) - self.created_at).total_seconds()

    def is_recently_created(self, within: timedelta = RECENT_WINDOW) -> bool:
        return utc_now() - self.created_at <= within

    def is_recently_updated(self, within: timedelta = RECENT_WINDOW) -> bool:
        if self.updated_at is None:
            return False
        return utc_now() - self.updated_at <= within

    def is_older_than(self, age: timedelta) -> bool:
        return utc_now() - self.created_at > age

    # Invariants

    def validate(self) -> list[str]:
        """
        Check entity invariants.

        Override in subclasses; return one message per violated rule.
        """
        return []

    def is_valid(self) -> bool:
        return not self.validate()

    def ensure_valid(self) -> None:
        errors = self.validate()
        if errors:
            raise InvariantViolationError(self.__class__.__name__, errors)
