"""
Per-type registry of entity fields addressable by name.

``Entity.update_entity`` reads current values and applies new values by
field name. The registry for an entity class is built once from its
dataclass fields and cached, so lookups never inspect the class again.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields, is_dataclass
from functools import cache
from operator import attrgetter
from types import MappingProxyType

from .exceptions import StructuralError

# Identity and bookkeeping: readable, never written through the registry
BOOKKEEPING_FIELDS = frozenset({"id", "version", "created_at", "updated_at", "_events"})

# Change-tracking state of the entity itself: not addressable at all
TRACKING_FIELDS = frozenset({"_dirty", "_persisted_version"})

Getter = Callable[[object], object]
Setter = Callable[[object, object], None]


@dataclass(frozen=True)
class FieldAccessor:
    name: str
    getter: Getter
    setter: Setter | None

    @property
    def is_writable(self) -> bool:
        return self.setter is not None


@dataclass(frozen=True)
class FieldRegistry:
    """Getter/setter pairs for the fields of one entity class."""

    entity_type: type
    accessors: Mapping[str, FieldAccessor]

    def accessor(self, name: str) -> FieldAccessor:
        """
        Look up a field by name.

        Raises:
            StructuralError: If the entity class has no such field
        """
        try:
            return self.accessors[name]
        except KeyError:
            raise StructuralError(
                f"Property {name} does not exist on {self.entity_type.__name__}",
                {"entity_type": self.entity_type.__name__, "field": name},
            ) from None

    def set(self, entity: object, name: str, value: object) -> None:
        """
        Write a field.

        Raises:
            StructuralError: If the field is unknown or is an identity or
                bookkeeping field
        """
        setter = self.accessor(name).setter
        if setter is None:
            raise StructuralError(
                f"Property {name} of {self.entity_type.__name__} is read-only",
                {"entity_type": self.entity_type.__name__, "field": name},
            )
        setter(entity, value)


def _make_setter(name: str) -> Setter:
    def setter(entity: object, value: object) -> None:
        setattr(entity, name, value)

    return setter


@cache
def field_registry(entity_type: type) -> FieldRegistry:
    """Build (once) the field registry of a dataclass entity type."""
    if not is_dataclass(entity_type):
        raise StructuralError(f"{entity_type.__name__} must be a dataclass to track changes")

    accessors: dict[str, FieldAccessor] = {}
    for f in fields(entity_type):
        if f.name in TRACKING_FIELDS:
            continue
        writable = f.init and f.name not in BOOKKEEPING_FIELDS
        accessors[f.name] = FieldAccessor(
            name=f.name,
            getter=attrgetter(f.name),
            setter=_make_setter(f.name) if writable else None,
        )

    return FieldRegistry(entity_type=entity_type, accessors=MappingProxyType(accessors))
