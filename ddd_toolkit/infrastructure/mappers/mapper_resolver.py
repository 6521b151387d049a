"""Registry resolving the mapper of an entity type."""

from collections.abc import Callable
from typing import Any

from sqlalchemy.orm import Session

from ddd_toolkit.infrastructure.exceptions import MapperNotRegisteredError
from ddd_toolkit.infrastructure.mappers.entity_mapper import EntityMapper

MapperFactory = Callable[[Session], EntityMapper[Any, Any]]


class EntityMapperResolver:
    """
    Maps entity classes to mapper factories.

    A mapper class is itself a valid factory. Lookups walk the entity's
    MRO, so a mapper registered for a base class also serves subclasses
    that have none of their own.
    """

    def __init__(self) -> None:
        self._factories: dict[type, MapperFactory] = {}

    def register(self, entity_class: type, mapper_factory: MapperFactory) -> None:
        self._factories[entity_class] = mapper_factory

    def is_registered(self, entity_class: type) -> bool:
        return any(klass in self._factories for klass in entity_class.__mro__)

    def resolve(self, entity_class: type, db: Session) -> EntityMapper[Any, Any]:
        """
        Build the mapper for ``entity_class`` bound to ``db``.

        Raises:
            MapperNotRegisteredError: If neither the class nor any base has a mapper
        """
        for klass in entity_class.__mro__:
            factory = self._factories.get(klass)
            if factory is not None:
                return factory(db)
        raise MapperNotRegisteredError(entity_class)
