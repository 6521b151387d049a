"""
Repositories persisting entities with optimistic locking.

A save goes through these steps:

1. resolve the entity's mapper and load (or create) its record
2. skip the write when the entity is clean and the record already exists
3. otherwise compare the stored version with the version the entity was
   loaded with, then write and commit; the UPDATE itself only matches that
   version, so a writer committing in between is detected as well
4. sync the stored bookkeeping values back onto the entity
5. publish the aggregate's pending events, then mark them committed

Events are only published after a successful commit; a failed write
leaves both the entity and its event buffer as they were.
"""

from typing import Any, ClassVar, Generic

import structlog
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from ddd_toolkit.domain.common.entity import Entity
from ddd_toolkit.domain.common.exceptions import EntityNotFoundError
from ddd_toolkit.domain.common.protocols import EventRecorder
from ddd_toolkit.domain.common.value_objects.ids import EntityId
from ddd_toolkit.infrastructure.event_publisher import DomainEventPublisher
from ddd_toolkit.infrastructure.exceptions import (
    ConcurrencyConflictError,
    DeletionFailureError,
    PersistenceFailureError,
    RelatedDeletionFailureError,
)
from ddd_toolkit.infrastructure.mappers.entity_mapper import EntityMapper, EntityT
from ddd_toolkit.infrastructure.mappers.mapper_resolver import EntityMapperResolver
from ddd_toolkit.infrastructure.models import VersionedRecordMixin

logger = structlog.get_logger(__name__)


class Repository:
    """Saves and deletes any entity type the mapper resolver knows about."""

    def __init__(
        self,
        db: Session,
        mapper_resolver: EntityMapperResolver,
        event_publisher: DomainEventPublisher,
    ) -> None:
        self.db = db
        self.mapper_resolver = mapper_resolver
        self.event_publisher = event_publisher

    def mapper_for(self, entity_class: type) -> EntityMapper[Any, Any]:
        return self.mapper_resolver.resolve(entity_class, self.db)

    def save_entity(self, entity: Entity[Any]) -> VersionedRecordMixin:
        """
        Persist an entity if it changed or has never been stored.

        Args:
            entity: The entity to save

        Returns:
            The stored record, with the entity synced to its bookkeeping values

        Raises:
            MapperNotRegisteredError: If no mapper handles the entity type
            ConcurrencyConflictError: If another writer saved the record since
                the entity was loaded; nothing is written
            PersistenceFailureError: If the write fails; nothing is published
        """
        mapper = self.mapper_for(type(entity))
        record = mapper.find_or_create_record(entity)

        written = False
        if entity.is_dirty() or not record.exists:
            self.persist_dirty_entity(entity, record, mapper)
            written = True
        else:
            logger.debug(
                "entity_save_skipped",
                entity_type=type(entity).__name__,
                entity_id=str(entity.id),
            )

        self.sync_entity_from_record(entity, record)

        if written:
            self.dispatch_uncommitted_events(entity)

        return record

    def persist_dirty_entity(
        self,
        entity: Entity[Any],
        record: VersionedRecordMixin,
        mapper: EntityMapper[Any, Any],
    ) -> None:
        if record.exists:
            self.handle_optimistic_locking(entity, record)

        mapper.fill_record(record, entity)
        record.version = entity.version
        record.created_at = entity.created_at
        record.updated_at = entity.updated_at

        record_id = record.id
        try:
            self.db.add(record)
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            actual = self.stored_version(type(record), record_id)
            raise self.concurrency_conflict(entity, actual) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "entity_save_failed",
                entity_type=type(entity).__name__,
                entity_id=str(entity.id),
                error=str(e),
            )
            raise PersistenceFailureError(
                f"Failed to persist {type(entity).__name__} {entity.id}",
                {"entity_type": type(entity).__name__, "entity_id": str(entity.id)},
            ) from e

        logger.info(
            "entity_saved",
            entity_type=type(entity).__name__,
            entity_id=str(entity.id),
            version=entity.version,
        )

    def handle_optimistic_locking(self, entity: Entity[Any], record: VersionedRecordMixin) -> None:
        """
        Compare the stored version with the version the entity was loaded with.

        Raises:
            ConcurrencyConflictError: On mismatch
        """
        if record.version != entity.persisted_version:
            raise self.concurrency_conflict(entity, record.version)

    def concurrency_conflict(
        self, entity: Entity[Any], actual_version: int | None
    ) -> ConcurrencyConflictError:
        expected = entity.persisted_version
        logger.warning(
            "optimistic_lock_conflict",
            entity_type=type(entity).__name__,
            entity_id=str(entity.id),
            expected_version=expected,
            actual_version=actual_version,
        )
        return ConcurrencyConflictError(str(entity.id), expected, actual_version)

    def stored_version(
        self, record_class: type[VersionedRecordMixin], record_id: str
    ) -> int | None:
        """Version currently in storage; None once the record is gone."""
        return self.db.scalar(select(record_class.version).where(record_class.id == record_id))

    def sync_entity_from_record(self, entity: Entity[Any], record: VersionedRecordMixin) -> None:
        entity.hydrate(record)

    def dispatch_uncommitted_events(self, entity: object) -> None:
        """Publish an aggregate's pending events and clear its buffer."""
        if not isinstance(entity, EventRecorder) or not entity.has_uncommitted_events():
            return
        self.event_publisher.publish_events(entity.uncommitted_events())
        entity.mark_events_as_committed()

    def delete_entity(self, entity: Entity[Any]) -> None:
        """
        Delete the entity's record, then publish its pending events.

        Raises:
            DeletionFailureError: If there is no record or the delete fails
        """
        mapper = self.mapper_for(type(entity))
        record = mapper.find_record(entity)
        if record is None:
            raise DeletionFailureError(
                f"{type(entity).__name__} {entity.id} has no stored record",
                {"entity_type": type(entity).__name__, "entity_id": str(entity.id)},
            )

        try:
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DeletionFailureError(
                f"Failed to delete {type(entity).__name__} {entity.id}",
                {"entity_type": type(entity).__name__, "entity_id": str(entity.id)},
            ) from e

        logger.info("entity_deleted", entity_type=type(entity).__name__, entity_id=str(entity.id))
        self.dispatch_uncommitted_events(entity)

    def delete_entities(self, entities: list[Entity[Any]]) -> None:
        for entity in entities:
            self.delete_entity(entity)

    def delete_related_entity(
        self,
        entity: Entity[Any],
        relation_name: str,
        related_id: EntityId | object,
    ) -> None:
        """
        Delete one record reachable through a relationship of the entity's record.

        Args:
            entity: Owner of the relationship
            relation_name: Name of the relationship on the owner's record
            related_id: Id of the related record

        Raises:
            RelatedDeletionFailureError: If the relationship is unknown, the
                related record is missing or not linked to the owner, or the
                delete fails
        """
        details = {
            "entity_type": type(entity).__name__,
            "entity_id": str(entity.id),
            "relation": relation_name,
            "related_id": str(related_id),
        }

        mapper = self.mapper_for(type(entity))
        record = mapper.find_record(entity)
        if record is None:
            raise RelatedDeletionFailureError(
                f"{type(entity).__name__} {entity.id} has no stored record", details
            )

        relationships = inspect(type(record)).relationships
        if relation_name not in relationships:
            raise RelatedDeletionFailureError(
                f"Unknown relation {relation_name} on {type(record).__name__}", details
            )

        relationship = relationships[relation_name]
        key = related_id.to_primitive() if isinstance(related_id, EntityId) else related_id
        related = self.db.get(relationship.mapper.class_, key)
        linked = getattr(record, relation_name)
        if relationship.uselist:
            is_linked = related is not None and related in linked
        else:
            is_linked = related is not None and related is linked
        if not is_linked:
            raise RelatedDeletionFailureError(
                f"No {relation_name} record {related_id} linked to {type(entity).__name__} "
                f"{entity.id}",
                details,
            )

        try:
            self.db.delete(related)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RelatedDeletionFailureError(
                f"Failed to delete {relation_name} record {related_id}", details
            ) from e

        logger.info("related_entity_deleted", **details)
        self.dispatch_uncommitted_events(entity)


class SQLAlchemyRepository(Repository, Generic[EntityT]):
    """
    Repository for a single entity type.

    Subclasses set ``entity_class`` and ``id_class``.

    Example:
        class CustomerRepository(SQLAlchemyRepository[Customer]):
            entity_class = Customer
            id_class = CustomerId
    """

    entity_class: ClassVar[type[Any]]
    id_class: ClassVar[type[EntityId]]

    @property
    def mapper(self) -> EntityMapper[EntityT, Any]:
        return self.mapper_for(self.entity_class)

    def next_id(self) -> EntityId:
        return self.id_class.generate()

    def find_by_id(self, entity_id: EntityId) -> EntityT | None:
        mapper = self.mapper
        record = self.db.get(
            mapper.record_class, mapper.record_key(entity_id), populate_existing=True
        )
        if record is None:
            return None
        return mapper.to_entity(record)

    def get_by_id(self, entity_id: EntityId) -> EntityT:
        """
        Load an entity that must exist.

        Raises:
            EntityNotFoundError: If there is no record with this id
        """
        entity = self.find_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_class.__name__, str(entity_id))
        return entity

    def exists(self, entity_id: EntityId) -> bool:
        mapper = self.mapper
        stmt = (
            select(func.count())
            .select_from(mapper.record_class)
            .where(mapper.record_class.id == mapper.record_key(entity_id))
        )
        return bool(self.db.scalar(stmt))

    def all(self) -> list[EntityT]:
        mapper = self.mapper
        stmt = select(mapper.record_class).order_by(mapper.record_class.created_at)
        return [mapper.to_entity(record) for record in self.db.scalars(stmt)]

    def count(self) -> int:
        stmt = select(func.count()).select_from(self.mapper.record_class)
        return self.db.scalar(stmt) or 0

    def save(self, entity: EntityT) -> EntityT:
        self.save_entity(entity)
        return entity

    def delete(self, entity_id: EntityId) -> None:
        """
        Delete an entity by id.

        Raises:
            EntityNotFoundError: If there is no record with this id
        """
        self.delete_entity(self.get_by_id(entity_id))
