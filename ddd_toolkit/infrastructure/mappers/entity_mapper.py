"""Base mapper for Entity <-> storage record conversion."""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy.orm import Session

from ddd_toolkit.domain.common.entity import Entity
from ddd_toolkit.domain.common.value_objects.ids import EntityId
from ddd_toolkit.infrastructure.models import VersionedRecordMixin

EntityT = TypeVar("EntityT", bound=Entity[Any])
RecordT = TypeVar("RecordT", bound=VersionedRecordMixin)


class EntityMapper(ABC, Generic[EntityT, RecordT]):
    """
    Converts one entity type to and from its storage record.

    Subclasses set ``record_class`` and implement ``to_entity`` and
    ``record_data``. Bookkeeping columns (``version``, ``created_at``,
    ``updated_at``) are the repository's business and are left alone here.

    Example:
        class CustomerMapper(EntityMapper[Customer, CustomerRecord]):
            record_class = CustomerRecord

            def to_entity(self, record, deep=False):
                return Customer.from_state({...})

            def record_data(self, entity):
                return {"name": entity.name, "email": entity.email.value}
    """

    record_class: ClassVar[type[Any]]

    def __init__(self, db: Session) -> None:
        self.db = db

    @abstractmethod
    def to_entity(self, record: RecordT, deep: bool = False) -> EntityT:
        """
        Convert a stored record to a domain entity.

        Args:
            record: The stored record
            deep: Also load related records into the entity
        """

    @abstractmethod
    def record_data(self, entity: EntityT) -> dict[str, object]:
        """Entity-specific column values for the record."""

    def record_key(self, entity_id: EntityId) -> object:
        return entity_id.to_primitive()

    def find_record(self, entity: EntityT) -> RecordT | None:
        """Load the entity's record, bypassing stale identity-map state."""
        return self.db.get(self.record_class, self.record_key(entity.id), populate_existing=True)

    def find_or_create_record(self, entity: EntityT) -> RecordT:
        """Stored record for the entity, or a new transient one carrying its id."""
        record = self.find_record(entity)
        if record is None:
            record = self.record_class(id=self.record_key(entity.id))
        return record

    def fill_record(self, record: RecordT, entity: EntityT) -> RecordT:
        for column, value in self.record_data(entity).items():
            setattr(record, column, value)
        return record

    def to_record(self, entity: EntityT) -> RecordT:
        """Convert domain entity to a record tied to its identity."""
        return self.fill_record(self.find_or_create_record(entity), entity)
