"""Pytest configuration and fixtures."""

from collections.abc import Generator
from dataclasses import dataclass
from typing import ClassVar

import pytest
from sqlalchemy import ForeignKey, String, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship, sessionmaker
from sqlalchemy.pool import StaticPool

from ddd_toolkit.database import Base
from ddd_toolkit.domain.common.aggregate_root import AggregateRoot
from ddd_toolkit.domain.common.domain_event import DomainEvent
from ddd_toolkit.domain.common.value_objects import Email, UuidEntityId
from ddd_toolkit.infrastructure.event_publisher import (
    DomainEventPublisher,
    InMemoryEventDispatcher,
)
from ddd_toolkit.infrastructure.mappers import EntityMapper, EntityMapperResolver
from ddd_toolkit.infrastructure.models import VersionedRecordMixin
from ddd_toolkit.infrastructure.repository import Repository, SQLAlchemyRepository

# Test database URL (in-memory SQLite shared by every session of a test)
TEST_DATABASE_URL = "sqlite:///:memory:"


# Sample domain used across the suite


@dataclass(frozen=True)
class CustomerId(UuidEntityId):
    prefix: ClassVar[str] = "cus"


@dataclass(frozen=True)
class CustomerRenamed(DomainEvent):
    name: ClassVar[str | None] = "customer.renamed"


@dataclass(frozen=True)
class CustomerEmailChanged(DomainEvent):
    name: ClassVar[str | None] = "customer.email_changed"


@dataclass(frozen=True)
class CustomerDeleted(DomainEvent):
    name: ClassVar[str | None] = "customer.deleted"


@dataclass(eq=False)
class Customer(AggregateRoot[CustomerId]):
    id: CustomerId
    name: str
    email: Email

    @classmethod
    def create(cls, name: str, email: str) -> "Customer":
        return cls(id=CustomerId.generate(), name=name, email=Email(email))

    def rename(self, name: str) -> dict[str, object]:
        return self.update_aggregate_root({"name": name}, event_factory=CustomerRenamed)

    def change_email(self, email: str) -> dict[str, object]:
        return self.update_aggregate_root(
            {"email": Email(email)}, event_factory=CustomerEmailChanged
        )

    def mark_deleted(self) -> None:
        self.record_event(CustomerDeleted(self.id))

    def validate(self) -> list[str]:
        errors = []
        if not self.name.strip():
            errors.append("name cannot be blank")
        return errors


class CustomerRecord(VersionedRecordMixin, Base):
    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True)

    addresses: Mapped[list["AddressRecord"]] = relationship(
        back_populates="customer", cascade="all, delete-orphan"
    )


class AddressRecord(Base):
    __tablename__ = "customer_addresses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[str] = mapped_column(ForeignKey("customers.id"), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)

    customer: Mapped[CustomerRecord] = relationship(back_populates="addresses")


class CustomerMapper(EntityMapper[Customer, CustomerRecord]):
    record_class = CustomerRecord

    def to_entity(self, record: CustomerRecord, deep: bool = False) -> Customer:
        return Customer.from_state(
            {
                "id": CustomerId.from_string(record.id),
                "name": record.name,
                "email": Email(record.email),
                "version": record.version,
                "created_at": record.created_at,
                "updated_at": record.updated_at,
            }
        )

    def record_data(self, entity: Customer) -> dict[str, object]:
        return {"name": entity.name, "email": entity.email.value}


class CustomerRepository(SQLAlchemyRepository[Customer]):
    entity_class = Customer
    id_class = CustomerId


# Fixtures


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database for each test."""
    test_engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    try:
        yield test_engine
    finally:
        Base.metadata.drop_all(bind=test_engine)
        test_engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def dispatcher() -> InMemoryEventDispatcher:
    return InMemoryEventDispatcher()


@pytest.fixture
def publisher(dispatcher: InMemoryEventDispatcher) -> DomainEventPublisher:
    return DomainEventPublisher(dispatcher)


@pytest.fixture
def mapper_resolver() -> EntityMapperResolver:
    resolver = EntityMapperResolver()
    resolver.register(Customer, CustomerMapper)
    return resolver


@pytest.fixture
def repository(
    db_session: Session,
    mapper_resolver: EntityMapperResolver,
    publisher: DomainEventPublisher,
) -> Repository:
    return Repository(db_session, mapper_resolver, publisher)


@pytest.fixture
def customer_repository(
    db_session: Session,
    mapper_resolver: EntityMapperResolver,
    publisher: DomainEventPublisher,
) -> CustomerRepository:
    return CustomerRepository(db_session, mapper_resolver, publisher)


@pytest.fixture
def customer() -> Customer:
    return Customer.create(name="Ada Lovelace", email="ada@example.com")
