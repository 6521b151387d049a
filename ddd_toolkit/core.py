from collections.abc import Generator
from contextlib import contextmanager

from dependency_injector import containers, providers
from sqlalchemy.orm import Session, sessionmaker

from ddd_toolkit.config import get_settings
from ddd_toolkit.database import create_database_engine
from ddd_toolkit.infrastructure.event_publisher import (
    DomainEventPublisher,
    InMemoryEventDispatcher,
)
from ddd_toolkit.infrastructure.mappers.mapper_resolver import EntityMapperResolver
from ddd_toolkit.infrastructure.repository import Repository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Singleton(get_settings)

    # Database
    engine = providers.Singleton(create_database_engine, settings=settings)
    session_factory = providers.Singleton(
        sessionmaker, bind=engine, autocommit=False, autoflush=False
    )

    # Events
    event_dispatcher = providers.Singleton(
        InMemoryEventDispatcher, history_limit=settings.provided.EVENT_HISTORY_LIMIT
    )
    event_publisher = providers.Singleton(DomainEventPublisher, dispatcher=event_dispatcher)

    # Persistence
    mapper_resolver = providers.Singleton(EntityMapperResolver)
    repository = providers.Factory(
        Repository,
        db=db,
        mapper_resolver=mapper_resolver,
        event_publisher=event_publisher,
    )


@contextmanager
def bound_to_session(target: Container, db: Session) -> Generator[Container, None, None]:
    """Provide ``db`` to the container for the duration of the block."""
    try:
        target.db.override(db)
        yield target
    finally:
        # Reset override once the unit of work is done
        target.db.reset_override()
