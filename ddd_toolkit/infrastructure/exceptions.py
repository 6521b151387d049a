"""
Infrastructure layer exceptions.

Raised by repositories and mappers when storage rejects an operation or
a concurrent writer got there first. None of them is retried internally:
the caller decides whether to reload and try again.
"""

from ddd_toolkit.domain.common.exceptions import StructuralError


class RepositoryError(Exception):
    """Base exception for persistence errors."""

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConcurrencyConflictError(RepositoryError):
    """
    Raised when the stored version no longer matches the version the
    entity was loaded with.

    Reload the entity, re-apply the change and save again. ``actual_version``
    is None when the record was deleted in the meantime.
    """

    def __init__(
        self, entity_id: object, expected_version: int, actual_version: int | None
    ) -> None:
        message = (
            f"Concurrency conflict for entity {entity_id}: "
            f"expected version {expected_version}, found {actual_version}"
        )
        super().__init__(
            message,
            {
                "entity_id": entity_id,
                "expected_version": expected_version,
                "actual_version": actual_version,
            },
        )
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class PersistenceFailureError(RepositoryError):
    """Raised when writing a storage record fails."""


class DeletionFailureError(RepositoryError):
    """Raised when a storage record cannot be deleted."""


class RelatedDeletionFailureError(RepositoryError):
    """Raised when a related record cannot be resolved or deleted."""


class MapperNotRegisteredError(StructuralError):
    """Raised when no mapper is registered for an entity type."""

    def __init__(self, entity_type: type) -> None:
        super().__init__(
            f"No mapper registered for {entity_type.__name__}",
            {"entity_type": entity_type.__name__},
        )
        self.entity_type = entity_type
