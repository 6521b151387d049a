"""
Domain layer exceptions.

These exceptions represent domain-level errors that occur when
business rules are violated, domain invariants are broken or the
domain model is used incorrectly. None of them is retried internally.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Example: Invalid email format, negative amount, malformed filter value.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class StructuralError(DomainError):
    """
    Raised when the domain model is used in a structurally invalid way.

    This is a programmer error: an unknown field name passed to
    ``update_entity``, an event factory that does not build a
    ``DomainEvent``, a missing mapper registration.
    """


class EntityNotFoundError(DomainError):
    """
    Raised when an entity cannot be found.

    Example: Looking up an order by ID that doesn't exist.
    """

    def __init__(self, entity_type: str, entity_id: object) -> None:
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, {"entity_type": entity_type, "entity_id": entity_id})
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvariantViolationError(DomainError):
    """
    Raised when an entity invariant is violated.

    Invariants are rules that must always be true for an entity
    to be in a valid state.
    """

    def __init__(self, entity: str, errors: list[str]) -> None:
        message = f"Invariant violation in {entity}: {', '.join(errors)}"
        super().__init__(message, {"entity": entity, "errors": errors})
        self.entity = entity
        self.errors = errors
