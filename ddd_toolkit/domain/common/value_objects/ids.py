"""
Strongly-typed entity identifiers.

Entity IDs are value objects that wrap an integer or a UUID. They provide
type safety to prevent mixing up IDs of different entities.

Example:
    @dataclass(frozen=True)
    class OrderId(UuidEntityId):
        prefix: ClassVar[str] = "ord"

    order_id = OrderId.generate()
    order_id.with_prefix()  # "ord_0b9f..."
"""

import re
from dataclasses import dataclass
from typing import ClassVar, Self
from uuid import UUID, uuid4

from ..exceptions import ValidationError
from ..value_object import ValueObject

_NIL_UUID = UUID(int=0)
_MIN_UUID_VERSION = 4
_SHORT_ID_LENGTH = 8
_OBJECT_ID_PATTERN = re.compile(r"[a-f0-9]{24}", re.IGNORECASE)


@dataclass(frozen=True)
class EntityId(ValueObject):
    """
    Base class for strongly-typed entity identifiers.

    Integer identifiers are database-native ids; ``0`` is the placeholder
    for an entity that has not been persisted yet.
    """

    value: int | UUID

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int | UUID):
            raise ValidationError(
                f"{self.__class__.__name__} must wrap an int or UUID", value=self.value
            )
        if isinstance(self.value, int) and self.value < 0:
            raise ValidationError(f"{self.__class__.__name__} cannot be negative", value=self.value)

    def __int__(self) -> int:
        if isinstance(self.value, int):
            return self.value
        raise TypeError(f"Cannot convert UUID-based {self.__class__.__name__} to int")

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Set placeholder id. Usually these are set by the database"""
        return cls(0)

    def to_primitive(self) -> int | str:
        """Convert to primitive for serialization."""
        if isinstance(self.value, int):
            return self.value
        return str(self.value)


@dataclass(frozen=True)
class UuidEntityId(EntityId):
    """
    UUID-based identifier with a per-type prefix.

    Subclasses must set ``prefix``. Only UUID version 4 or higher is
    accepted (the nil UUID is allowed as an explicit "no id" marker).
    """

    value: UUID
    prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValidationError("Prefix must be set in the child class")
        if not isinstance(self.value, UUID):
            raise ValidationError("Invalid UUID value", value=self.value)
        if self.value != _NIL_UUID and (self.value.version or 0) < _MIN_UUID_VERSION:
            raise ValidationError(
                "Only UUID version 4 or higher are allowed, got version: "
                f"{self.value.version}",
                value=str(self.value),
            )

    # Construction

    @classmethod
    def generate(cls) -> Self:
        """Create a new random identifier."""
        return cls(uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse the canonical UUID string form."""
        if not value or not value.strip():
            raise ValidationError("Id cannot be empty")
        try:
            parsed = UUID(value.strip())
        except ValueError as err:
            raise ValidationError(f"Invalid UUID format: {value}", value=value) from err
        return cls(parsed)

    @classmethod
    def from_prefixed(cls, prefixed_id: str) -> Self:
        """Parse an id of the form ``<prefix>_<uuid>``."""
        if "_" not in prefixed_id:
            raise ValidationError("Prefixed ID must contain underscore separator")
        try:
            return cls.from_string(prefixed_id.rsplit("_", 1)[1])
        except ValidationError as err:
            raise ValidationError("Invalid prefixed ID format", value=prefixed_id) from err

    @staticmethod
    def extract_prefix(prefixed_id: str) -> str:
        """Return the prefix part of ``<prefix>_<uuid>``."""
        if "_" not in prefixed_id:
            raise ValidationError("Prefixed ID must contain underscore separator")
        return prefixed_id.rsplit("_", 1)[0]

    @staticmethod
    def validate_prefix(prefixed_id: str, expected_prefix: str) -> bool:
        try:
            return UuidEntityId.extract_prefix(prefixed_id) == expected_prefix
        except ValidationError:
            return False

    # Queries

    def to_primitive(self) -> str:
        return str(self.value)

    @property
    def hex(self) -> str:
        return self.value.hex

    @property
    def uuid_version(self) -> int | None:
        return self.value.version

    def is_nil(self) -> bool:
        return self.value == _NIL_UUID

    def is_before(self, other: "UuidEntityId") -> bool:
        return self.value < other.value

    def is_after(self, other: "UuidEntityId") -> bool:
        return self.value > other.value

    # Display helpers

    def short_id(self) -> str:
        """First eight characters, for logs and compact display."""
        return str(self.value)[:_SHORT_ID_LENGTH]

    def log_id(self) -> str:
        """Partially masked id that is safe to write to logs."""
        return f"{self.short_id()[:4]}****"

    def with_prefix(self) -> str:
        """Example: ``ord_550e8400-e29b-41d4-a716-446655440000``."""
        return f"{self.prefix}_{self.value}"

    def display_id(self) -> str:
        return self.with_prefix().upper().replace("_", "-")

    def reference_number(self) -> str:
        """Human-friendly reference like ``ORD-1234-5678`` derived from the id."""
        digits = "".join(str(int(char, 16) % 10) for char in self.hex[:8])
        return f"{self.prefix}-{digits[:4]}-{digits[4:8]}".upper()


@dataclass(frozen=True)
class MongoObjectId(ValueObject):
    """
    MongoDB ObjectId: 24 hexadecimal characters.

    Accepted in any case and stored lower-case.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _OBJECT_ID_PATTERN.fullmatch(self.value):
            raise ValidationError(
                "Invalid ObjectId format. Expected 24 hexadecimal characters, got: "
                f"{self.value}",
                value=self.value,
            )
        object.__setattr__(self, "value", self.value.lower())

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value)
