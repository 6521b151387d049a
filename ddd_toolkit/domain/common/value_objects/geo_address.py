"""
GeoAddress value object.

A geocoded postal address. Only ``country`` and ``precision`` are
required; the remaining parts depend on how precise the geocoder was.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Self

from ..exceptions import ValidationError
from ..value_object import ValueObject

_OPTIONAL_PARTS = (
    "street",
    "street_number",
    "zip_code",
    "city",
    "state",
    "county",
    "district",
    "neighborhood",
)


def _now() -> datetime:
    return datetime.now(UTC)


def _parse_timestamp(value: object, name: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value))
        except ValueError as err:
            raise ValidationError(f"Invalid {name} timestamp", field=name, value=value) from err
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


@dataclass(frozen=True)
class GeoAddress(ValueObject):
    """
    Geocoded address.

    Business Rules:
    - country and precision must be non-empty
    - timestamps are timezone-aware; naive values are taken as UTC
    """

    country: str
    precision: str
    street: str | None = None
    street_number: str | None = None
    zip_code: str | None = None
    city: str | None = None
    state: str | None = None
    county: str | None = None
    district: str | None = None
    neighborhood: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        for name in ("country", "precision"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{name.capitalize()} is required", field=name, value=value)
        object.__setattr__(self, "created_at", _parse_timestamp(self.created_at, "created_at"))
        object.__setattr__(self, "updated_at", _parse_timestamp(self.updated_at, "updated_at"))

    def __str__(self) -> str:
        return (
            f"{self.street or ''} {self.street_number or ''}, "
            f"{self.zip_code or ''} {self.city or ''}, {self.state or ''}, "
            f"{self.county or ''}, {self.district or ''}, {self.neighborhood or ''}, "
            f"{self.country}"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """
        Build an address from snake_case keys.

        ``created_at`` and ``updated_at`` may be ISO strings or datetimes
        and default to now.
        """
        missing = [key for key in ("country", "precision") if data.get(key) is None]
        if missing:
            raise ValidationError(f"Address must contain {' and '.join(missing)}")
        parts = {name: data.get(name) for name in _OPTIONAL_PARTS}
        return cls(
            country=data["country"],
            precision=data["precision"],
            created_at=data.get("created_at") or _now(),
            updated_at=data.get("updated_at") or _now(),
            **parts,
        )

    def to_primitive(self) -> dict[str, str | None]:
        primitive: dict[str, str | None] = {name: getattr(self, name) for name in _OPTIONAL_PARTS}
        primitive["country"] = self.country
        primitive["precision"] = self.precision
        primitive["created_at"] = self.created_at.isoformat()
        primitive["updated_at"] = self.updated_at.isoformat()
        return primitive
