"""JSON object value object."""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

from ..exceptions import ValidationError
from ..value_object import ValueObject


@dataclass(frozen=True)
class JsonData(ValueObject):
    """
    Immutable JSON object.

    ``value`` holds the compact serialized form; it must decode to a JSON
    object. "Mutators" return new instances.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("JSON value cannot be empty")
        try:
            decoded = json.loads(self.value)
        except json.JSONDecodeError as err:
            raise ValidationError(f"Invalid JSON: {err.msg}", value=self.value) from err
        if not isinstance(decoded, dict):
            raise ValidationError("JSON value must be an object", value=self.value)
        object.__setattr__(self, "value", _dump(decoded))

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        try:
            return cls(_dump(dict(data)))
        except TypeError as err:
            raise ValidationError(f"Data is not JSON serializable: {err}") from err

    @classmethod
    def empty(cls) -> Self:
        return cls("{}")

    def to_dict(self) -> dict[str, Any]:
        return json.loads(self.value)

    def get(self, key: str, default: Any = None) -> Any:
        return self.to_dict().get(key, default)

    def has(self, key: str) -> bool:
        return key in self.to_dict()

    def is_empty(self) -> bool:
        return self.value == "{}"

    def with_value(self, key: str, value: Any) -> "JsonData":
        data = self.to_dict()
        data[key] = value
        return JsonData.from_dict(data)

    def without(self, key: str) -> "JsonData":
        data = self.to_dict()
        data.pop(key, None)
        return JsonData.from_dict(data)

    def merge(self, other: "JsonData") -> "JsonData":
        """Shallow merge; keys of ``other`` win."""
        return JsonData.from_dict({**self.to_dict(), **other.to_dict()})

    def to_primitive(self) -> dict[str, Any]:
        return self.to_dict()


def _dump(data: dict[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"), sort_keys=True)
