"""
Filter expressions.

A filter is an immutable ``{type, target, value}`` triple. Filters accept
any value at construction and check its shape when serialized, so an
invalid filter can be built but never emitted.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from ddd_toolkit.infrastructure.filter.exceptions import FilterValueInvalidError
from ddd_toolkit.infrastructure.filter.filter_type import FilterType

Scalar = str | int | float
FilterValue = Scalar | bool | Sequence[Scalar]


def is_filled_scalar(value: object) -> bool:
    """Non-empty string, int or float; bools are not numbers here."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return isinstance(value, int | float)


def is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_pair(value: object) -> bool:
    return isinstance(value, list | tuple) and len(value) == 2


@dataclass(frozen=True)
class Filter(ABC):
    type: ClassVar[FilterType]

    target: str
    value: FilterValue

    @abstractmethod
    def value_is_valid(self) -> bool: ...

    def validate(self) -> None:
        """
        Raises:
            FilterValueInvalidError: If the value has the wrong shape
        """
        if not self.value_is_valid():
            raise FilterValueInvalidError(self.value)

    def to_dict(self) -> dict[str, object]:
        self.validate()
        value = list(self.value) if isinstance(self.value, list | tuple) else self.value
        return {"type": self.type.value, "target": self.target, "value": value}


class ScalarFilter(Filter):
    def value_is_valid(self) -> bool:
        return is_filled_scalar(self.value)


class NumericFilter(Filter):
    def value_is_valid(self) -> bool:
        return is_number(self.value)


class PairFilter(Filter):
    def value_is_valid(self) -> bool:
        return is_pair(self.value) and all(is_filled_scalar(item) for item in self.value)


class ColumnPairFilter(Filter):
    def value_is_valid(self) -> bool:
        return is_pair(self.value) and all(
            isinstance(item, str) and item.strip() for item in self.value
        )


@dataclass(frozen=True)
class Equal(ScalarFilter):
    type: ClassVar[FilterType] = FilterType.EQUAL


@dataclass(frozen=True)
class NotEqual(ScalarFilter):
    type: ClassVar[FilterType] = FilterType.NOT_EQUAL


@dataclass(frozen=True)
class Like(ScalarFilter):
    type: ClassVar[FilterType] = FilterType.LIKE


@dataclass(frozen=True)
class NotLike(ScalarFilter):
    type: ClassVar[FilterType] = FilterType.NOT_LIKE


@dataclass(frozen=True)
class GreaterThan(NumericFilter):
    type: ClassVar[FilterType] = FilterType.GREATER_THAN


@dataclass(frozen=True)
class GreaterThanEqualTo(NumericFilter):
    type: ClassVar[FilterType] = FilterType.GREATER_THAN_EQUAL_TO


@dataclass(frozen=True)
class LessThan(NumericFilter):
    type: ClassVar[FilterType] = FilterType.LESS_THAN


@dataclass(frozen=True)
class LessThanEqualTo(NumericFilter):
    type: ClassVar[FilterType] = FilterType.LESS_THAN_EQUAL_TO


@dataclass(frozen=True)
class Between(PairFilter):
    type: ClassVar[FilterType] = FilterType.BETWEEN


@dataclass(frozen=True)
class NotBetween(PairFilter):
    type: ClassVar[FilterType] = FilterType.NOT_BETWEEN


@dataclass(frozen=True)
class In(PairFilter):
    """Membership filter; takes exactly two candidate values."""

    type: ClassVar[FilterType] = FilterType.IN


@dataclass(frozen=True)
class NotIn(PairFilter):
    type: ClassVar[FilterType] = FilterType.NOT_IN


@dataclass(frozen=True)
class BetweenColumns(ColumnPairFilter):
    """Target lies between the values of two other columns."""

    type: ClassVar[FilterType] = FilterType.BETWEEN_COLUMNS


@dataclass(frozen=True)
class NotBetweenColumns(ColumnPairFilter):
    type: ClassVar[FilterType] = FilterType.NOT_BETWEEN_COLUMNS


@dataclass(frozen=True)
class IsNull(Filter):
    """Serialized as ``$null`` with value ``True``."""

    type: ClassVar[FilterType] = FilterType.NULL
    value: FilterValue = True

    def value_is_valid(self) -> bool:
        return self.value is True


@dataclass(frozen=True)
class IsNotNull(Filter):
    """Serialized as ``$null`` with value ``False``."""

    type: ClassVar[FilterType] = FilterType.NULL
    value: FilterValue = False

    def value_is_valid(self) -> bool:
        return self.value is False
