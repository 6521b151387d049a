"""Fluent builder for filter lists."""

from collections.abc import Iterator, Sequence
from typing import Self

from ddd_toolkit.infrastructure.filter.filters import (
    Between,
    BetweenColumns,
    Equal,
    Filter,
    GreaterThan,
    GreaterThanEqualTo,
    In,
    IsNotNull,
    IsNull,
    LessThan,
    LessThanEqualTo,
    Like,
    NotBetween,
    NotBetweenColumns,
    NotEqual,
    NotIn,
    NotLike,
    Scalar,
)


class Builder:
    """
    Ordered, append-only list of filters.

    Example:
        Builder().eq("status", "active").gte("age", 18).to_list()
    """

    def __init__(self) -> None:
        self._filters: list[Filter] = []

    def add(self, filter_: Filter) -> Self:
        self._filters.append(filter_)
        return self

    def eq(self, target: str, value: Scalar) -> Self:
        return self.add(Equal(target, value))

    def neq(self, target: str, value: Scalar) -> Self:
        return self.add(NotEqual(target, value))

    def between(self, target: str, value: Sequence[Scalar]) -> Self:
        return self.add(Between(target, value))

    def not_between(self, target: str, value: Sequence[Scalar]) -> Self:
        return self.add(NotBetween(target, value))

    def between_columns(self, target: str, value: Sequence[str]) -> Self:
        return self.add(BetweenColumns(target, value))

    def not_between_columns(self, target: str, value: Sequence[str]) -> Self:
        return self.add(NotBetweenColumns(target, value))

    def gt(self, target: str, value: int | float) -> Self:
        return self.add(GreaterThan(target, value))

    def gte(self, target: str, value: int | float) -> Self:
        return self.add(GreaterThanEqualTo(target, value))

    def lt(self, target: str, value: int | float) -> Self:
        return self.add(LessThan(target, value))

    def lte(self, target: str, value: int | float) -> Self:
        return self.add(LessThanEqualTo(target, value))

    def in_(self, target: str, value: Sequence[Scalar]) -> Self:
        return self.add(In(target, value))

    def not_in(self, target: str, value: Sequence[Scalar]) -> Self:
        return self.add(NotIn(target, value))

    def like(self, target: str, value: Scalar) -> Self:
        return self.add(Like(target, value))

    def not_like(self, target: str, value: Scalar) -> Self:
        return self.add(NotLike(target, value))

    def is_null(self, target: str) -> Self:
        return self.add(IsNull(target))

    def is_not_null(self, target: str) -> Self:
        return self.add(IsNotNull(target))

    @property
    def filters(self) -> tuple[Filter, ...]:
        return tuple(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __iter__(self) -> Iterator[Filter]:
        return iter(tuple(self._filters))

    def to_list(self) -> list[dict[str, object]]:
        """
        Serialize all filters in order.

        Raises:
            FilterValueInvalidError: If any filter is invalid; nothing is returned
        """
        for filter_ in self._filters:
            filter_.validate()
        return [filter_.to_dict() for filter_ in self._filters]
