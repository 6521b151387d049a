"""Data-only filter expressions and their builder."""

from .builder import Builder
from .exceptions import FilterValueInvalidError
from .filter_type import FilterType
from .filters import (
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
)

__all__ = [
    "Between",
    "BetweenColumns",
    "Builder",
    "Equal",
    "Filter",
    "FilterType",
    "FilterValueInvalidError",
    "GreaterThan",
    "GreaterThanEqualTo",
    "In",
    "IsNotNull",
    "IsNull",
    "LessThan",
    "LessThanEqualTo",
    "Like",
    "NotBetween",
    "NotBetweenColumns",
    "NotEqual",
    "NotIn",
    "NotLike",
]
