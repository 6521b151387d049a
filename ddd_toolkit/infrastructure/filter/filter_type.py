from enum import StrEnum


class FilterType(StrEnum):
    """Type tags of serialized filters."""

    EQUAL = "$eq"
    NOT_EQUAL = "$notEq"
    BETWEEN = "$between"
    NOT_BETWEEN = "$notBetween"
    BETWEEN_COLUMNS = "$betweenColumns"
    NOT_BETWEEN_COLUMNS = "$notBetweenColumns"
    GREATER_THAN = "$gt"
    GREATER_THAN_EQUAL_TO = "$gte"
    LESS_THAN = "$lt"
    LESS_THAN_EQUAL_TO = "$lte"
    IN = "$in"
    NOT_IN = "$notIn"
    LIKE = "$like"
    NOT_LIKE = "$notLike"
    NULL = "$null"
