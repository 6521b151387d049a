"""Filter exceptions."""

import json

from ddd_toolkit.domain.common.exceptions import ValidationError


def describe_value(value: object) -> str:
    """Textual form of a filter value as it appears in error messages."""
    if isinstance(value, list | tuple):
        try:
            return json.dumps(list(value), separators=(",", ":"))
        except TypeError:
            return "array"
    if isinstance(value, bool):
        return "1" if value else ""
    if value is None:
        return ""
    return str(value)


class FilterValueInvalidError(ValidationError):
    """Raised when a filter's value has the wrong shape for its type."""

    def __init__(self, value: object) -> None:
        super().__init__(f'The filter value "{describe_value(value)}" is not valid.')
        self.value = value
