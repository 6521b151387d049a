"""
Link value object.

Absolute URLs reduced to ``scheme://host/path?query``. Fragments and
credentials are dropped.
"""

from dataclasses import dataclass
from typing import Self
from urllib.parse import SplitResult, urlsplit

from ..exceptions import ValidationError
from ..value_object import ValueObject


def _split(value: str) -> SplitResult:
    try:
        parts = urlsplit(value)
        # Accessing the port validates it
        parts.port  # noqa: B018
    except ValueError as err:
        raise ValidationError("Invalid URL format provided", field="link", value=value) from err
    if not parts.scheme or not parts.hostname or any(char.isspace() for char in value):
        raise ValidationError("Invalid URL format provided", field="link", value=value)
    return parts


@dataclass(frozen=True)
class Link(ValueObject):
    """Absolute URL with a scheme and a host."""

    value: str

    def __post_init__(self) -> None:
        raw = self.value.strip() if isinstance(self.value, str) else ""
        if not raw:
            raise ValidationError("Invalid URL format provided", field="link", value=self.value)
        parts = _split(raw)
        host = parts.hostname or ""
        if ":" in host:
            host = f"[{host}]"
        if parts.port is not None:
            host = f"{host}:{parts.port}"
        canonical = f"{parts.scheme.lower()}://{host}{parts.path}"
        if parts.query:
            canonical = f"{canonical}?{parts.query}"
        object.__setattr__(self, "value", canonical)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value)

    @property
    def scheme(self) -> str:
        return urlsplit(self.value).scheme

    @property
    def host(self) -> str:
        return urlsplit(self.value).hostname or ""

    @property
    def path(self) -> str:
        return urlsplit(self.value).path

    @property
    def query(self) -> str:
        return urlsplit(self.value).query
