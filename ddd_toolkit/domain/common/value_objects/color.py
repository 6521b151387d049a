"""Color value object restricted to a fixed palette."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

from ..exceptions import ValidationError
from ..value_object import ValueObject


class ColorName(StrEnum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    BLACK = "black"
    WHITE = "white"
    ORANGE = "orange"
    PURPLE = "purple"
    PINK = "pink"
    BROWN = "brown"
    GRAY = "gray"
    CYAN = "cyan"
    MAGENTA = "magenta"
    STEEL = "steel"


@dataclass(frozen=True)
class Color(ValueObject):
    """Palette color, stored trimmed and lower-case."""

    value: str

    def __post_init__(self) -> None:
        normalized = self.value.strip().lower() if isinstance(self.value, str) else ""
        if not normalized:
            raise ValidationError("Color cannot be empty", field="color")
        if normalized not in ColorName:
            raise ValidationError("Unknown color", field="color", value=self.value)
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value)

    @property
    def name(self) -> ColorName:
        return ColorName(self.value)
