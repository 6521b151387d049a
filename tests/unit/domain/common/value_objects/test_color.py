"""Tests for the Color value object."""

import pytest

from ddd_toolkit.domain.common.exceptions import ValidationError
from ddd_toolkit.domain.common.value_objects import Color, ColorName


class TestColor:
    def test_normalizes_case_and_whitespace(self) -> None:
        color = Color.from_string("  Steel ")

        assert color.value == "steel"
        assert str(color) == "steel"
        assert color.name is ColorName.STEEL

    def test_every_palette_entry_is_accepted(self) -> None:
        assert [Color(name.value).value for name in ColorName] == [name.value for name in ColorName]

    @pytest.mark.parametrize("value", ["", "  ", "teal", "#ff0000"])
    def test_unknown_colors_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            Color(value)

    def test_equality(self) -> None:
        assert Color("RED") == Color("red")
        assert Color("red") != Color("blue")
