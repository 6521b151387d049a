"""Tests for the Email value object."""

import pytest

from ddd_toolkit.domain.common.exceptions import ValidationError
from ddd_toolkit.domain.common.value_objects import Email


class TestEmail:
    def test_normalizes_case_and_whitespace(self) -> None:
        assert Email("  Ada@Example.COM ").value == "ada@example.com"

    def test_equality_after_normalization(self) -> None:
        assert Email("ADA@example.com") == Email("ada@example.com")

    @pytest.mark.parametrize("value", ["", "   ", "no-at-sign", "a@b", "a@@example.com"])
    def test_invalid_addresses_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            Email(value)

    def test_too_long_address_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Email(f"{'a' * 250}@example.com")

    def test_disposable_domain_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Temporary email"):
            Email("someone@mailinator.com")

    def test_parts(self) -> None:
        email = Email("grace@mail.navy.mil")

        assert email.local_part == "grace"
        assert email.domain == "mail.navy.mil"
        assert email.top_level_domain == "mil"
        assert email.domain_without_subdomain() == "navy.mil"

    def test_domain_comparisons(self) -> None:
        first = Email("a@mail.example.com")
        second = Email("b@example.com")

        assert not first.is_same_domain(second)
        assert first.is_same_main_domain(second)

    def test_obfuscate(self) -> None:
        assert Email("grace@example.com").obfuscate() == "g***e@example.com"
        assert Email("jo@example.com").obfuscate() == "**@example.com"

    def test_from_parts(self) -> None:
        assert Email.from_parts("ada", "example.com") == Email("ada@example.com")

    def test_str_is_the_address(self) -> None:
        assert str(Email("ada@example.com")) == "ada@example.com"
