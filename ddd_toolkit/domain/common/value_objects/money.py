"""Money value object."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Self

from ..exceptions import ValidationError
from ..value_object import ValueObject

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Non-negative amount in one of the supported currencies.

    Amounts are held as ``Decimal``; the ``euros``/``dollars``/``pounds``
    factories take minor units (cents).
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        try:
            amount = Decimal(str(self.amount))
        except InvalidOperation as err:
            raise ValidationError(
                "Amount must be numeric", field="amount", value=self.amount
            ) from err
        if not amount.is_finite():
            raise ValidationError("Amount must be finite", field="amount", value=self.amount)
        if amount < 0:
            raise ValidationError("Amount cannot be negative", field="amount", value=self.amount)
        if self.currency not in CURRENCY_SYMBOLS:
            raise ValidationError("Unsupported currency", field="currency", value=self.currency)
        object.__setattr__(self, "amount", amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_symbol}"

    @classmethod
    def euros(cls, cents: int) -> Self:
        return cls(Decimal(cents) / 100, "EUR")

    @classmethod
    def dollars(cls, cents: int) -> Self:
        return cls(Decimal(cents) / 100, "USD")

    @classmethod
    def pounds(cls, cents: int) -> Self:
        return cls(Decimal(cents) / 100, "GBP")

    @property
    def currency_symbol(self) -> str:
        return CURRENCY_SYMBOLS[self.currency]

    def add(self, other: "Money") -> "Money":
        """Sum of two amounts in the same currency."""
        if other.currency != self.currency:
            raise ValidationError(
                f"Cannot add {other.currency} to {self.currency}", field="currency"
            )
        return Money(self.amount + other.amount, self.currency)

    def to_primitive(self) -> dict[str, str]:
        return {"amount": str(self.amount), "currency": self.currency}

    def to_dict(self) -> dict[str, str]:
        return {**self.to_primitive(), "symbol": self.currency_symbol}
