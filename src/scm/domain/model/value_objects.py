"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from scm.domain.exceptions import ValidationError

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Decimal keeps order totals exact; amounts are stored to the cent.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = "USD") -> Money:
        """Coerce user input to Money, rounded to the cent."""
        try:
            value = Decimal(str(amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")


@dataclass(frozen=True)
class Quantity:
    """A positive integer count of units on an order line."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be at least 1, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)
