"""Discount strategies.

A Discount is a pure transform of a purchase total. The kind selects the
formula; at most one discount is applied per purchase.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from shop.domain.exceptions import InvalidAmountError
from shop.domain.model.value_objects import Money

_HUNDRED = Decimal("100")


class DiscountKind(Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"
    NONE = "NONE"


@dataclass(frozen=True)
class Discount:
    """Percentage, fixed-amount or no discount.

    ``value`` is the percentage for PERCENTAGE (0-100 inclusive) and the
    amount for FIXED (>= 0). It is ignored for NONE.
    """

    kind: DiscountKind
    value: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal) or not self.value.is_finite():
            raise InvalidAmountError(f"Discount value must be a finite Decimal, got {self.value!r}")
        if self.kind is DiscountKind.PERCENTAGE and not (0 <= self.value <= _HUNDRED):
            raise InvalidAmountError(
                f"Percentage discount must be between 0 and 100, got {self.value}"
            )
        if self.kind is DiscountKind.FIXED and self.value < 0:
            raise InvalidAmountError(f"Fixed discount cannot be negative, got {self.value}")

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def percentage(percent: str | int | float | Decimal) -> Discount:
        return Discount(DiscountKind.PERCENTAGE, _to_decimal(percent))

    @staticmethod
    def fixed(amount: str | int | float | Decimal) -> Discount:
        return Discount(DiscountKind.FIXED, _to_decimal(amount))

    @staticmethod
    def none() -> Discount:
        return Discount(DiscountKind.NONE)

    # --- Behaviour ------------------------------------------------------------

    def apply(self, total: Money) -> Money:
        """Return the discounted total. Never negative."""
        if self.kind is DiscountKind.PERCENTAGE:
            return Money(total.amount - total.amount * self.value / _HUNDRED, total.currency)
        if self.kind is DiscountKind.FIXED:
            return Money(max(Decimal("0"), total.amount - self.value), total.currency)
        return total

    @property
    def description(self) -> str:
        if self.kind is DiscountKind.PERCENTAGE:
            return f"{self.value.normalize():f}% off"
        if self.kind is DiscountKind.FIXED:
            return f"{Money(self.value)} off"
        return "No discount"


def _to_decimal(value: str | int | float | Decimal) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError(f"Invalid discount value: {value!r}") from exc
