"""Purchase record and the Invoice view derived from it.

A Purchase is written once, at commit time, and never changes. Its lines
copy the product code, name and unit price so later catalog changes cannot
alter history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

from shop.domain.model.value_objects import Money

if TYPE_CHECKING:
    from shop.domain.model.customer import Customer

# One loyalty point per full 10 currency units spent (after discount).
POINTS_DIVISOR = Decimal("10")


def points_for(total: Money) -> int:
    return int(total.amount // POINTS_DIVISOR)


@dataclass(frozen=True)
class PurchaseLine:
    product_code: str
    product_name: str
    quantity: int
    unit_price: Money  # locked at purchase time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Purchase:
    customer_id: str
    lines: tuple[PurchaseLine, ...]
    total_before_discount: Money
    total_after_discount: Money
    payment_description: str
    discount_description: str | None = None
    purchased_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def discount_amount(self) -> Money:
        return self.total_before_discount - self.total_after_discount

    @property
    def points_earned(self) -> int:
        return points_for(self.total_after_discount)


@dataclass(frozen=True)
class Invoice:
    """Read-only view of a committed purchase, addressed to its customer."""

    store_name: str
    customer_id: str
    customer_name: str
    issued_at: datetime
    lines: tuple[PurchaseLine, ...]
    subtotal: Money
    discount_description: str | None
    discount_amount: Money
    total: Money
    payment_description: str
    points_earned: int
    points_balance: int

    @staticmethod
    def build(store_name: str, purchase: Purchase, customer: Customer) -> Invoice:
        """Build an invoice after ``customer.record_purchase(purchase)``.

        ``points_balance`` reflects the customer's points at build time,
        so it includes the points this purchase earned.
        """
        return Invoice(
            store_name=store_name,
            customer_id=customer.id,
            customer_name=customer.name,
            issued_at=purchase.purchased_at,
            lines=purchase.lines,
            subtotal=purchase.total_before_discount,
            discount_description=purchase.discount_description,
            discount_amount=purchase.discount_amount,
            total=purchase.total_after_discount,
            payment_description=purchase.payment_description,
            points_earned=purchase.points_earned,
            points_balance=customer.points,
        )
