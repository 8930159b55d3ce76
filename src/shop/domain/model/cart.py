"""Cart: a customer's staging area for products before checkout.

Adding a line only *checks* the product's live stock; nothing is reserved
until the Store commits the purchase. Two additions of the same product
are therefore validated against the same stock figure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shop.domain.exceptions import InsufficientStockError
from shop.domain.model.customer import Customer
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    product: Product  # live catalog entry, not owned by the cart
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity


class Cart:

    def __init__(self, customer: Customer) -> None:
        self._customer = customer
        self._lines: list[CartLine] = []

    @property
    def customer(self) -> Customer:
        return self._customer

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def add_line(self, product: Product, quantity: int) -> None:
        """Add *quantity* units of *product*, merging with an existing line.

        Raises InvalidAmountError for a non-positive quantity and
        InsufficientStockError when the resulting line quantity would
        exceed the product's current stock. The cart is unchanged on error.
        """
        qty = Quantity(quantity).value
        existing = self._find_line(product.code)
        requested = qty + (existing.quantity if existing else 0)

        if requested > product.stock:
            raise InsufficientStockError(product.code, product.name, requested, product.stock)

        if existing is None:
            self._lines.append(CartLine(product=product, quantity=qty))
        else:
            existing.quantity = requested
        logger.debug(
            "Cart of %s: %s now x%d", self._customer.id, product.code, requested
        )

    def quantity_of(self, product_code: str) -> int:
        line = self._find_line(product_code)
        return line.quantity if line else 0

    def calculate_total(self) -> Money:
        result = Money.zero()
        for line in self._lines:
            result = result + line.line_total
        return result

    def clear(self) -> None:
        self._lines = []

    def discard_purchased(self, quantities: dict[str, int]) -> None:
        """Remove purchased quantities, keeping anything added since.

        Lines whose remaining quantity drops to zero are removed. After an
        undisturbed checkout this leaves the cart empty, like ``clear()``.
        """
        remaining: list[CartLine] = []
        for line in self._lines:
            left = line.quantity - quantities.get(line.product.code, 0)
            if left > 0:
                line.quantity = left
                remaining.append(line)
        self._lines = remaining

    # --- Internal helpers -----------------------------------------------------

    def _find_line(self, product_code: str) -> CartLine | None:
        for line in self._lines:
            if line.product.code == product_code:
                return line
        return None
