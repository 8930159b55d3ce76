"""Customer aggregate: identity, purchase history and loyalty points."""

from __future__ import annotations

from shop.domain.exceptions import ValidationError
from shop.domain.model.purchase import Purchase, points_for
from shop.domain.model.value_objects import Money


class Customer:
    """A registered customer.

    The only mutation is ``record_purchase()``, so ``points`` never
    decreases.
    """

    def __init__(self, customer_id: str, name: str) -> None:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer id is required")
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        self._id = customer_id.strip()
        self._name = name.strip()
        self._purchases: list[Purchase] = []
        self._points = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def purchases(self) -> tuple[Purchase, ...]:
        return tuple(self._purchases)

    @property
    def points(self) -> int:
        return self._points

    @property
    def purchase_count(self) -> int:
        return len(self._purchases)

    @property
    def total_spent(self) -> Money:
        result = Money.zero()
        for purchase in self._purchases:
            result = result + purchase.total_after_discount
        return result

    def record_purchase(self, purchase: Purchase) -> int:
        """Append *purchase* to the history and award its points.

        Returns the number of points awarded.
        """
        if purchase.customer_id != self._id:
            raise ValidationError(
                f"Purchase belongs to customer '{purchase.customer_id}', not '{self._id}'"
            )
        awarded = points_for(purchase.total_after_discount)
        self._purchases.append(purchase)
        self._points += awarded
        return awarded

    def __repr__(self) -> str:
        return f"Customer(id={self._id!r}, name={self._name!r}, points={self._points})"
