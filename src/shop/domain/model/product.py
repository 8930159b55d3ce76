"""Product aggregate.

A product is one of a closed set of kinds (electronic, apparel, food).
The kind only changes what ``describe()`` shows; pricing and stock
handling are identical for every kind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from shop.domain.exceptions import InsufficientStockError, InvalidAmountError, ValidationError
from shop.domain.model.value_objects import Money

logger = logging.getLogger(__name__)


class ProductKind(Enum):
    ELECTRONIC = "ELECTRONIC"
    APPAREL = "APPAREL"
    FOOD = "FOOD"


@dataclass(frozen=True)
class ElectronicDetails:
    brand: str
    warranty_months: int


@dataclass(frozen=True)
class ApparelDetails:
    size: str
    color: str


@dataclass(frozen=True)
class FoodDetails:
    expires_on: date


ProductDetails = ElectronicDetails | ApparelDetails | FoodDetails

_DETAILS_BY_KIND: dict[ProductKind, type] = {
    ProductKind.ELECTRONIC: ElectronicDetails,
    ProductKind.APPAREL: ApparelDetails,
    ProductKind.FOOD: FoodDetails,
}


class Product:
    """A product in the catalog.

    Price is fixed at construction. Stock is private and only changes
    through ``reduce_stock()`` / ``increase_stock()``, which the Store
    calls while holding the product's lock.
    """

    def __init__(
        self,
        code: str,
        name: str,
        price: Money,
        stock: int,
        kind: ProductKind,
        details: ProductDetails,
    ) -> None:
        if not code or not code.strip():
            raise ValidationError("Product code is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not isinstance(price, Money):
            raise ValidationError(f"Product price must be Money, got {type(price).__name__}")
        if not isinstance(stock, int) or isinstance(stock, bool) or stock < 0:
            raise InvalidAmountError(f"Stock must be a non-negative integer, got {stock!r}")
        if not isinstance(details, _DETAILS_BY_KIND[kind]):
            raise ValidationError(
                f"{kind.value} product requires {_DETAILS_BY_KIND[kind].__name__}, "
                f"got {type(details).__name__}"
            )
        self._code = code.strip()
        self._name = name.strip()
        self._price = price
        self._stock = stock
        self._kind = kind
        self._details = details

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def electronic(
        code: str, name: str, price: Money, stock: int, brand: str, warranty_months: int
    ) -> Product:
        return Product(
            code, name, price, stock,
            ProductKind.ELECTRONIC, ElectronicDetails(brand, warranty_months),
        )

    @staticmethod
    def apparel(
        code: str, name: str, price: Money, stock: int, size: str, color: str
    ) -> Product:
        return Product(
            code, name, price, stock,
            ProductKind.APPAREL, ApparelDetails(size, color),
        )

    @staticmethod
    def food(code: str, name: str, price: Money, stock: int, expires_on: date) -> Product:
        return Product(code, name, price, stock, ProductKind.FOOD, FoodDetails(expires_on))

    # --- Accessors ------------------------------------------------------------

    @property
    def code(self) -> str:
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> Money:
        return self._price

    @property
    def stock(self) -> int:
        return self._stock

    @property
    def kind(self) -> ProductKind:
        return self._kind

    @property
    def details(self) -> ProductDetails:
        return self._details

    # --- Stock mutation -------------------------------------------------------

    def reduce_stock(self, quantity: int) -> None:
        """Remove *quantity* units from stock.

        Raises InsufficientStockError, leaving stock untouched, when fewer
        than *quantity* units are available.
        """
        if quantity <= 0:
            raise InvalidAmountError("Stock reduction must be positive")
        if quantity > self._stock:
            raise InsufficientStockError(self._code, self._name, quantity, self._stock)
        self._stock -= quantity
        logger.debug("Stock of %s reduced by %d to %d", self._code, quantity, self._stock)

    def increase_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise InvalidAmountError("Stock increase cannot be negative")
        self._stock += quantity
        logger.debug("Stock of %s increased by %d to %d", self._code, quantity, self._stock)

    # --- Display --------------------------------------------------------------

    def describe(self) -> str:
        base = f"{self._name} - {self._price} (Stock: {self._stock})"
        return f"{base} | {self._describe_details()}"

    def _describe_details(self) -> str:
        details = self._details
        if self._kind is ProductKind.ELECTRONIC:
            return f"{details.brand} - Warranty: {details.warranty_months} months"
        if self._kind is ProductKind.APPAREL:
            return f"Size: {details.size}, Color: {details.color}"
        return f"Expires: {details.expires_on.isoformat()}"

    def __repr__(self) -> str:
        return f"Product(code={self._code!r}, kind={self._kind.value}, stock={self._stock})"
