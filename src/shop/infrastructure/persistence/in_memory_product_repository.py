"""Dict-backed implementation of ProductRepository.

Lives for the process lifetime only; nothing is written to disk.
"""

from __future__ import annotations

from shop.domain.model.product import Product
from shop.domain.repository.product_repository import ProductRepository


class InMemoryProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._products: dict[str, Product] = {}
        for product in products or []:
            self._products[product.code] = product

    def get_by_code(self, code: str) -> Product | None:
        return self._products.get(code)

    def list_all(self) -> list[Product]:
        return list(self._products.values())

    def add(self, product: Product) -> None:
        self._products[product.code] = product
