"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. The in-memory implementation lives in the
infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_code(self, code: str) -> Product | None:
        """Return a product by its code, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, in insertion order."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Store a new product. The caller guarantees the code is unused."""
