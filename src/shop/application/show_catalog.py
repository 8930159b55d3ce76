"""Application service: Show Catalog use case (query)."""

from __future__ import annotations

from shop.application.dto import ProductLineDTO
from shop.domain.service.store import Store


class ShowCatalogHandler:

    def __init__(self, store: Store) -> None:
        self._store = store

    def handle(self) -> list[ProductLineDTO]:
        return [
            ProductLineDTO(
                code=product.code,
                kind=product.kind.value,
                description=product.describe(),
                stock=product.stock,
            )
            for product in self._store.list_products()
        ]
