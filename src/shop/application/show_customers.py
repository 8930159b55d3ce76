"""Application service: Show Customers use case (query)."""

from __future__ import annotations

from shop.application.dto import CustomerSummaryDTO
from shop.domain.service.store import Store


class ShowCustomersHandler:

    def __init__(self, store: Store) -> None:
        self._store = store

    def handle(self) -> list[CustomerSummaryDTO]:
        return [
            CustomerSummaryDTO(
                id=customer.id,
                name=customer.name,
                purchases=customer.purchase_count,
                total_spent=str(customer.total_spent),
                points=customer.points,
            )
            for customer in self._store.list_customers()
        ]
