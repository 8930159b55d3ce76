"""Abstract repository for the customer registry."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shop.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None:
        """Return a customer by id, or None if not registered."""

    @abstractmethod
    def list_all(self) -> list[Customer]:
        """Return every registered customer, in registration order."""

    @abstractmethod
    def add(self, customer: Customer) -> None:
        """Store a new customer. The caller guarantees the id is unused."""
