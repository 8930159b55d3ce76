"""Dict-backed implementation of CustomerRepository."""

from __future__ import annotations

from shop.domain.model.customer import Customer
from shop.domain.repository.customer_repository import CustomerRepository


class InMemoryCustomerRepository(CustomerRepository):

    def __init__(self, customers: list[Customer] | None = None) -> None:
        self._customers: dict[str, Customer] = {}
        for customer in customers or []:
            self._customers[customer.id] = customer

    def get_by_id(self, customer_id: str) -> Customer | None:
        return self._customers.get(customer_id)

    def list_all(self) -> list[Customer]:
        return list(self._customers.values())

    def add(self, customer: Customer) -> None:
        self._customers[customer.id] = customer
