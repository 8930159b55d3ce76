"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Nothing is persisted, so every call builds a fresh store seeded with the
demo catalog and customers.
"""

from __future__ import annotations

from datetime import date

from shop.config import Settings, get_settings
from shop.domain.model.customer import Customer
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money
from shop.domain.service.store import Store
from shop.infrastructure.persistence.in_memory_customer_repository import (
    InMemoryCustomerRepository,
)
from shop.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)


def empty_store(settings: Settings | None = None) -> Store:
    settings = settings or get_settings()
    return Store(
        settings.store_name,
        product_repo=InMemoryProductRepository(),
        customer_repo=InMemoryCustomerRepository(),
    )


def demo_products() -> list[Product]:
    return [
        Product.electronic("ELEC001", "HP Pavilion Laptop", Money.of("850"), 10, "HP", 24),
        Product.electronic("ELEC002", "iPhone 15", Money.of("1200"), 5, "Apple", 12),
        Product.electronic("ELEC003", "AirPods Pro", Money.of("250"), 15, "Apple", 12),
        Product.apparel("APP001", "Polo Shirt", Money.of("35"), 50, "M", "Blue"),
        Product.apparel("APP002", "Levi's Jeans", Money.of("60"), 30, "L", "Black"),
        Product.food("FOOD001", "Fitness Cereal", Money.of("5"), 100, date(2025, 6, 15)),
        Product.food("FOOD002", "Nescafe Coffee", Money.of("8"), 80, date(2025, 12, 20)),
    ]


def demo_customers() -> list[Customer]:
    return [
        Customer("C001", "Maria Gonzalez"),
        Customer("C002", "Juan Perez"),
    ]


def seeded_store(settings: Settings | None = None) -> Store:
    store = empty_store(settings)
    for product in demo_products():
        store.add_product(product)
    for customer in demo_customers():
        store.register_customer(customer)
    return store
