"""Tests for the read-only catalog and customer queries."""

from shop.application.checkout import CheckoutHandler
from shop.application.dto import CartItemSpec
from shop.application.show_catalog import ShowCatalogHandler
from shop.application.show_customers import ShowCustomersHandler
from shop.domain.model.customer import Customer
from shop.domain.model.payment import PaymentMethod
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money
from tests.fakes import make_store


def _store():
    return make_store(
        [Product.apparel("APP001", "Polo Shirt", Money.of("35"), 50, "M", "Blue")],
        [Customer("C001", "Maria Gonzalez"), Customer("C002", "Juan Perez")],
    )


class TestShowCatalog:

    def test_lists_products(self):
        (line,) = ShowCatalogHandler(_store()).handle()
        assert line.code == "APP001"
        assert line.kind == "APPAREL"
        assert line.stock == 50
        assert line.description == "Polo Shirt - $35.00 (Stock: 50) | Size: M, Color: Blue"

    def test_empty_catalog(self):
        assert ShowCatalogHandler(make_store()).handle() == []


class TestShowCustomers:

    def test_summaries_reflect_purchases(self):
        store = _store()
        CheckoutHandler(store).handle("C002", [CartItemSpec("APP001", 3)], PaymentMethod.cash())

        maria, juan = ShowCustomersHandler(store).handle()
        assert (maria.id, maria.purchases, maria.total_spent, maria.points) == ("C001", 0, "$0.00", 0)
        assert (juan.id, juan.purchases, juan.total_spent, juan.points) == ("C002", 1, "$105.00", 10)
