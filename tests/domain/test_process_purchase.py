"""Unit tests for the Store purchase transaction."""

import pytest

from shop.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    PaymentDeclinedError,
    ValidationError,
)
from shop.domain.model.cart import Cart
from shop.domain.model.customer import Customer
from shop.domain.model.discount import Discount
from shop.domain.model.payment import PaymentMethod
from shop.domain.model.product import Product
from shop.domain.model.value_objects import Money
from tests.fakes import DecliningPayment, RecordingPayment, make_store


def _setup():
    p = Product.apparel("P", "Product P", Money.of("20"), 10, "M", "Red")
    q = Product.apparel("Q", "Product Q", Money.of("5"), 2, "S", "Blue")
    alice = Customer("C1", "Alice")
    store = make_store([p, q], [alice])
    return store, p, q, alice


class TestSuccessfulPurchase:

    def test_reference_example(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 3)
        cart.add_line(p, 4)
        assert p.stock == 10

        payment = RecordingPayment()
        invoice = store.process_purchase(cart, payment)

        assert payment.settled == [Money.of("140")]
        assert p.stock == 3
        assert alice.points == 14
        assert cart.is_empty
        assert invoice.total == Money.of("140")
        assert invoice.points_earned == 14
        assert invoice.points_balance == 14

    def test_stock_reduced_by_each_line(self):
        store, p, q, _ = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 2)
        cart.add_line(q, 2)
        store.process_purchase(cart, PaymentMethod.cash())
        assert p.stock == 8
        assert q.stock == 0

    def test_discount_applied_before_settlement(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 5)
        payment = RecordingPayment()
        invoice = store.process_purchase(cart, payment, Discount.percentage(10))
        assert payment.settled == [Money.of("90")]
        assert invoice.subtotal == Money.of("100")
        assert invoice.discount_amount == Money.of("10")
        assert invoice.discount_description == "10% off"
        assert alice.points == 9

    def test_fixed_discount_cannot_go_negative(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 5)
        invoice = store.process_purchase(cart, PaymentMethod.cash(), Discount.fixed(150))
        assert invoice.total == Money.zero()
        assert alice.points == 0
        assert alice.purchase_count == 1

    def test_purchase_recorded_with_price_snapshot(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 2)
        store.process_purchase(cart, PaymentMethod.card("4111111111111111"))

        (purchase,) = alice.purchases
        (line,) = purchase.lines
        assert line.product_code == "P"
        assert line.unit_price == Money.of("20")
        assert line.quantity == 2
        assert purchase.payment_description == "Card **** 1111"
        assert purchase.discount_description is None

        # later stock changes do not alter history
        store.restock("P", 100)
        assert alice.purchases[0].lines[0].quantity == 2

    def test_invoice_names_store_and_customer(self):
        store, p, _, _ = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 1)
        invoice = store.process_purchase(cart, PaymentMethod.cash())
        assert invoice.store_name == "TestStore"
        assert invoice.customer_name == "Alice"
        assert invoice.payment_description == "Cash"

    def test_points_accumulate_across_purchases(self):
        store, p, _, alice = _setup()
        for qty in (1, 2):
            cart = store.open_cart("C1")
            cart.add_line(p, qty)
            store.process_purchase(cart, PaymentMethod.cash())
        assert alice.points == 2 + 4
        assert store.total_sales() == Money.of("60")
        assert store.total_points() == 6

    def test_empty_cart_records_zero_purchase(self):
        store, p, _, alice = _setup()
        payment = RecordingPayment()
        invoice = store.process_purchase(store.open_cart("C1"), payment)
        assert payment.settled == [Money.zero()]
        assert invoice.total == Money.zero()
        assert invoice.lines == ()
        assert invoice.points_earned == 0
        assert alice.purchase_count == 1
        assert alice.points == 0
        assert p.stock == 10


class CartFillingPayment:
    """Settles, but adds more lines to the cart while doing so."""

    def __init__(self, cart, additions):
        self._cart = cart
        self._additions = additions
        self.settled = []

    def settle(self, amount):
        self.settled.append(amount)
        for product, quantity in self._additions:
            self._cart.add_line(product, quantity)
        return True

    def describe(self):
        return "Cart-filling test payment"


class TestCartChangedDuringSettlement:

    def test_commits_exactly_what_was_charged(self):
        store, p, q, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 3)
        payment = CartFillingPayment(cart, [(p, 2), (q, 1)])

        invoice = store.process_purchase(cart, payment)

        assert payment.settled == [Money.of("60")]
        assert p.stock == 7
        assert q.stock == 2
        assert invoice.subtotal == Money.of("60")
        assert invoice.total == Money.of("60")
        assert [(line.product_code, line.quantity) for line in invoice.lines] == [("P", 3)]
        assert alice.purchases[0].total_after_discount == Money.of("60")
        assert alice.points == 6

    def test_later_additions_stay_in_cart(self):
        store, p, q, _ = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 3)

        store.process_purchase(cart, CartFillingPayment(cart, [(p, 2), (q, 1)]))

        assert cart.quantity_of("P") == 2
        assert cart.quantity_of("Q") == 1

        invoice = store.process_purchase(cart, PaymentMethod.cash())
        assert invoice.total == Money.of("45")
        assert p.stock == 5
        assert q.stock == 1
        assert cart.is_empty


class TestFailedPurchase:

    def test_stock_drained_after_cart_filled(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 7)

        other = store.open_cart("C1")
        other.add_line(p, 5)
        store.process_purchase(other, PaymentMethod.cash())
        assert p.stock == 5
        points_before = alice.points

        with pytest.raises(InsufficientStockError, match="Product P") as exc_info:
            store.process_purchase(cart, PaymentMethod.cash())

        assert exc_info.value.product_code == "P"
        assert p.stock == 5
        assert alice.points == points_before
        assert cart.quantity_of("P") == 7

    def test_failing_line_blocks_every_line(self):
        store, p, q, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 1)
        cart.add_line(q, 2)
        store.find_product("Q").reduce_stock(1)

        payment = RecordingPayment()
        with pytest.raises(InsufficientStockError):
            store.process_purchase(cart, payment)

        assert payment.settled == []
        assert p.stock == 10
        assert q.stock == 1
        assert alice.purchases == ()

    def test_declined_payment_leaves_everything_intact(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 3)
        payment = DecliningPayment()

        with pytest.raises(PaymentDeclinedError, match=r"\$60.00 declined"):
            store.process_purchase(cart, payment)

        assert payment.attempts == [Money.of("60")]
        assert p.stock == 10
        assert alice.points == 0
        assert alice.purchases == ()
        assert cart.quantity_of("P") == 3

    def test_retry_after_decline_succeeds(self):
        store, p, _, alice = _setup()
        cart = store.open_cart("C1")
        cart.add_line(p, 3)
        with pytest.raises(PaymentDeclinedError):
            store.process_purchase(cart, DecliningPayment())

        store.process_purchase(cart, PaymentMethod.cash())
        assert p.stock == 7
        assert alice.points == 6

    def test_unregistered_customer_rejected(self):
        store, p, _, _ = _setup()
        cart = Cart(Customer("C9", "Stranger"))
        cart.add_line(p, 1)
        with pytest.raises(EntityNotFoundError, match="Customer not found"):
            store.process_purchase(cart, PaymentMethod.cash())
        assert p.stock == 10

    def test_impostor_customer_rejected(self):
        store, p, _, alice = _setup()
        cart = Cart(Customer("C1", "Alice"))
        cart.add_line(p, 1)
        with pytest.raises(ValidationError, match="not the registered customer"):
            store.process_purchase(cart, PaymentMethod.cash())
        assert alice.points == 0

    def test_product_outside_catalog_rejected(self):
        store, _, _, _ = _setup()
        stray = Product.apparel("Z", "Stray", Money.of("1"), 5, "M", "Red")
        cart = store.open_cart("C1")
        cart.add_line(stray, 1)
        with pytest.raises(EntityNotFoundError, match="Product not found: 'Z'"):
            store.process_purchase(cart, PaymentMethod.cash())
        assert stray.stock == 5
