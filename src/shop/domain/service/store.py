"""Domain service: Store.

The Store owns the catalog and the customer registry and runs the
purchase transaction that coordinates Cart, Product, Discount,
PaymentMethod and Customer.

A purchase is all-or-nothing. It is validated and priced first, then
settled, and only a successful settlement commits stock reductions and
the customer's purchase record. All of it happens while holding the
locks of every product in the cart, taken in sorted code order so that
overlapping carts cannot deadlock.
"""

from __future__ import annotations

import logging
import threading
from contextlib import ExitStack
from typing import Protocol

from shop.domain.exceptions import (
    DuplicateCodeError,
    DuplicateIdError,
    EntityNotFoundError,
    InsufficientStockError,
    PaymentDeclinedError,
    ValidationError,
)
from shop.domain.model.cart import Cart
from shop.domain.model.customer import Customer
from shop.domain.model.discount import Discount
from shop.domain.model.product import Product
from shop.domain.model.purchase import Invoice, Purchase, PurchaseLine
from shop.domain.model.value_objects import Money
from shop.domain.repository.customer_repository import CustomerRepository
from shop.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SettlesPayment(Protocol):
    """Anything the Store can charge: ``PaymentMethod`` or a test double."""

    def settle(self, amount: Money) -> bool: ...

    def describe(self) -> str: ...


class Store:

    def __init__(
        self,
        name: str,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        if not name or not name.strip():
            raise ValidationError("Store name is required")
        self._name = name.strip()
        self._product_repo = product_repo
        self._customer_repo = customer_repo
        self._registry_lock = threading.RLock()
        self._product_locks: dict[str, threading.Lock] = {}
        self._customer_locks: dict[str, threading.Lock] = {}

    @property
    def name(self) -> str:
        return self._name

    # --- Catalog and registry -------------------------------------------------

    def add_product(self, product: Product) -> None:
        with self._registry_lock:
            if self._product_repo.get_by_code(product.code) is not None:
                raise DuplicateCodeError(f"Product code '{product.code}' already exists")
            self._product_repo.add(product)
            self._product_locks[product.code] = threading.Lock()
        logger.info("Product %s '%s' added to catalog", product.code, product.name)

    def register_customer(self, customer: Customer) -> None:
        with self._registry_lock:
            if self._customer_repo.get_by_id(customer.id) is not None:
                raise DuplicateIdError(f"Customer id '{customer.id}' already registered")
            self._customer_repo.add(customer)
            self._customer_locks[customer.id] = threading.Lock()
        logger.info("Customer %s '%s' registered", customer.id, customer.name)

    def find_product(self, code: str) -> Product:
        product = self._product_repo.get_by_code(code)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{code}'")
        return product

    def find_customer(self, customer_id: str) -> Customer:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer not found: '{customer_id}'")
        return customer

    def list_products(self) -> list[Product]:
        return self._product_repo.list_all()

    def list_customers(self) -> list[Customer]:
        return self._customer_repo.list_all()

    def open_cart(self, customer_id: str) -> Cart:
        """Start a new shopping session for a registered customer."""
        return Cart(self.find_customer(customer_id))

    def restock(self, code: str, quantity: int) -> None:
        product = self.find_product(code)
        with self._product_lock(code):
            product.increase_stock(quantity)
        logger.info("Product %s restocked by %d (now %d)", code, quantity, product.stock)

    # --- Purchase transaction -------------------------------------------------

    def process_purchase(
        self,
        cart: Cart,
        payment: SettlesPayment,
        discount: Discount | None = None,
    ) -> Invoice:
        """Validate, price, settle and commit the cart as one purchase.

        The cart's contents are copied once on entry; validation, pricing,
        stock reduction and the purchase record all use that copy. Lines
        added to the cart while the purchase runs stay in the cart.

        An empty cart settles and records a zero-total purchase.

        Raises:
            ValidationError: the cart references an object that is not the
                Store's own catalog entry or customer.
            EntityNotFoundError: the customer or a product is unknown.
            InsufficientStockError: a line exceeds the product's live stock.
            PaymentDeclinedError: the payment method declined the amount.

        On any error no stock, purchase history or points change and the
        cart keeps its lines so the caller can retry.
        """
        customer = self.find_customer(cart.customer.id)
        if customer is not cart.customer:
            raise ValidationError(
                f"Cart customer '{cart.customer.id}' is not the registered customer"
            )

        staged = tuple((line.product, line.quantity) for line in cart.lines)
        for product, _ in staged:
            if self.find_product(product.code) is not product:
                raise ValidationError(
                    f"Cart product '{product.code}' is not the catalog entry"
                )

        with ExitStack() as stack:
            for code in sorted(product.code for product, _ in staged):
                stack.enter_context(self._product_lock(code))

            # Phase 1: validate against live stock, no mutation
            self._validate_stock(customer, staged)

            # Phase 2: price, locking each unit price
            lines = tuple(
                PurchaseLine(
                    product_code=product.code,
                    product_name=product.name,
                    quantity=quantity,
                    unit_price=product.price,  # <-- price snapshot
                )
                for product, quantity in staged
            )
            total_before = Money.zero()
            for line in lines:
                total_before = total_before + line.line_total
            total_after = discount.apply(total_before) if discount is not None else total_before

            # Phase 3: settle
            if not payment.settle(total_after):
                logger.warning(
                    "Purchase for %s declined: %s refused %s",
                    customer.id, payment.describe(), total_after,
                )
                raise PaymentDeclinedError(
                    f"Payment of {total_after} declined ({payment.describe()})"
                )

            # Phase 4: commit; cannot fail because the locks keep phase 1 valid
            for product, quantity in staged:
                product.reduce_stock(quantity)

            purchase = Purchase(
                customer_id=customer.id,
                lines=lines,
                total_before_discount=total_before,
                total_after_discount=total_after,
                payment_description=payment.describe(),
                discount_description=discount.description if discount is not None else None,
            )
            with self._customer_lock(customer.id):
                awarded = customer.record_purchase(purchase)
                invoice = Invoice.build(self._name, purchase, customer)

            cart.discard_purchased({line.product_code: line.quantity for line in lines})

        logger.info(
            "Purchase committed for %s: %d line(s), total %s, %d point(s) awarded",
            customer.id, len(purchase.lines), total_after, awarded,
        )
        return invoice

    # --- Reporting ------------------------------------------------------------

    def total_sales(self) -> Money:
        result = Money.zero()
        for customer in self.list_customers():
            result = result + customer.total_spent
        return result

    def total_points(self) -> int:
        return sum(customer.points for customer in self.list_customers())

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _validate_stock(customer: Customer, staged: tuple[tuple[Product, int], ...]) -> None:
        for product, quantity in staged:
            if quantity > product.stock:
                logger.warning(
                    "Purchase for %s rejected: %s needs %d, %d in stock",
                    customer.id, product.code, quantity, product.stock,
                )
                raise InsufficientStockError(product.code, product.name, quantity, product.stock)

    def _product_lock(self, code: str) -> threading.Lock:
        with self._registry_lock:
            return self._product_locks.setdefault(code, threading.Lock())

    def _customer_lock(self, customer_id: str) -> threading.Lock:
        with self._registry_lock:
            return self._customer_locks.setdefault(customer_id, threading.Lock())
