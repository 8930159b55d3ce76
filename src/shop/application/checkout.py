"""Application service: Checkout use case.

Fills a fresh cart for a registered customer and hands it to the Store's
purchase transaction.
"""

from __future__ import annotations

from shop.application.dto import CartItemSpec, InvoiceDTO, InvoiceLineDTO
from shop.domain.exceptions import ValidationError
from shop.domain.model.discount import Discount
from shop.domain.model.purchase import Invoice
from shop.domain.service.store import SettlesPayment, Store


class CheckoutHandler:

    def __init__(self, store: Store) -> None:
        self._store = store

    def handle(
        self,
        customer_id: str,
        item_specs: list[CartItemSpec],
        payment: SettlesPayment,
        discount: Discount | None = None,
    ) -> InvoiceDTO:
        """Buy *item_specs* for *customer_id* in one transaction.

        Steps:
        1. Open a cart for the customer (fail if not registered).
        2. Add each item, resolving codes against the catalog.
        3. Run the Store's purchase transaction.
        4. Return the invoice as a DTO.
        """
        if not item_specs:
            raise ValidationError("At least one item is required")

        cart = self._store.open_cart(customer_id)
        for spec in item_specs:
            product = self._store.find_product(spec.product_code)
            cart.add_line(product, spec.quantity)

        invoice = self._store.process_purchase(cart, payment, discount)
        return to_invoice_dto(invoice)


def to_invoice_dto(invoice: Invoice) -> InvoiceDTO:
    return InvoiceDTO(
        store_name=invoice.store_name,
        customer_id=invoice.customer_id,
        customer_name=invoice.customer_name,
        issued_at=invoice.issued_at.strftime("%Y-%m-%d %H:%M UTC"),
        items=[
            InvoiceLineDTO(
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in invoice.lines
        ],
        subtotal=str(invoice.subtotal),
        discount_description=invoice.discount_description,
        discount_amount=str(invoice.discount_amount),
        total=str(invoice.total),
        payment=invoice.payment_description,
        points_earned=invoice.points_earned,
        points_balance=invoice.points_balance,
    )
