"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the customer asked for (product code + quantity)."""

    product_code: str
    quantity: int


@dataclass(frozen=True)
class InvoiceLineDTO:
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class InvoiceDTO:
    """Output: an invoice as displayed to the user."""

    store_name: str
    customer_id: str
    customer_name: str
    issued_at: str
    items: list[InvoiceLineDTO]
    subtotal: str
    discount_description: str | None
    discount_amount: str
    total: str
    payment: str
    points_earned: int
    points_balance: int


@dataclass(frozen=True)
class ProductLineDTO:
    code: str
    kind: str
    description: str
    stock: int


@dataclass(frozen=True)
class CustomerSummaryDTO:
    id: str
    name: str
    purchases: int
    total_spent: str
    points: int
