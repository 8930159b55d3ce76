"""CLI commands that run purchases against the demo store."""

from __future__ import annotations

import click

from shop.application.checkout import CheckoutHandler
from shop.application.dto import CartItemSpec, InvoiceDTO
from shop.application.show_catalog import ShowCatalogHandler
from shop.application.show_customers import ShowCustomersHandler
from shop.domain.exceptions import DomainException
from shop.domain.model.discount import Discount
from shop.domain.model.payment import PaymentMethod
from shop.infrastructure.bootstrap import seeded_store
from shop.infrastructure.cli.catalog_commands import display_catalog


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'ELEC001:1,APP001:2' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'CODE:Quantity'."
            )
        code, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{code}'."
            )
        specs.append(CartItemSpec(product_code=code.strip(), quantity=qty))
    return specs


def _parse_discount(raw: str | None) -> Discount | None:
    """Parse 'percent:10' or 'fixed:50'."""
    if raw is None:
        return None
    kind, _, value = raw.partition(":")
    try:
        if kind == "percent":
            return Discount.percentage(value)
        if kind == "fixed":
            return Discount.fixed(value)
    except DomainException as exc:
        raise click.BadParameter(str(exc))
    raise click.BadParameter(
        f"Invalid discount '{raw}'. Expected 'percent:N' or 'fixed:AMOUNT'."
    )


def _display_invoice(dto: InvoiceDTO) -> None:
    click.echo("=" * 60)
    click.echo(f"INVOICE  {dto.store_name}")
    click.echo(f"Date:     {dto.issued_at}")
    click.echo(f"Customer: {dto.customer_name} ({dto.customer_id})")
    click.echo("-" * 60)
    for index, item in enumerate(dto.items, start=1):
        click.echo(
            f"{index:>2}. {item.quantity:>3}x {item.product_name:<30} {item.line_total:>14}"
        )
    click.echo("-" * 60)
    if dto.discount_description:
        click.echo(f"{'Subtotal':<40} {dto.subtotal:>19}")
        click.echo(f"{'Discount (' + dto.discount_description + ')':<40} {'-' + dto.discount_amount:>19}")
    click.echo(f"{'TOTAL':<40} {dto.total:>19}")
    click.echo(f"Paid by:  {dto.payment}")
    click.echo(f"Points earned: {dto.points_earned}  (balance {dto.points_balance})")
    click.echo("=" * 60)


@click.command("checkout")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--items", required=True, help="Items as 'CODE:Qty,CODE:Qty'.")
@click.option("--card", "card_number", default=None, help="Pay by card instead of cash.")
@click.option("--discount", default=None, help="'percent:N' or 'fixed:AMOUNT'.")
def checkout(customer_id: str, items: str, card_number: str | None, discount: str | None) -> None:
    """Buy items for a customer and print the invoice."""
    specs = _parse_items(items)
    parsed_discount = _parse_discount(discount)

    try:
        payment = PaymentMethod.card(card_number) if card_number else PaymentMethod.cash()
        dto = CheckoutHandler(seeded_store()).handle(
            customer_id=customer_id,
            item_specs=specs,
            payment=payment,
            discount=parsed_discount,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(dto)


@click.command("demo")
def demo() -> None:
    """Replay the reference scenario: two customers, two purchases."""
    store = seeded_store()
    handler = CheckoutHandler(store)

    try:
        first = handler.handle(
            customer_id="C001",
            item_specs=[
                CartItemSpec("ELEC001", 1),
                CartItemSpec("ELEC003", 2),
                CartItemSpec("APP001", 1),
            ],
            payment=PaymentMethod.card("4532-1234-5678-9010"),
            discount=Discount.percentage(10),
        )
        second = handler.handle(
            customer_id="C002",
            item_specs=[
                CartItemSpec("ELEC002", 1),
                CartItemSpec("APP002", 2),
                CartItemSpec("FOOD001", 5),
                CartItemSpec("FOOD002", 3),
            ],
            payment=PaymentMethod.cash(),
            discount=Discount.fixed(50),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_invoice(first)
    _display_invoice(second)

    click.echo("Updated inventory:")
    display_catalog(ShowCatalogHandler(store).handle())
    click.echo()
    click.echo(f"Store:            {store.name}")
    click.echo(f"Products:         {len(store.list_products())}")
    click.echo(f"Customers:        {len(store.list_customers())}")
    click.echo(f"Total sales:      {store.total_sales()}")
    click.echo(f"Points awarded:   {store.total_points()}")
    for summary in ShowCustomersHandler(store).handle():
        click.echo(
            f"  {summary.name}: {summary.purchases} purchase(s), "
            f"{summary.total_spent} spent, {summary.points} points"
        )
