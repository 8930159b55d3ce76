"""CLI commands for the catalog and customer registry (queries)."""

from __future__ import annotations

import click

from shop.application.dto import ProductLineDTO
from shop.application.show_catalog import ShowCatalogHandler
from shop.application.show_customers import ShowCustomersHandler
from shop.infrastructure.bootstrap import seeded_store


@click.command("catalog")
def catalog() -> None:
    """List every product in the catalog."""
    display_catalog(ShowCatalogHandler(seeded_store()).handle())


def display_catalog(lines: list[ProductLineDTO]) -> None:
    """Shared formatting for the product table."""
    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<8} {'Kind':<11} Description")
    click.echo("-" * 70)
    for line in lines:
        click.echo(f"{line.code:<8} {line.kind:<11} {line.description}")


@click.command("customers")
def customers() -> None:
    """List registered customers with their purchases and points."""
    lines = ShowCustomersHandler(seeded_store()).handle()

    if not lines:
        click.echo("No customers registered.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Purchases':>9} {'Spent':>12} {'Points':>7}")
    click.echo("-" * 58)
    for line in lines:
        click.echo(
            f"{line.id:<6} {line.name:<20} {line.purchases:>9} {line.total_spent:>12} {line.points:>7}"
        )
