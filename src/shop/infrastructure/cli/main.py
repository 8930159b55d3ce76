import logging

import click
from pydantic import ValidationError

from shop.config import get_settings
from shop.infrastructure.cli.catalog_commands import catalog, customers
from shop.infrastructure.cli.purchase_commands import checkout, demo


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Shop: catalog, carts and checkout"""
    try:
        settings = get_settings()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")

    logging.basicConfig(
        level="DEBUG" if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
cli.add_command(catalog)
cli.add_command(customers)
cli.add_command(checkout)
cli.add_command(demo)
