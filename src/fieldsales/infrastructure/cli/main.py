import click

from fieldsales.infrastructure.bootstrap import settings
from fieldsales.infrastructure.cli.cart_commands import (
    cart_add,
    cart_batch,
    cart_choose,
    cart_remove,
)
from fieldsales.infrastructure.cli.catalog_commands import (
    catalog_batches,
    catalog_customers,
    catalog_products,
)
from fieldsales.infrastructure.cli.order_commands import (
    order_fefo,
    order_network,
    order_payment,
    order_reset,
    order_review,
    order_show,
    order_stage,
    order_start,
    order_submit,
)
from fieldsales.infrastructure.cli.return_commands import return_add, return_remove
from fieldsales.infrastructure.logging_config import setup_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Field Sales — FEFO order composition"""
    cfg = settings()
    setup_logging("DEBUG" if verbose else cfg.log_level, cfg.log_file)


@cli.group()
def catalog() -> None:
    """Browse products, batches and customers."""


@cli.group()
def order() -> None:
    """Compose, review and submit orders."""


@cli.group()
def cart() -> None:
    """Manage cart lines of the current order."""


@cli.group()
def returns() -> None:
    """Manage returned items of the current order."""


# Register subcommands
catalog.add_command(catalog_batches)
catalog.add_command(catalog_customers)
catalog.add_command(catalog_products)
order.add_command(order_fefo)
order.add_command(order_network)
order.add_command(order_payment)
order.add_command(order_reset)
order.add_command(order_review)
order.add_command(order_show)
order.add_command(order_stage)
order.add_command(order_start)
order.add_command(order_submit)
cart.add_command(cart_add)
cart.add_command(cart_batch)
cart.add_command(cart_choose)
cart.add_command(cart_remove)
returns.add_command(return_add)
returns.add_command(return_remove)
