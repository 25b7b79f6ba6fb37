"""CLI commands for browsing the catalog."""

from __future__ import annotations

from datetime import date

import click

from fieldsales.domain.model.ledger import BatchLedger
from fieldsales.infrastructure.bootstrap import (
    batch_repository,
    customer_repository,
    product_repository,
    settings,
)


@click.command("products")
def catalog_products() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>14} {'Stock':>7}")
    click.echo("-" * 54)
    for p in products:
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.unit_price):>14} {p.total_stock:>7}")


@click.command("customers")
def catalog_customers() -> None:
    """List all customers."""
    customers = customer_repository().list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Phone':<14} {'City':<12}")
    click.echo("-" * 59)
    for c in customers:
        click.echo(f"{c.id:<6} {c.name:<24} {c.phone:<14} {c.city or '':<12}")


@click.command("batches")
@click.option("--product", "product_id", required=True, help="Product ID.")
def catalog_batches(product_id: str) -> None:
    """List a product's batches, earliest expiry first."""
    ledger = BatchLedger(batch_repository().list_for_product(product_id))

    if not ledger:
        click.echo(f"No batches found for product '{product_id}'.")
        return

    today = date.today()
    threshold = settings().near_expiry_days
    compliant = ledger.compliant_batch()

    click.echo(f"  {'Batch':<8} {'Lot':<12} {'Expiry':<11} {'Price':>14} {'Avail':>6}")
    click.echo(f"  {'-'*55}")
    for b in ledger:
        flags = []
        if compliant is not None and b.id == compliant.id:
            flags.append("FEFO")
        if b.is_near_expiry(today, threshold):
            flags.append(f"expires in {b.remaining_shelf_life(today)}d")
        click.echo(
            f"  {b.id:<8} {b.lot_number:<12} {b.expiry_date.isoformat():<11} "
            f"{str(b.unit_price):>14} {b.available_quantity:>6}  {' '.join(flags)}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Total available':<47} {ledger.total_available():>6}")
