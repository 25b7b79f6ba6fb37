"""CLI commands for cart lines of the order being composed."""

from __future__ import annotations

import click

from fieldsales.application.add_to_cart import AddToCartHandler
from fieldsales.application.choose_product import ChooseProductHandler
from fieldsales.application.remove_from_cart import RemoveFromCartHandler
from fieldsales.application.select_batch import SelectBatchHandler
from fieldsales.domain.exceptions import DomainException
from fieldsales.domain.model.value_objects import Money
from fieldsales.infrastructure.bootstrap import (
    batch_repository,
    draft_repository,
    product_repository,
    settings,
)


@click.command("choose")
@click.option("--product", "product_id", required=True, help="Product ID.")
def cart_choose(product_id: str) -> None:
    """Choose a product; its earliest-expiry batch is preselected."""
    drafts = draft_repository()
    handler = ChooseProductHandler(
        product_repo=product_repository(),
        batch_repo=batch_repository(),
    )

    try:
        state = handler.handle(drafts.load(), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    selection = state.selection
    batch = selection.selected_batch
    click.echo(
        f"Selected {selection.product.name} — batch {batch.lot_number} "
        f"(expires {batch.expiry_date.isoformat()}, {batch.available_quantity} available, "
        f"{selection.ledger.total_available()} across all batches)"
    )


@click.command("batch")
@click.option("--id", "batch_id", required=True, help="Batch ID.")
def cart_batch(batch_id: str) -> None:
    """Pick a batch manually (FEFO may override the choice)."""
    drafts = draft_repository()

    try:
        state = SelectBatchHandler().handle(drafts.load(), batch_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    chosen = state.selection.selected_batch
    if chosen.id != batch_id:
        click.echo(
            f"FEFO policy: batch {chosen.lot_number} expires first and was selected instead."
        )
    else:
        click.echo(f"Batch {chosen.lot_number} selected.")


@click.command("add")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity to order.")
@click.option("--discount", default="0", show_default=True, help="Discount on the line.")
def cart_add(quantity: int, discount: str) -> None:
    """Add the selected product to the cart."""
    drafts = draft_repository()
    before = drafts.load()

    try:
        state = AddToCartHandler().handle(
            before,
            quantity=quantity,
            discount=Money.of(discount, settings().currency),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    product_id = before.selection.product.id
    split = [i for i in state.cart_items if i.product_id == product_id and i.is_fefo_split]
    if split:
        click.echo(
            f"{quantity} items will be fulfilled from {len(split[-1].fefo_batches)} batches "
            f"following FEFO (First Expired, First Out)."
        )
    click.echo(f"Added {quantity} to cart ({len(state.cart_items)} lines).")


@click.command("remove")
@click.option("--line", "line_no", required=True, type=int, help="Line number as shown in review.")
def cart_remove(line_no: int) -> None:
    """Remove a line from the cart."""
    drafts = draft_repository()

    try:
        state = RemoveFromCartHandler().handle(drafts.load(), line_no - 1)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    click.echo(f"Removed line {line_no} ({len(state.cart_items)} lines left).")
