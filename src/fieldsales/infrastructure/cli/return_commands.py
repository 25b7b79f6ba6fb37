"""CLI commands for items returned alongside the new order."""

from __future__ import annotations

import click

from fieldsales.application.add_return_item import AddReturnItemHandler
from fieldsales.application.remove_return_item import RemoveReturnItemHandler
from fieldsales.domain.exceptions import DomainException
from fieldsales.infrastructure.bootstrap import draft_repository, order_repository


@click.command("add")
@click.option("--order", "order_id", required=True, type=int, help="Earlier order ID.")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--batch", "batch_id", required=True, help="Batch ID the items came from.")
@click.option("--qty", "quantity", required=True, type=int, help="Quantity returned.")
@click.option("--reason", default="", help="Why the items are returned.")
def return_add(order_id: int, product_id: str, batch_id: str, quantity: int, reason: str) -> None:
    """Take items back from an earlier order."""
    drafts = draft_repository()
    handler = AddReturnItemHandler(order_repo=order_repository())

    try:
        state = handler.handle(
            drafts.load(),
            order_id=order_id,
            product_id=product_id,
            batch_id=batch_id,
            quantity=quantity,
            reason=reason,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    click.echo(f"Return of {quantity} recorded against order #{order_id}.")


@click.command("remove")
@click.option("--line", "line_no", required=True, type=int, help="Return line number as shown in review.")
def return_remove(line_no: int) -> None:
    """Remove a return line."""
    drafts = draft_repository()

    try:
        state = RemoveReturnItemHandler().handle(drafts.load(), line_no - 1)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    click.echo(f"Removed return line {line_no}.")
