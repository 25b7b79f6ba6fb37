"""CLI commands for composing, reviewing and submitting orders."""

from __future__ import annotations

import click

from fieldsales.application.show_order import ShowOrderHandler
from fieldsales.application.show_summary import ShowSummaryHandler
from fieldsales.application.start_order import StartOrderHandler
from fieldsales.application.submit_order import SubmitOrderHandler
from fieldsales.domain.exceptions import DomainException
from fieldsales.domain.model.order_state import OrderStage, PaymentType
from fieldsales.infrastructure.bootstrap import (
    batch_repository,
    customer_repository,
    draft_repository,
    order_repository,
)

_STAGES = {
    "customer": OrderStage.SELECT_CUSTOMER,
    "products": OrderStage.SELECT_PRODUCTS,
    "returns": OrderStage.RETURN_PRODUCTS,
    "review": OrderStage.REVIEW_ORDER,
}


@click.command("start")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
def order_start(customer_id: str) -> None:
    """Start composing an order for a customer."""
    drafts = draft_repository()
    handler = StartOrderHandler(customer_repo=customer_repository())

    try:
        state = handler.handle(drafts.load(), customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(state)
    click.echo(f"Order started for {state.customer.name}.")


@click.command("stage")
@click.option("--to", "stage", required=True, type=click.Choice(sorted(_STAGES)), help="Stage to move to.")
def order_stage(stage: str) -> None:
    """Move the order to another stage."""
    drafts = draft_repository()
    state = drafts.load().with_stage(_STAGES[stage])
    drafts.save(state)
    click.echo(f"Stage set to {state.stage.name}.")


@click.command("fefo")
@click.option("--on/--off", "enabled", required=True, help="Enforce FEFO batch selection.")
def order_fefo(enabled: bool) -> None:
    """Turn FEFO enforcement on or off."""
    drafts = draft_repository()
    drafts.save(drafts.load().with_fefo_enabled(enabled))
    click.echo(f"FEFO enforcement {'enabled' if enabled else 'disabled'}.")


@click.command("network")
@click.option("--online/--offline", "connected", required=True, help="Connectivity state.")
def order_network(connected: bool) -> None:
    """Record whether the device is online."""
    drafts = draft_repository()
    drafts.save(drafts.load().with_network_connected(connected))
    click.echo(f"Network marked {'online' if connected else 'offline'}.")


@click.command("payment")
@click.option(
    "--type", "payment_type", required=True,
    type=click.Choice([p.value for p in PaymentType]), help="Payment type.",
)
@click.option("--notes", default=None, help="Order notes.")
def order_payment(payment_type: str, notes: str | None) -> None:
    """Set the payment type and notes."""
    drafts = draft_repository()
    drafts.save(drafts.load().with_payment(PaymentType(payment_type), notes))
    click.echo(f"Payment type set to {payment_type}.")


def _display_lines(items, returns, summary) -> None:
    """Shared formatting for cart and return lines plus totals."""
    click.echo(f"  {'#':>2} {'Product':<20} {'Lot':<10} {'Qty':>5} {'Price':>14} {'Discount':>14} {'Total':>14}")
    click.echo(f"  {'-'*85}")
    for n, item in enumerate(items, start=1):
        tag = "  [split]" if item.is_fefo_split else ""
        click.echo(
            f"  {n:>2} {item.product_name:<20} {item.lot_number:<10} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.discount:>14} {item.total_price:>14}{tag}"
        )
        for c in item.contributions:
            click.echo(
                f"       - lot {c.lot_number:<10} exp {c.expiry_date}  "
                f"x{c.quantity} @ {c.unit_price}"
            )
    click.echo(f"  {'-'*85}")

    if returns:
        click.echo("  Returns:")
        for n, r in enumerate(returns, start=1):
            click.echo(
                f"  {n:>2} {r.product_name:<20} {r.lot_number:<10} {r.quantity:>5} "
                f"{r.unit_price:>14} {r.total_price:>29}  {r.reason}"
            )
        click.echo(f"  {'-'*85}")

    click.echo(f"  {'Order Total':<30} {summary.total_order_amount:>20}")
    click.echo(f"  {'Total Discount':<30} {summary.total_discount:>20}")
    click.echo(f"  {'Returns':<30} {summary.total_returns_amount:>20}")
    click.echo(f"  {'Final Amount':<30} {summary.final_amount:>20}")


@click.command("review")
def order_review() -> None:
    """Show the order being composed."""
    dto = ShowSummaryHandler().handle(draft_repository().load())

    click.echo(f"Customer: {dto.customer_name or '-'}")
    click.echo(f"Stage:    {dto.stage}   FEFO: {'on' if dto.fefo_enabled else 'off'}")
    click.echo()
    _display_lines(dto.items, dto.returns, dto.summary)


@click.command("submit")
def order_submit() -> None:
    """Submit the reviewed order."""
    drafts = draft_repository()
    handler = SubmitOrderHandler(
        order_repo=order_repository(),
        batch_repo=batch_repository(),
    )

    try:
        result = handler.handle(drafts.load())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    drafts.save(result.state)
    click.echo(f"Order #{result.order_id} has been created successfully.")


@click.command("reset")
def order_reset() -> None:
    """Discard the order being composed."""
    drafts = draft_repository()
    drafts.save(drafts.load().reset())
    click.echo("Order discarded.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show a submitted order and its stock deductions."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id}  (payment={dto.payment_type})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    _display_lines(dto.items, dto.returns, dto.summary)
    click.echo()
    click.echo("  Stock deductions:")
    for d in dto.deductions:
        click.echo(f"    batch {d.batch_id:<10} product {d.product_id:<8} -{d.quantity}")
