"""Application service: Add Return Item use case.

Returns are taken against one earlier order of the same customer.  The
batch is fixed by that order, so there is no allocation; the quantity
returned per (product, batch) may not exceed what the order drew from
that batch, counting lines already in the return list.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from fieldsales.domain.exceptions import EntityNotFoundError, ValidationError
from fieldsales.domain.model.cart import ReturnLineItem
from fieldsales.domain.model.order_state import OrderCartState, OrderStage
from fieldsales.domain.model.submission import OrderSubmission
from fieldsales.domain.model.value_objects import Money, Quantity
from fieldsales.domain.repository.order_repository import OrderRepository
from fieldsales.domain.service import cart_aggregator

DEFAULT_RETURN_REASON = "Items returned during new order"


@dataclass(frozen=True)
class ReturnableLine:
    product_id: str
    product_name: str
    batch_id: str
    lot_number: str
    quantity: int
    unit_price: Money


def returnable_lines(order: OrderSubmission) -> list[ReturnableLine]:
    """Flatten an order into the per-batch quantities it actually drew."""
    return [
        ReturnableLine(
            item.product_id, item.product_name, c.batch_id,
            c.lot_number, c.quantity, c.unit_price,
        )
        for item in order.items
        for c in item.contributions
    ]


class AddReturnItemHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        state: OrderCartState,
        order_id: int,
        product_id: str,
        batch_id: str,
        quantity: int,
        reason: str = "",
    ) -> OrderCartState:
        if state.customer is None:
            raise ValidationError("Select a customer before adding returns")

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.customer_id != state.customer.id:
            raise ValidationError(
                f"Order #{order_id} does not belong to {state.customer.name}"
            )
        if state.return_items and state.return_order_id != str(order_id):
            raise ValidationError(
                f"Returns are already being taken against order #{state.return_order_id}"
            )

        source = self._find_returnable(order, product_id, batch_id)
        qty = Quantity(quantity).value

        existing = cart_aggregator.find_line(state.return_items, (product_id, batch_id))
        already = existing.quantity if existing is not None else 0
        if already + qty > source.quantity:
            raise ValidationError(
                f"Cannot return {already + qty} of {source.product_name} "
                f"(lot {source.lot_number}) — only {source.quantity} were ordered"
            )

        item = ReturnLineItem(
            product_id=source.product_id,
            product_name=source.product_name,
            batch_id=source.batch_id,
            lot_number=source.lot_number,
            quantity=qty,
            unit_price=source.unit_price,
            total_price=source.unit_price * qty,
            reason=reason,
            max_quantity=source.quantity,
        )

        state = state.with_return_order(
            str(order_id), state.return_reason or DEFAULT_RETURN_REASON
        ).with_stage(OrderStage.RETURN_PRODUCTS)
        return cart_aggregator.add_return_line(state, item)

    @staticmethod
    def _find_returnable(
        order: OrderSubmission, product_id: str, batch_id: str
    ) -> ReturnableLine:
        matches = [
            line for line in returnable_lines(order)
            if line.product_id == product_id and line.batch_id == batch_id
        ]
        if not matches:
            raise ValidationError(
                f"Product '{product_id}' batch '{batch_id}' not found in order #{order.id}"
            )
        # One batch can feed several lines of the same order.
        return replace(matches[0], quantity=sum(m.quantity for m in matches))
