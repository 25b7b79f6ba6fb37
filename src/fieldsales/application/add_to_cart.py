"""Application service: Add To Cart use case.

Turns the current selection into a cart line:

1. Validate quantity and discount.
2. Allocate: under FEFO the whole batch list is walked in expiry order;
   with FEFO off the operator's chosen batch is used on its own.  The
   discount may not exceed the gross price of that draw.
3. Admit the line through the compliance guard.
4. Add or merge it through the cart aggregator.

Any failure raises before a new state exists, so the caller keeps the
state it passed in.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from fieldsales.domain.exceptions import ValidationError
from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.model.value_objects import Money, Quantity
from fieldsales.domain.service import cart_aggregator
from fieldsales.domain.service.compliance_guard import ComplianceGuard
from fieldsales.domain.service.fefo_allocator import FefoAllocator

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(self, allocator: FefoAllocator | None = None) -> None:
        self._allocator = allocator or FefoAllocator()

    def handle(
        self,
        state: OrderCartState,
        quantity: int | None = None,
        discount: Money | None = None,
    ) -> OrderCartState:
        selection = state.selection
        if quantity is not None or discount is not None:
            selection = replace(
                selection,
                quantity=selection.quantity if quantity is None else quantity,
                discount=selection.discount if discount is None else discount,
            )

        product = selection.product
        batch = selection.selected_batch
        if product is None or batch is None:
            raise ValidationError("Please select a product and batch")

        qty = Quantity(selection.quantity).value
        selection.discount.ensure_non_negative("Discount")

        source = selection.batches if state.fefo_enabled else (batch,)
        line = self._allocator.allocate(product, source, qty, selection.discount)

        # Bounded by the priced draw, which spans every contributing batch.
        gross = line.total_price + line.discount
        if line.discount > gross:
            raise ValidationError(
                f"Discount {line.discount} cannot be greater than total price {gross}"
            )

        guard = ComplianceGuard(state.policy)
        guard.admit_to_cart(line, selection.batches)

        logger.info(
            "Added %s x%d (lot %s%s) to cart",
            product.id,
            qty,
            line.lot_number,
            ", split" if line.is_fefo_split else "",
        )
        return cart_aggregator.add_line(state.with_selection(selection), line)
