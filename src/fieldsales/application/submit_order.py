"""Application service: Submit Order use case.

Packages the reviewed cart for the order-creation side:

1. Check the order is complete (customer, lines, review stage, online).
2. Re-read each product's batches and refuse to submit if the source
   returned them out of expiry order; every allocation in the cart
   depended on that order.
3. Replay every batch contribution as its own stock deduction.
4. Persist, then hand back a reset state that keeps session settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fieldsales.domain.exceptions import UnsortedBatchesError, ValidationError
from fieldsales.domain.model.ledger import BatchLedger
from fieldsales.domain.model.order_state import OrderCartState, OrderStage
from fieldsales.domain.model.submission import OrderSubmission, deductions_for
from fieldsales.domain.repository.batch_repository import BatchRepository
from fieldsales.domain.repository.order_repository import OrderRepository
from fieldsales.domain.service.order_summary import summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitResult:
    order_id: int
    state: OrderCartState


class SubmitOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        batch_repo: BatchRepository,
    ) -> None:
        self._order_repo = order_repo
        self._batch_repo = batch_repo

    def handle(self, state: OrderCartState) -> SubmitResult:
        if not state.network_connected:
            raise ValidationError(
                "No internet connection. Please check your network settings and try again."
            )
        if state.customer is None:
            raise ValidationError("Customer is required")
        if not state.cart_items:
            raise ValidationError("Order must contain at least one item")
        if state.stage != OrderStage.REVIEW_ORDER:
            raise ValidationError(
                f"Cannot submit order — current stage is {state.stage.name}, "
                f"expected REVIEW_ORDER"
            )

        for product_id in sorted({item.product_id for item in state.cart_items}):
            ledger = BatchLedger(self._batch_repo.list_for_product(product_id))
            if not ledger.is_expiry_ordered():
                raise UnsortedBatchesError(
                    f"Batches for product '{product_id}' are not sorted by expiry date"
                )

        deductions = tuple(
            deduction
            for item in state.cart_items
            for deduction in deductions_for(item)
        )
        order = OrderSubmission(
            id=None,
            customer_id=state.customer.id,
            customer_name=state.customer.name,
            items=state.cart_items,
            returns=state.return_items,
            return_order_id=state.return_order_id,
            return_reason=state.return_reason,
            payment_type=state.payment_type,
            notes=state.notes,
            summary=summarize(state.cart_items, state.return_items),
            deductions=deductions,
        )
        order_id = self._order_repo.save(order)

        logger.info(
            "Submitted order #%d for %s: %d lines, %d stock deductions, final %s",
            order_id,
            order.customer_name,
            len(order.items),
            len(deductions),
            order.summary.final_amount,
        )
        return SubmitResult(order_id=order_id, state=state.reset())
