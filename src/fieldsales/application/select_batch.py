"""Application service: Select Batch use case.

A manual batch choice goes through the compliance guard, which may
swap it for the earliest-expiry batch when FEFO is enforced.
"""

from __future__ import annotations

from dataclasses import replace

from fieldsales.domain.exceptions import EntityNotFoundError, ValidationError
from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.service.compliance_guard import ComplianceGuard


class SelectBatchHandler:

    def handle(self, state: OrderCartState, batch_id: str) -> OrderCartState:
        selection = state.selection
        if selection.product is None:
            raise ValidationError("Choose a product before selecting a batch")

        candidate = selection.ledger.find(batch_id)
        if candidate is None:
            raise EntityNotFoundError(
                f"Batch '{batch_id}' not found for {selection.product.name}"
            )

        guard = ComplianceGuard(state.policy)
        chosen = guard.select_batch(candidate, selection.batches)
        return state.with_selection(replace(selection, selected_batch=chosen))
