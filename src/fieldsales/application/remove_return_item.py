"""Application service: Remove Return Item use case."""

from __future__ import annotations

from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.service import cart_aggregator


class RemoveReturnItemHandler:

    def handle(self, state: OrderCartState, index: int) -> OrderCartState:
        state = cart_aggregator.remove_return_line(state, index)
        if not state.return_items:
            state = state.with_return_order(None)
        return state
