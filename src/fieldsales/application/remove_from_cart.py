"""Application service: Remove From Cart use case."""

from __future__ import annotations

from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.service import cart_aggregator


class RemoveFromCartHandler:

    def handle(self, state: OrderCartState, index: int) -> OrderCartState:
        return cart_aggregator.remove_line(state, index)
