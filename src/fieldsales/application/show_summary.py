"""Application service: Show Summary use case (query)."""

from __future__ import annotations

from fieldsales.application.dto import (
    OrderReviewDTO,
    cart_line_to_dto,
    return_line_to_dto,
    summary_to_dto,
)
from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.service.order_summary import summarize


class ShowSummaryHandler:

    def __init__(self, currency: str | None = None) -> None:
        self._currency = currency

    def handle(self, state: OrderCartState) -> OrderReviewDTO:
        summary = summarize(state.cart_items, state.return_items, self._currency)
        return OrderReviewDTO(
            customer_name=state.customer.name if state.customer else None,
            stage=state.stage.name,
            fefo_enabled=state.fefo_enabled,
            items=[cart_line_to_dto(item) for item in state.cart_items],
            returns=[return_line_to_dto(item) for item in state.return_items],
            summary=summary_to_dto(summary),
        )
