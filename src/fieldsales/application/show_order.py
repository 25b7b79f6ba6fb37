"""Application service: Show Order use case (query)."""

from __future__ import annotations

from fieldsales.application.dto import (
    DeductionDTO,
    OrderDTO,
    cart_line_to_dto,
    return_line_to_dto,
    summary_to_dto,
)
from fieldsales.domain.exceptions import EntityNotFoundError
from fieldsales.domain.model.submission import OrderSubmission
from fieldsales.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._to_dto(order)

    @staticmethod
    def _to_dto(order: OrderSubmission) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_name=order.customer_name,
            payment_type=order.payment_type.value,
            items=[cart_line_to_dto(item) for item in order.items],
            returns=[return_line_to_dto(item) for item in order.returns],
            summary=summary_to_dto(order.summary),
            deductions=[
                DeductionDTO(d.batch_id, d.product_id, d.quantity)
                for d in order.deductions
            ],
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
