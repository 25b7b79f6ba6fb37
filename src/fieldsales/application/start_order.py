"""Application service: Start Order use case.

Picks the customer the order is composed for and moves the flow on to
product selection.
"""

from __future__ import annotations

from fieldsales.domain.exceptions import EntityNotFoundError
from fieldsales.domain.model.order_state import OrderCartState, OrderStage
from fieldsales.domain.repository.product_repository import CustomerRepository


class StartOrderHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, state: OrderCartState, customer_id: str) -> OrderCartState:
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer '{customer_id}' not found")

        return state.with_customer(customer).with_stage(OrderStage.SELECT_PRODUCTS)
