"""Integration tests for the return-item use cases."""

from datetime import date

import pytest

from fieldsales.application.add_return_item import (
    DEFAULT_RETURN_REASON,
    AddReturnItemHandler,
    returnable_lines,
)
from fieldsales.application.remove_return_item import RemoveReturnItemHandler
from fieldsales.domain.exceptions import EntityNotFoundError, ValidationError
from fieldsales.domain.model.cart import BatchContribution
from fieldsales.domain.model.order_state import OrderCartState, OrderStage, PaymentType
from fieldsales.domain.model.submission import OrderSubmission, deductions_for
from fieldsales.domain.model.value_objects import Money
from fieldsales.domain.service.order_summary import summarize
from tests.builders import customer, line
from tests.fakes import FakeOrderRepository


def _past_order(customer_id: str = "C1") -> OrderSubmission:
    split = line(
        product_id="P1",
        batch_id="B1",
        quantity=5,
        total="520",
        is_fefo_split=True,
        fefo_batches=(
            BatchContribution("B1", "LOT-B1", date(2024, 1, 31), 3, Money.of("100")),
            BatchContribution("B2", "LOT-B2", date(2024, 3, 31), 2, Money.of("110")),
        ),
    )
    single = line(product_id="P2", batch_id="B7", quantity=4, total="400")
    items = (split, single)
    return OrderSubmission(
        id=None,
        customer_id=customer_id,
        customer_name="Lanka Stores",
        items=items,
        returns=(),
        return_order_id=None,
        return_reason="",
        payment_type=PaymentType.CASH,
        notes="",
        summary=summarize(items, ()),
        deductions=tuple(d for i in items for d in deductions_for(i)),
    )


def _setup(*orders):
    repo = FakeOrderRepository(list(orders) or [_past_order()])
    state = OrderCartState().with_customer(customer())
    return AddReturnItemHandler(repo), state


class TestReturnableLines:

    def test_split_lines_flatten_per_batch(self):
        lines = returnable_lines(_past_order())
        assert [(r.batch_id, r.quantity, r.unit_price) for r in lines] == [
            ("B1", 3, Money.of("100")),
            ("B2", 2, Money.of("110")),
            ("B7", 4, Money.of("100")),
        ]


class TestAddReturnItem:

    def test_add_return_from_split_batch(self):
        handler, state = _setup()
        state = handler.handle(state, 1, "P1", "B2", 2, reason="damaged")
        item = state.return_items[0]
        assert item.quantity == 2
        assert item.total_price == Money.of("220")
        assert item.max_quantity == 2
        assert item.reason == "damaged"
        assert state.return_order_id == "1"
        assert state.return_reason == DEFAULT_RETURN_REASON
        assert state.stage == OrderStage.RETURN_PRODUCTS

    def test_repeated_returns_merge(self):
        handler, state = _setup()
        state = handler.handle(state, 1, "P2", "B7", 1)
        state = handler.handle(state, 1, "P2", "B7", 2)
        assert len(state.return_items) == 1
        assert state.return_items[0].quantity == 3

    def test_cannot_return_more_than_ordered(self):
        handler, state = _setup()
        state = handler.handle(state, 1, "P2", "B7", 3)
        with pytest.raises(ValidationError, match="only 4 were ordered"):
            handler.handle(state, 1, "P2", "B7", 2)
        assert state.return_items[0].quantity == 3

    def test_batch_not_in_order(self):
        handler, state = _setup()
        with pytest.raises(ValidationError, match="not found in order"):
            handler.handle(state, 1, "P1", "B7", 1)

    def test_unknown_order(self):
        handler, state = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(state, 42, "P1", "B1", 1)

    def test_order_of_another_customer(self):
        handler, state = _setup(_past_order(customer_id="C2"))
        with pytest.raises(ValidationError, match="does not belong"):
            handler.handle(state, 1, "P1", "B1", 1)

    def test_returns_bound_to_one_order(self):
        handler, state = _setup(_past_order(), _past_order())
        state = handler.handle(state, 1, "P1", "B1", 1)
        with pytest.raises(ValidationError, match="already being taken against order #1"):
            handler.handle(state, 2, "P1", "B1", 1)

    def test_requires_customer(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Select a customer"):
            handler.handle(OrderCartState(), 1, "P1", "B1", 1)


class TestRemoveReturnItem:

    def test_removing_last_return_clears_order_reference(self):
        handler, state = _setup()
        state = handler.handle(state, 1, "P1", "B1", 1)
        state = RemoveReturnItemHandler().handle(state, 0)
        assert state.return_items == ()
        assert state.return_order_id is None
