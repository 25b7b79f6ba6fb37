"""Integration tests for SubmitOrder and ShowOrder use cases."""

from datetime import date

import pytest

from fieldsales.application.add_to_cart import AddToCartHandler
from fieldsales.application.choose_product import ChooseProductHandler
from fieldsales.application.dto import ContributionDTO
from fieldsales.application.show_order import ShowOrderHandler
from fieldsales.application.show_summary import ShowSummaryHandler
from fieldsales.application.submit_order import SubmitOrderHandler
from fieldsales.domain.exceptions import (
    EntityNotFoundError,
    UnsortedBatchesError,
    ValidationError,
)
from fieldsales.domain.model.order_state import OrderCartState, OrderStage
from fieldsales.domain.model.submission import StockDeduction
from fieldsales.domain.model.value_objects import Money
from tests.builders import batch, customer, product
from tests.fakes import FakeBatchRepository, FakeOrderRepository, FakeProductRepository

JAN = date(2024, 1, 31)
MAR = date(2024, 3, 31)


def _reviewed_state(batches):
    choose = ChooseProductHandler(FakeProductRepository([product()]), FakeBatchRepository(batches))
    state = OrderCartState().with_customer(customer()).with_stage(OrderStage.SELECT_PRODUCTS)
    state = AddToCartHandler().handle(choose.handle(state, "P1"), quantity=5, discount=Money.of("20"))
    return state.with_stage(OrderStage.REVIEW_ORDER)


class TestSubmitOrder:

    def test_split_line_replayed_per_batch(self):
        batches = [batch("B1", 3, "100", JAN), batch("B2", 10, "110", MAR)]
        order_repo = FakeOrderRepository()
        handler = SubmitOrderHandler(order_repo, FakeBatchRepository(batches))

        result = handler.handle(_reviewed_state(batches))

        saved = order_repo.get_by_id(result.order_id)
        assert saved.deductions == (
            StockDeduction("B1", "P1", 3),
            StockDeduction("B2", "P1", 2),
        )
        assert saved.summary.final_amount == Money.of("500")

    def test_single_line_deducts_primary_batch(self):
        batches = [batch("B1", 10, "100", JAN)]
        order_repo = FakeOrderRepository()
        result = SubmitOrderHandler(order_repo, FakeBatchRepository(batches)).handle(
            _reviewed_state(batches)
        )
        assert order_repo.get_by_id(result.order_id).deductions == (StockDeduction("B1", "P1", 5),)

    @pytest.mark.parametrize(
        "second_qty, expected",
        [
            (2, [("B1", 5), ("B2", 2)]),
            (5, [("B1", 6), ("B2", 4)]),
        ],
    )
    def test_deductions_cover_merged_split_line(self, second_qty, expected):
        batches = [batch("B1", 3, "100", JAN), batch("B2", 10, "110", MAR)]
        choose = ChooseProductHandler(FakeProductRepository([product()]), FakeBatchRepository(batches))
        state = OrderCartState().with_customer(customer()).with_stage(OrderStage.SELECT_PRODUCTS)
        state = AddToCartHandler().handle(choose.handle(state, "P1"), quantity=5)
        state = AddToCartHandler().handle(choose.handle(state, "P1"), quantity=second_qty)
        assert len(state.cart_items) == 1

        order_repo = FakeOrderRepository()
        result = SubmitOrderHandler(order_repo, FakeBatchRepository(batches)).handle(
            state.with_stage(OrderStage.REVIEW_ORDER)
        )

        saved = order_repo.get_by_id(result.order_id)
        assert sum(d.quantity for d in saved.deductions) == 5 + second_qty
        assert [(d.batch_id, d.quantity) for d in saved.deductions] == expected

    def test_returns_reset_state_keeping_session_flags(self):
        batches = [batch("B1", 10, "100", JAN)]
        state = _reviewed_state(batches).with_fefo_enabled(False)
        result = SubmitOrderHandler(FakeOrderRepository(), FakeBatchRepository(batches)).handle(state)
        assert result.order_id == 1
        assert result.state.cart_items == ()
        assert result.state.customer is None
        assert result.state.fefo_enabled is False

    def test_requires_review_stage(self):
        batches = [batch("B1", 10)]
        state = _reviewed_state(batches).with_stage(OrderStage.SELECT_PRODUCTS)
        with pytest.raises(ValidationError, match="expected REVIEW_ORDER"):
            SubmitOrderHandler(FakeOrderRepository(), FakeBatchRepository(batches)).handle(state)

    def test_requires_items(self):
        state = OrderCartState().with_customer(customer()).with_stage(OrderStage.REVIEW_ORDER)
        with pytest.raises(ValidationError, match="at least one item"):
            SubmitOrderHandler(FakeOrderRepository(), FakeBatchRepository()).handle(state)

    def test_requires_customer(self):
        state = OrderCartState().with_stage(OrderStage.REVIEW_ORDER)
        with pytest.raises(ValidationError, match="Customer is required"):
            SubmitOrderHandler(FakeOrderRepository(), FakeBatchRepository()).handle(state)

    def test_offline_rejected(self):
        batches = [batch("B1", 10)]
        state = _reviewed_state(batches).with_network_connected(False)
        order_repo = FakeOrderRepository()
        with pytest.raises(ValidationError, match="No internet connection"):
            SubmitOrderHandler(order_repo, FakeBatchRepository(batches)).handle(state)
        assert order_repo.get_by_id(1) is None

    def test_unsorted_batch_source_rejected(self):
        batches = [batch("B1", 10, expiry=JAN)]
        state = _reviewed_state(batches)
        unsorted = FakeBatchRepository([batch("B2", 1, expiry=MAR), batch("B1", 10, expiry=JAN)])
        order_repo = FakeOrderRepository()
        with pytest.raises(UnsortedBatchesError):
            SubmitOrderHandler(order_repo, unsorted).handle(state)
        assert order_repo.get_by_id(1) is None


class TestShowOrder:

    def test_show_submitted_order(self):
        batches = [batch("B1", 3, "100", JAN), batch("B2", 10, "110", MAR)]
        order_repo = FakeOrderRepository()
        result = SubmitOrderHandler(order_repo, FakeBatchRepository(batches)).handle(
            _reviewed_state(batches)
        )

        dto = ShowOrderHandler(order_repo).handle(result.order_id)
        assert dto.customer_name == "Lanka Stores"
        assert dto.items[0].is_fefo_split is True
        assert [c.quantity for c in dto.items[0].contributions] == [3, 2]
        assert dto.summary.final_amount == "Rs. 500.00"
        assert len(dto.deductions) == 2

    def test_unknown_order(self):
        with pytest.raises(EntityNotFoundError, match="Order #7 not found"):
            ShowOrderHandler(FakeOrderRepository()).handle(7)


class TestShowSummary:

    def test_review_dto(self):
        batches = [batch("B1", 3, "100", JAN), batch("B2", 10, "110", MAR)]
        dto = ShowSummaryHandler().handle(_reviewed_state(batches))
        assert dto.customer_name == "Lanka Stores"
        assert dto.stage == "REVIEW_ORDER"
        assert dto.items[0].total_price == "Rs. 500.00"
        assert dto.summary.total_discount == "Rs. 20.00"
        assert dto.summary.final_amount == "Rs. 500.00"

    def test_breakdown_shown_when_earliest_batch_is_empty(self):
        batches = [batch("B1", 0, "100", JAN), batch("B2", 10, "110", MAR)]
        dto = ShowSummaryHandler().handle(_reviewed_state(batches))
        item = dto.items[0]
        assert item.lot_number == "LOT-B1"
        assert item.is_fefo_split is False
        assert item.total_price == "Rs. 530.00"
        assert item.contributions == [ContributionDTO("LOT-B2", "2024-03-31", 5, "Rs. 110.00")]

    def test_empty_order(self):
        dto = ShowSummaryHandler().handle(OrderCartState())
        assert dto.customer_name is None
        assert dto.summary.final_amount == "Rs. 0.00"
