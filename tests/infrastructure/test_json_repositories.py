"""Tests for the JSON-file repositories (real files under tmp_path)."""

import json
from datetime import date

from fieldsales.application.add_to_cart import AddToCartHandler
from fieldsales.application.choose_product import ChooseProductHandler
from fieldsales.application.submit_order import SubmitOrderHandler
from fieldsales.domain.model.order_state import OrderCartState, OrderStage, PaymentType
from fieldsales.domain.model.value_objects import Money
from fieldsales.infrastructure.persistence.json_batch_repository import JsonBatchRepository
from fieldsales.infrastructure.persistence.json_catalog_repository import (
    JsonCustomerRepository,
    JsonProductRepository,
)
from fieldsales.infrastructure.persistence.json_draft_repository import JsonDraftRepository
from fieldsales.infrastructure.persistence.json_order_repository import JsonOrderRepository
from tests.builders import batch, customer, product
from tests.fakes import FakeBatchRepository, FakeProductRepository


def _write(path, records):
    path.write_text(json.dumps(records), encoding="utf-8")


class TestCatalogRepositories:

    def test_missing_file_created_empty(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "nested" / "products.json")
        assert repo.list_all() == []
        assert (tmp_path / "nested" / "products.json").exists()

    def test_bare_number_price_uses_repository_currency(self, tmp_path):
        path = tmp_path / "products.json"
        _write(path, [{"id": 7, "name": "Neem Soap", "unit_price": 85.5, "total_stock": 12}])
        found = JsonProductRepository(path).get_by_id("7")
        assert found.unit_price == Money.of("85.5")
        assert found.total_stock == 12

    def test_product_with_stored_money(self, tmp_path):
        path = tmp_path / "products.json"
        _write(path, [{
            "id": "P1", "name": "Herbal Balm",
            "unit_price": {"amount": "120.00", "currency": "LKR"}, "total_stock": 30,
        }])
        assert JsonProductRepository(path).get_by_id("P1") == product(
            "P1", "Herbal Balm", "120.00", 30
        )

    def test_customer_lookup(self, tmp_path):
        path = tmp_path / "customers.json"
        _write(path, [{"id": "C1", "name": "Lanka Stores", "phone": "0771234567", "city": "Kandy"}])
        repo = JsonCustomerRepository(path)
        assert repo.get_by_id("C1") == customer()
        assert repo.get_by_id("C2") is None


class TestBatchRepository:

    def test_returns_product_batches_sorted_by_expiry(self, tmp_path):
        path = tmp_path / "batches.json"
        _write(path, [
            {"id": "B2", "lot_number": "L2", "expiry_date": "2024-03-31",
             "unit_price": "110", "available_quantity": 10, "product_id": "P1"},
            {"id": "B9", "lot_number": "L9", "expiry_date": "2023-12-31",
             "unit_price": "90", "available_quantity": 4, "product_id": "P2"},
            {"id": "B1", "lot_number": "L1", "expiry_date": "2024-01-31",
             "unit_price": "100", "available_quantity": 3, "product_id": "P1"},
        ])
        batches = JsonBatchRepository(path).list_for_product("P1")
        assert [b.id for b in batches] == ["B1", "B2"]
        assert batches[0].expiry_date == date(2024, 1, 31)


class TestOrderAndDraftRepositories:

    def _state(self):
        batches = FakeBatchRepository([
            batch("B1", 3, "100", date(2024, 1, 31)),
            batch("B2", 10, "110", date(2024, 3, 31)),
        ])
        choose = ChooseProductHandler(FakeProductRepository([product()]), batches)
        state = OrderCartState().with_customer(customer()).with_payment(PaymentType.CHEQUE, "urgent")
        state = AddToCartHandler().handle(choose.handle(state, "P1"), quantity=5, discount=Money.of("20"))
        return state.with_stage(OrderStage.REVIEW_ORDER), batches

    def test_draft_survives_reload(self, tmp_path):
        state, _ = self._state()
        repo = JsonDraftRepository(tmp_path / "draft.json")
        repo.save(state)
        assert JsonDraftRepository(tmp_path / "draft.json").load() == state

    def test_draft_keeps_in_progress_selection(self, tmp_path):
        choose = ChooseProductHandler(
            FakeProductRepository([product()]), FakeBatchRepository([batch("B1", 3)])
        )
        state = choose.handle(OrderCartState(), "P1")
        repo = JsonDraftRepository(tmp_path / "draft.json")
        repo.save(state)
        assert repo.load().selection.selected_batch.id == "B1"

    def test_empty_draft_is_fresh_state(self, tmp_path):
        assert JsonDraftRepository(tmp_path / "draft.json").load() == OrderCartState()

    def test_submitted_order_round_trip(self, tmp_path):
        state, batches = self._state()
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first = SubmitOrderHandler(repo, batches).handle(state)
        second = SubmitOrderHandler(repo, batches).handle(state)
        assert (first.order_id, second.order_id) == (1, 2)

        loaded = repo.get_by_id(1)
        assert loaded.payment_type == PaymentType.CHEQUE
        assert loaded.items == state.cart_items
        assert [(d.batch_id, d.quantity) for d in loaded.deductions] == [("B1", 3), ("B2", 2)]
        assert loaded.summary.final_amount == Money.of("500")
