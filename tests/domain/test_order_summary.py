"""Unit tests for the order summary calculator."""

from dataclasses import replace

from fieldsales.domain.model.cart import ReturnLineItem
from fieldsales.domain.model.value_objects import Money
from fieldsales.domain.service.order_summary import summarize
from tests.builders import line


def _return(total: str) -> ReturnLineItem:
    return ReturnLineItem(
        product_id="P1",
        product_name="Herbal Balm",
        batch_id="B1",
        lot_number="LOT-B1",
        quantity=1,
        unit_price=Money.of(total),
        total_price=Money.of(total),
    )


class TestSummarize:

    def test_totals(self):
        cart = [line(total="450", discount="50"), line(batch_id="B2", total="200", discount="0")]
        summary = summarize(cart, [_return("100")])
        assert summary.total_order_amount == Money.of("650")
        assert summary.total_discount == Money.of("50")
        assert summary.total_returns_amount == Money.of("100")
        assert summary.final_amount == Money.of("550")

    def test_final_amount_clamped_at_zero(self):
        summary = summarize([line(total="100")], [_return("300")])
        assert summary.final_amount == Money.zero()
        assert summary.total_returns_amount == Money.of("300")

    def test_negative_line_total_counts_as_is(self):
        summary = summarize([line(total="-15", discount="25"), line(batch_id="B2", total="100")], [])
        assert summary.total_order_amount == Money.of("85")

    def test_missing_inputs_default_to_zero(self):
        summary = summarize(None, None)
        assert summary.total_order_amount == Money.zero()
        assert summary.total_discount == Money.zero()
        assert summary.total_returns_amount == Money.zero()
        assert summary.final_amount == Money.zero()

    def test_idempotent(self):
        cart = [line(total="450", discount="50")]
        returns = [_return("100")]
        assert summarize(cart, returns) == summarize(cart, returns)

    def test_currency_follows_lines(self):
        usd = replace(line(), total_price=Money.of("5", "USD"), discount=Money.zero("USD"))
        assert summarize([usd], []).total_order_amount == Money.of("5", "USD")
