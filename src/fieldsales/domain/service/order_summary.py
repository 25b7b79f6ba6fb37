"""Domain service: Order Summary Calculator.

Pure aggregation over the cart and return lines.  Missing inputs count
as empty.  Only the final amount is clamped at zero; individual totals
are reported as they are.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from fieldsales.domain.model.cart import CartLineItem, ReturnLineItem
from fieldsales.domain.model.value_objects import DEFAULT_CURRENCY, Money


@dataclass(frozen=True)
class OrderSummary:
    total_order_amount: Money
    total_discount: Money
    total_returns_amount: Money
    final_amount: Money


def summarize(
    cart_items: Iterable[CartLineItem] | None,
    return_items: Iterable[ReturnLineItem] | None,
    currency: str | None = None,
) -> OrderSummary:
    cart = list(cart_items or ())
    returns = list(return_items or ())
    if currency is None:
        currency = _currency_of(cart, returns)

    total_order = _sum((item.total_price for item in cart), currency)
    total_discount = _sum((item.discount for item in cart), currency)
    total_returns = _sum((item.total_price for item in returns), currency)

    return OrderSummary(
        total_order_amount=total_order,
        total_discount=total_discount,
        total_returns_amount=total_returns,
        final_amount=(total_order - total_returns).clamp_to_zero(),
    )


def _currency_of(cart: list[CartLineItem], returns: list[ReturnLineItem]) -> str:
    lines = (*cart, *returns)
    return lines[0].total_price.currency if lines else DEFAULT_CURRENCY


def _sum(amounts: Iterable[Money], currency: str) -> Money:
    result = Money.zero(currency)
    for amount in amounts:
        result = result + amount
    return result
