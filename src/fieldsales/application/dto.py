"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Money is formatted,
dates are ISO strings.
"""

from __future__ import annotations

from dataclasses import dataclass

from fieldsales.domain.model.cart import CartLineItem, ReturnLineItem
from fieldsales.domain.service.order_summary import OrderSummary


@dataclass(frozen=True)
class ContributionDTO:
    lot_number: str
    expiry_date: str
    quantity: int
    unit_price: str


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_name: str
    lot_number: str
    quantity: int
    unit_price: str  # formatted, e.g. "Rs. 100.00"
    discount: str
    total_price: str
    is_fefo_split: bool
    contributions: list[ContributionDTO]


@dataclass(frozen=True)
class ReturnLineDTO:
    product_name: str
    lot_number: str
    quantity: int
    unit_price: str
    total_price: str
    reason: str


@dataclass(frozen=True)
class OrderSummaryDTO:
    total_order_amount: str
    total_discount: str
    total_returns_amount: str
    final_amount: str


@dataclass(frozen=True)
class OrderReviewDTO:
    """Output: the order being composed."""

    customer_name: str | None
    stage: str
    fefo_enabled: bool
    items: list[CartLineDTO]
    returns: list[ReturnLineDTO]
    summary: OrderSummaryDTO


@dataclass(frozen=True)
class DeductionDTO:
    batch_id: str
    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a submitted order."""

    id: int
    customer_name: str
    payment_type: str
    items: list[CartLineDTO]
    returns: list[ReturnLineDTO]
    summary: OrderSummaryDTO
    deductions: list[DeductionDTO]
    created_at: str


# --- Mapping --------------------------------------------------------------------


def cart_line_to_dto(item: CartLineItem) -> CartLineDTO:
    return CartLineDTO(
        product_name=item.product_name,
        lot_number=item.lot_number,
        quantity=item.quantity,
        unit_price=str(item.unit_price),
        discount=str(item.discount),
        total_price=str(item.total_price),
        is_fefo_split=item.is_fefo_split,
        contributions=[
            ContributionDTO(
                lot_number=c.lot_number,
                expiry_date=c.expiry_date.isoformat(),
                quantity=c.quantity,
                unit_price=str(c.unit_price),
            )
            for c in item.fefo_batches or ()
        ],
    )


def return_line_to_dto(item: ReturnLineItem) -> ReturnLineDTO:
    return ReturnLineDTO(
        product_name=item.product_name,
        lot_number=item.lot_number,
        quantity=item.quantity,
        unit_price=str(item.unit_price),
        total_price=str(item.total_price),
        reason=item.reason,
    )


def summary_to_dto(summary: OrderSummary) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        total_order_amount=str(summary.total_order_amount),
        total_discount=str(summary.total_discount),
        total_returns_amount=str(summary.total_returns_amount),
        final_amount=str(summary.final_amount),
    )
