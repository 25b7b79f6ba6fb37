"""OrderSubmission — the finished order handed to the order-creation side.

Stock is deducted per batch actually drawn from: a split line yields
one deduction per contribution, never a single deduction against its
primary batch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from fieldsales.domain.model.cart import CartLineItem, ReturnLineItem
from fieldsales.domain.model.order_state import PaymentType
from fieldsales.domain.service.order_summary import OrderSummary


@dataclass(frozen=True)
class StockDeduction:
    batch_id: str
    product_id: str
    quantity: int


def deductions_for(line: CartLineItem) -> list[StockDeduction]:
    return [
        StockDeduction(c.batch_id, line.product_id, c.quantity)
        for c in line.contributions
    ]


@dataclass
class OrderSubmission:
    """A submitted order.

    ``id`` is None until the repository assigns one.
    """

    id: int | None
    customer_id: str
    customer_name: str
    items: tuple[CartLineItem, ...]
    returns: tuple[ReturnLineItem, ...]
    return_order_id: str | None
    return_reason: str
    payment_type: PaymentType
    notes: str
    summary: OrderSummary
    deductions: tuple[StockDeduction, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
