"""Cart and return line items.

A CartLineItem is produced by the FEFO allocator and is keyed by
(product, primary batch).  When the allocation had to be split across
batches, ``fefo_batches`` lists every batch the quantity is drawn from,
earliest expiry first, and submission deducts from each of them.

ReturnLineItems are scoped to a prior order's fulfilled batches, so no
allocation is involved; they share the merge-by-key rule only.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date

from fieldsales.domain.model.value_objects import Money


@dataclass(frozen=True)
class BatchContribution:
    """How much of a split line is drawn from one batch."""

    batch_id: str
    lot_number: str
    expiry_date: date
    quantity: int
    unit_price: Money

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


LineKey = tuple[str, str]


@dataclass(frozen=True)
class CartLineItem:
    """One entry of the in-progress order.

    Invariants (upheld by the allocator and by ``merge``):
    - when ``fefo_batches`` is set its quantities sum to ``quantity``
    - ``total_price`` is the priced draw minus ``discount``; it may go
      negative, only the order total is clamped
    """

    product_id: str
    product_name: str
    batch_id: str
    lot_number: str
    expiry_date: date
    unit_price: Money
    quantity: int
    discount: Money
    total_price: Money
    max_quantity: int
    is_fefo_split: bool = False
    fefo_batches: tuple[BatchContribution, ...] | None = None

    @property
    def key(self) -> LineKey:
        return (self.product_id, self.batch_id)

    @property
    def contributions(self) -> tuple[BatchContribution, ...]:
        """Every batch this line draws from; a plain line draws from its primary batch."""
        if self.fefo_batches is not None:
            return self.fefo_batches
        return (
            BatchContribution(
                batch_id=self.batch_id,
                lot_number=self.lot_number,
                expiry_date=self.expiry_date,
                quantity=self.quantity,
                unit_price=self.unit_price,
            ),
        )

    def merge(self, incoming: CartLineItem) -> CartLineItem:
        """Fold a second allocation for the same key into this line.

        When either side carries a contribution list, the merged list is
        folded per batch so it still covers the whole merged quantity.
        """
        if self.fefo_batches is None and incoming.fefo_batches is None:
            fefo_batches = None
        else:
            fefo_batches = _fold(self.contributions + incoming.contributions)
        return replace(
            self,
            quantity=self.quantity + incoming.quantity,
            discount=self.discount + incoming.discount,
            total_price=self.total_price + incoming.total_price,
            is_fefo_split=self.is_fefo_split or incoming.is_fefo_split,
            fefo_batches=fefo_batches,
        )


def _fold(contributions: tuple[BatchContribution, ...]) -> tuple[BatchContribution, ...]:
    folded: dict[str, BatchContribution] = {}
    for c in contributions:
        seen = folded.get(c.batch_id)
        folded[c.batch_id] = c if seen is None else replace(seen, quantity=seen.quantity + c.quantity)
    return tuple(sorted(folded.values(), key=lambda c: (c.expiry_date, c.batch_id)))


@dataclass(frozen=True)
class ReturnLineItem:
    """A quantity handed back from a previous order's batch."""

    product_id: str
    product_name: str
    batch_id: str
    lot_number: str
    quantity: int
    unit_price: Money
    total_price: Money
    reason: str = ""
    max_quantity: int = 0

    @property
    def key(self) -> LineKey:
        return (self.product_id, self.batch_id)

    def merge(self, incoming: ReturnLineItem) -> ReturnLineItem:
        return replace(
            self,
            quantity=self.quantity + incoming.quantity,
            total_price=self.total_price + incoming.total_price,
        )
