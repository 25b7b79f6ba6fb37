"""Domain service: FEFO allocation.

Decides how a requested quantity of a product is drawn from its batches.
The earliest-expiry batch is always drawn first; only when it cannot
cover the request is the quantity spread over later batches, each one
consumed in full before the next is touched.

The discount applies to the line as a whole and is subtracted once,
never distributed across contributing batches.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fieldsales.domain.exceptions import InsufficientStockError, OutOfStockError
from fieldsales.domain.model.batch import Batch
from fieldsales.domain.model.cart import BatchContribution, CartLineItem
from fieldsales.domain.model.ledger import BatchLedger
from fieldsales.domain.model.product import Product
from fieldsales.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


class FefoAllocator:

    def allocate(
        self,
        product: Product,
        batches: Sequence[Batch],
        quantity: int,
        discount: Money | None = None,
    ) -> CartLineItem:
        """Produce the cart line for *quantity* units of *product*.

        *batches* must be sorted ascending by expiry date.

        Raises OutOfStockError when there are no batches and
        InsufficientStockError when all batches together fall short.
        """
        requested = Quantity(quantity).value
        ledger = BatchLedger(batches)
        first = ledger.compliant_batch()
        if first is None:
            raise OutOfStockError(product.id)

        if discount is None:
            discount = Money.zero(first.unit_price.currency)
        discount.ensure_non_negative("Discount")

        if first.available_quantity >= requested:
            return self._single_batch_line(product, first, requested, discount)

        return self._split_line(product, first, ledger, requested, discount)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _single_batch_line(
        product: Product, batch: Batch, quantity: int, discount: Money
    ) -> CartLineItem:
        return CartLineItem(
            product_id=product.id,
            product_name=product.name,
            batch_id=batch.id,
            lot_number=batch.lot_number,
            expiry_date=batch.expiry_date,
            unit_price=batch.unit_price,
            quantity=quantity,
            discount=discount,
            total_price=batch.unit_price * quantity - discount,
            max_quantity=batch.available_quantity,
            is_fefo_split=False,
        )

    @staticmethod
    def _split_line(
        product: Product,
        first: Batch,
        ledger: BatchLedger,
        quantity: int,
        discount: Money,
    ) -> CartLineItem:
        remaining = quantity
        contributions: list[BatchContribution] = []
        total = Money.zero(first.unit_price.currency)

        for batch in ledger:
            if remaining <= 0:
                break
            drawn = min(remaining, batch.available_quantity)
            if drawn <= 0:
                continue
            remaining -= drawn
            contribution = BatchContribution(
                batch_id=batch.id,
                lot_number=batch.lot_number,
                expiry_date=batch.expiry_date,
                quantity=drawn,
                unit_price=batch.unit_price,
            )
            total = total + contribution.subtotal
            contributions.append(contribution)

        if remaining > 0:
            raise InsufficientStockError(
                product.id, requested=quantity, available=quantity - remaining
            )

        is_split = len(contributions) > 1
        if is_split:
            logger.debug(
                "Split %s x%d across %d batches: %s",
                product.id,
                quantity,
                len(contributions),
                ", ".join(f"{c.lot_number}={c.quantity}" for c in contributions),
            )

        # The primary reference stays on the earliest batch even when it
        # had nothing to give.
        return CartLineItem(
            product_id=product.id,
            product_name=product.name,
            batch_id=first.id,
            lot_number=first.lot_number,
            expiry_date=first.expiry_date,
            unit_price=first.unit_price,
            quantity=quantity,
            discount=discount,
            total_price=total - discount,
            max_quantity=ledger.total_available(),
            is_fefo_split=is_split,
            fefo_batches=tuple(contributions),
        )

