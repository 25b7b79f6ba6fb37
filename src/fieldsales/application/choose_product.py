"""Application service: Choose Product use case.

Loads the product and its batch snapshot into the selection and
preselects the earliest-expiry batch.  Batch fetching is the only I/O;
everything after it works on the snapshot.
"""

from __future__ import annotations

import logging

from fieldsales.domain.exceptions import EntityNotFoundError, OutOfStockError
from fieldsales.domain.model.ledger import BatchLedger
from fieldsales.domain.model.order_state import OrderCartState, Selection
from fieldsales.domain.model.value_objects import Money
from fieldsales.domain.repository.batch_repository import BatchRepository
from fieldsales.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ChooseProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        batch_repo: BatchRepository,
    ) -> None:
        self._product_repo = product_repo
        self._batch_repo = batch_repo

    def handle(self, state: OrderCartState, product_id: str) -> OrderCartState:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        if not product.in_stock:
            raise OutOfStockError(product.id, f"{product.name} is currently out of stock")

        ledger = BatchLedger(self._batch_repo.list_for_product(product.id))
        compliant = ledger.compliant_batch()
        if compliant is None:
            raise OutOfStockError(product.id, f"No batches available for {product.name}")

        logger.debug(
            "Loaded %d batches for %s, earliest expiry %s (%s)",
            len(ledger),
            product.id,
            compliant.expiry_date,
            compliant.lot_number,
        )
        return state.with_selection(
            Selection(
                product=product,
                batches=ledger.batches,
                selected_batch=compliant,
                discount=Money.zero(compliant.unit_price.currency),
            )
        )
