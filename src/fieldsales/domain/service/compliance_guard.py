"""Domain service: FEFO compliance guard.

Two checkpoints with different outcomes:

- ``select_batch`` runs while the operator is browsing batches.  A
  non-compliant choice is silently replaced by the earliest-expiry batch;
  the operator simply cannot pick later stock.
- ``admit_to_cart`` runs when a finished line item enters the cart.  By
  then the line should have come out of the allocator, so a mismatch
  means something bypassed it.  The line is rejected outright and a
  diagnostic is logged; nothing is corrected.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from fieldsales.domain.exceptions import ComplianceViolationError
from fieldsales.domain.model.batch import Batch
from fieldsales.domain.model.cart import CartLineItem
from fieldsales.domain.model.ledger import BatchLedger
from fieldsales.domain.model.order_state import FefoPolicy

logger = logging.getLogger(__name__)


class ComplianceGuard:

    def __init__(self, policy: FefoPolicy) -> None:
        self._policy = policy

    @property
    def policy(self) -> FefoPolicy:
        return self._policy

    def select_batch(self, candidate: Batch | None, batches: Sequence[Batch]) -> Batch | None:
        """Return the batch that should actually be selected."""
        compliant = BatchLedger(batches).compliant_batch()
        if not self._policy.enabled or compliant is None or candidate is None:
            return candidate

        if candidate.id != compliant.id:
            logger.info(
                "FEFO auto-correction: batch %s replaced by earliest-expiry batch %s",
                candidate.lot_number,
                compliant.lot_number,
            )
            return compliant
        return candidate

    def admit_to_cart(self, line: CartLineItem, batches: Sequence[Batch]) -> CartLineItem:
        """Let *line* into the cart or raise ComplianceViolationError.

        Split lines are admitted as-is: the allocator started them on the
        earliest batch and spilled over in expiry order.
        """
        compliant = BatchLedger(batches).compliant_batch()
        if not self._policy.enabled or compliant is None or line.is_fefo_split:
            return line

        if line.batch_id != compliant.id:
            logger.warning(
                "FEFO policy violation: attempted to add batch %s of product %s "
                "to cart, earliest-expiry batch is %s",
                line.batch_id,
                line.product_id,
                compliant.id,
            )
            raise ComplianceViolationError(line.batch_id, compliant.id)
        return line
