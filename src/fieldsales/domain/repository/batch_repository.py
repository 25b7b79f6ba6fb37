"""Abstract repository for product batches.

Implementations must return batches sorted ascending by expiry date;
the allocator's FEFO guarantee rests on that order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from fieldsales.domain.model.batch import Batch


class BatchRepository(ABC):

    @abstractmethod
    def list_for_product(self, product_id: str) -> list[Batch]:
        """Return the product's batches, earliest expiry first."""
