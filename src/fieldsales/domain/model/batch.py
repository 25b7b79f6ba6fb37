"""Batch — a physical lot of a product.

Batches are created and mutated exclusively by the inventory side.
The engine reads snapshots and never changes a batch's quantity; stock
is deducted server-side when the order is submitted.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from fieldsales.domain.exceptions import ValidationError
from fieldsales.domain.model.value_objects import Money

NEAR_EXPIRY_DAYS = 30


@dataclass(frozen=True)
class Batch:
    """A separately expiring, separately priced lot of one product.

    Invariants:
    - ``available_quantity`` is always >= 0
    - ``unit_price`` is never negative
    """

    id: str
    lot_number: str
    expiry_date: date
    unit_price: Money
    available_quantity: int
    product_id: str
    manufacturing_date: date | None = None
    supplier_name: str | None = None

    def __post_init__(self) -> None:
        if self.available_quantity < 0:
            raise ValidationError(
                f"Batch {self.lot_number} cannot hold a negative quantity "
                f"({self.available_quantity})"
            )
        self.unit_price.ensure_non_negative(f"Price of batch {self.lot_number}")

    def remaining_shelf_life(self, today: date) -> int:
        """Days until expiry; negative once the batch has expired."""
        return (self.expiry_date - today).days

    def is_near_expiry(self, today: date, threshold_days: int = NEAR_EXPIRY_DAYS) -> bool:
        return self.remaining_shelf_life(today) < threshold_days
