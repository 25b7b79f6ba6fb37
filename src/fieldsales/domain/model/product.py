"""Product and Customer snapshots.

Both are owned by the remote catalog; the engine only reads them.
A product's sellable stock lives in its batches, ``total_stock`` is the
catalog's own rollup and is only used to short-circuit an empty product.
"""

from __future__ import annotations

from dataclasses import dataclass

from fieldsales.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalog."""

    id: str
    name: str
    unit_price: Money
    total_stock: int = 0
    category_name: str | None = None

    @property
    def in_stock(self) -> bool:
        return self.total_stock > 0


@dataclass(frozen=True)
class Customer:
    """The shop an order is composed for."""

    id: str
    name: str
    phone: str = ""
    city: str | None = None
    credit_limit: Money | None = None
    credit_balance: Money | None = None
