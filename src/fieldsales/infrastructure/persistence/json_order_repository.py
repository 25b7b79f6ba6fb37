"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from pathlib import Path

from fieldsales.domain.model.submission import OrderSubmission
from fieldsales.domain.repository.order_repository import OrderRepository
from fieldsales.infrastructure.persistence.json_file import JsonFile
from fieldsales.infrastructure.persistence.serialization import (
    order_from_raw,
    order_to_raw,
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> OrderSubmission | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return order_from_raw(raw)
        return None

    def save(self, order: OrderSubmission) -> int:
        orders = self._file.load()

        order_id = self.next_id() if order.id is None else order.id
        order.id = order_id

        # Upsert: replace if exists, otherwise append
        for i, raw in enumerate(orders):
            if raw["id"] == order_id:
                orders[i] = order_to_raw(order)
                break
        else:
            orders.append(order_to_raw(order))

        self._file.persist(orders)
        return order_id
