"""JSON-file-backed implementation of BatchRepository.

Batches are returned sorted ascending by expiry date, the same order
the inventory API guarantees.
"""

from __future__ import annotations

from pathlib import Path

from fieldsales.domain.model.batch import Batch
from fieldsales.domain.model.value_objects import DEFAULT_CURRENCY
from fieldsales.domain.repository.batch_repository import BatchRepository
from fieldsales.infrastructure.persistence.json_file import JsonFile
from fieldsales.infrastructure.persistence.serialization import batch_from_raw


class JsonBatchRepository(BatchRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file = JsonFile(file_path)
        self._currency = currency

    # --- BatchRepository interface --------------------------------------------

    def list_for_product(self, product_id: str) -> list[Batch]:
        batches = [
            batch_from_raw(raw, self._currency)
            for raw in self._file.load()
            if str(raw["product_id"]) == product_id
        ]
        return sorted(batches, key=lambda b: (b.expiry_date, b.id))
