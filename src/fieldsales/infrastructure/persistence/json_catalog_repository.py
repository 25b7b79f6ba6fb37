"""JSON-file-backed implementations of ProductRepository and CustomerRepository."""

from __future__ import annotations

from pathlib import Path

from fieldsales.domain.model.product import Customer, Product
from fieldsales.domain.model.value_objects import DEFAULT_CURRENCY
from fieldsales.domain.repository.product_repository import (
    CustomerRepository,
    ProductRepository,
)
from fieldsales.infrastructure.persistence.json_file import JsonFile
from fieldsales.infrastructure.persistence.serialization import (
    customer_from_raw,
    product_from_raw,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file = JsonFile(file_path)
        self._currency = currency

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if str(raw["id"]) == product_id:
                return product_from_raw(raw, self._currency)
        return None

    def list_all(self) -> list[Product]:
        return [product_from_raw(raw, self._currency) for raw in self._file.load()]


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file = JsonFile(file_path)
        self._currency = currency

    # --- CustomerRepository interface -----------------------------------------

    def get_by_id(self, customer_id: str) -> Customer | None:
        for raw in self._file.load():
            if str(raw["id"]) == customer_id:
                return customer_from_raw(raw, self._currency)
        return None

    def list_all(self) -> list[Customer]:
        return [customer_from_raw(raw, self._currency) for raw in self._file.load()]
