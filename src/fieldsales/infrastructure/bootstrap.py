"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from fieldsales.infrastructure.config import Settings, load_settings
from fieldsales.infrastructure.persistence.json_batch_repository import (
    JsonBatchRepository,
)
from fieldsales.infrastructure.persistence.json_catalog_repository import (
    JsonCustomerRepository,
    JsonProductRepository,
)
from fieldsales.infrastructure.persistence.json_draft_repository import (
    JsonDraftRepository,
)
from fieldsales.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    cfg = settings()
    return JsonProductRepository(cfg.data_dir / "products.json", cfg.currency)


def customer_repository() -> JsonCustomerRepository:
    cfg = settings()
    return JsonCustomerRepository(cfg.data_dir / "customers.json", cfg.currency)


def batch_repository() -> JsonBatchRepository:
    cfg = settings()
    return JsonBatchRepository(cfg.data_dir / "batches.json", cfg.currency)


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def draft_repository() -> JsonDraftRepository:
    return JsonDraftRepository(settings().data_dir / "draft.json")
