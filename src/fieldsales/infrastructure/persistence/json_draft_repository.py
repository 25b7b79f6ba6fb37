"""JSON-file-backed implementation of DraftRepository.

Holds the single order being composed between CLI invocations.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.repository.order_repository import DraftRepository
from fieldsales.infrastructure.persistence.json_file import JsonFile
from fieldsales.infrastructure.persistence.serialization import (
    state_from_raw,
    state_to_raw,
)

logger = logging.getLogger(__name__)


class JsonDraftRepository(DraftRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, default="{}")

    def load(self) -> OrderCartState:
        raw = self._file.load()
        if not raw:
            return OrderCartState()
        return state_from_raw(raw)

    def save(self, state: OrderCartState) -> None:
        self._file.persist(state_to_raw(state))
        logger.debug("Draft saved to %s", self._file.path)
