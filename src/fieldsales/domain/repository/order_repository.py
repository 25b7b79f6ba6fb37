"""Abstract repositories for submitted orders and the draft in progress."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fieldsales.domain.model.order_state import OrderCartState
from fieldsales.domain.model.submission import OrderSubmission


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> OrderSubmission | None:
        """Return a submitted order by its ID, or None if not found."""

    @abstractmethod
    def save(self, order: OrderSubmission) -> int:
        """Persist a submitted order, assigning its ID if it has none.

        Returns the order's ID.
        """


class DraftRepository(ABC):

    @abstractmethod
    def load(self) -> OrderCartState:
        """Return the stored draft, or a fresh state when there is none."""

    @abstractmethod
    def save(self, state: OrderCartState) -> None:
        """Replace the stored draft."""
