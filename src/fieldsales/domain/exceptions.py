"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OutOfStockError(DomainException):
    """No batches are available for the product."""

    def __init__(self, product_id: str, message: str | None = None) -> None:
        self.product_id = product_id
        super().__init__(message or f"Product '{product_id}' is out of stock")


class InsufficientStockError(DomainException):
    """Batches exist but cannot cover the requested quantity."""

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(need {requested}, have {available} available, "
            f"short by {self.shortfall})"
        )

    @property
    def shortfall(self) -> int:
        return self.requested - self.available


class ComplianceViolationError(DomainException):
    """A non-split line item does not reference the earliest-expiry batch."""

    def __init__(self, batch_id: str, compliant_batch_id: str) -> None:
        self.batch_id = batch_id
        self.compliant_batch_id = compliant_batch_id
        super().__init__(
            f"FEFO policy violation: batch '{batch_id}' is not the "
            f"earliest-expiry batch '{compliant_batch_id}'"
        )


class IndexOutOfRangeError(DomainException):
    """A line index does not exist in the cart."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"No line at index {index} (cart has {size} lines)")


class UnsortedBatchesError(ValidationError):
    """The batch source returned batches out of expiry order."""
