"""Batch Ledger View — a read-only, expiry-ordered snapshot of batches.

The batch source returns a product's batches sorted ascending by expiry
date, so the first batch is by definition the FEFO-compliant one.  The
ledger never re-sorts: an out-of-order source is a contract violation
that the submission side detects with ``is_expiry_ordered``.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from fieldsales.domain.model.batch import Batch


class BatchLedger:

    def __init__(self, batches: Iterable[Batch] = ()) -> None:
        self._batches: tuple[Batch, ...] = tuple(batches)

    @property
    def batches(self) -> tuple[Batch, ...]:
        return self._batches

    def compliant_batch(self) -> Batch | None:
        """The earliest-expiry batch, or None when there are no batches."""
        return self._batches[0] if self._batches else None

    def total_available(self) -> int:
        return sum(b.available_quantity for b in self._batches)

    def find(self, batch_id: str) -> Batch | None:
        for batch in self._batches:
            if batch.id == batch_id:
                return batch
        return None

    def is_expiry_ordered(self) -> bool:
        return all(
            earlier.expiry_date <= later.expiry_date
            for earlier, later in zip(self._batches, self._batches[1:])
        )

    def __iter__(self) -> Iterator[Batch]:
        return iter(self._batches)

    def __len__(self) -> int:
        return len(self._batches)

    def __bool__(self) -> bool:
        return bool(self._batches)
