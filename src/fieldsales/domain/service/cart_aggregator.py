"""Domain service: Cart Aggregator.

Pure functions that take an OrderCartState and return the next one.
The core invariant: after any ``add_line`` no two cart lines share the
same (product, primary batch) key.  Return lines follow the same rule.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from fieldsales.domain.exceptions import IndexOutOfRangeError
from fieldsales.domain.model.cart import CartLineItem, ReturnLineItem
from fieldsales.domain.model.order_state import OrderCartState

logger = logging.getLogger(__name__)

_Line = TypeVar("_Line", CartLineItem, ReturnLineItem)


def add_line(state: OrderCartState, item: CartLineItem) -> OrderCartState:
    """Merge *item* into a matching line, or append it as a new one.

    Appending a new line finishes the current allocation flow, so the
    selection goes back to its defaults.  A merge leaves it alone.
    """
    merged, matched = _merge_into(state.cart_items, item)
    if matched:
        logger.debug("Merged %s into existing cart line %s", item.quantity, item.key)
        return state.with_cart_items(merged)
    return state.with_cart_items(merged).clear_selection()


def remove_line(state: OrderCartState, index: int) -> OrderCartState:
    return state.with_cart_items(_without(state.cart_items, index))


def add_return_line(state: OrderCartState, item: ReturnLineItem) -> OrderCartState:
    merged, _ = _merge_into(state.return_items, item)
    return state.with_return_items(merged)


def remove_return_line(state: OrderCartState, index: int) -> OrderCartState:
    return state.with_return_items(_without(state.return_items, index))


def find_line(lines: Sequence[_Line], key: tuple[str, str]) -> _Line | None:
    for line in lines:
        if line.key == key:
            return line
    return None


# --- Internal helpers ---------------------------------------------------------


def _merge_into(lines: Sequence[_Line], item: _Line) -> tuple[tuple[_Line, ...], bool]:
    for i, existing in enumerate(lines):
        if existing.key == item.key:
            updated = list(lines)
            updated[i] = existing.merge(item)
            return tuple(updated), True
    return (*lines, item), False


def _without(lines: Sequence[_Line], index: int) -> tuple[_Line, ...]:
    if isinstance(index, bool) or not 0 <= index < len(lines):
        raise IndexOutOfRangeError(index, len(lines))
    return (*lines[:index], *lines[index + 1:])
