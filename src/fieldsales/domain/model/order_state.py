"""OrderCartState aggregate — the whole in-progress order as one value.

Every transition returns a new state; nothing is mutated in place, so a
transition that raises leaves the caller holding the previous state
untouched.  Stage changes are caller-driven, there are no automatic
transitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from fieldsales.domain.model.batch import Batch
from fieldsales.domain.model.cart import CartLineItem, ReturnLineItem
from fieldsales.domain.model.ledger import BatchLedger
from fieldsales.domain.model.product import Customer, Product
from fieldsales.domain.model.value_objects import Money


class OrderStage(Enum):
    SELECT_CUSTOMER = 1
    SELECT_PRODUCTS = 2
    RETURN_PRODUCTS = 3
    REVIEW_ORDER = 4


class PaymentType(Enum):
    CASH = "cash"
    CREDIT = "credit"
    CHEQUE = "cheque"


@dataclass(frozen=True)
class FefoPolicy:
    """Whether FEFO is enforced (True) or only advised (False)."""

    enabled: bool = True


@dataclass(frozen=True)
class Selection:
    """The single allocation flow currently in progress."""

    product: Product | None = None
    batches: tuple[Batch, ...] = ()
    selected_batch: Batch | None = None
    quantity: int = 1
    discount: Money = field(default_factory=Money.zero)

    @property
    def ledger(self) -> BatchLedger:
        return BatchLedger(self.batches)


@dataclass(frozen=True)
class OrderCartState:

    stage: OrderStage = OrderStage.SELECT_CUSTOMER
    customer: Customer | None = None
    selection: Selection = field(default_factory=Selection)
    cart_items: tuple[CartLineItem, ...] = ()
    return_items: tuple[ReturnLineItem, ...] = ()
    return_order_id: str | None = None
    return_reason: str = ""
    payment_type: PaymentType = PaymentType.CASH
    notes: str = ""
    network_connected: bool = True
    fefo_enabled: bool = True

    @property
    def policy(self) -> FefoPolicy:
        return FefoPolicy(enabled=self.fefo_enabled)

    # --- Transitions ----------------------------------------------------------

    def with_stage(self, stage: OrderStage) -> OrderCartState:
        return replace(self, stage=stage)

    def with_customer(self, customer: Customer | None) -> OrderCartState:
        return replace(self, customer=customer)

    def with_selection(self, selection: Selection) -> OrderCartState:
        return replace(self, selection=selection)

    def with_cart_items(self, items: tuple[CartLineItem, ...]) -> OrderCartState:
        return replace(self, cart_items=tuple(items))

    def with_return_items(self, items: tuple[ReturnLineItem, ...]) -> OrderCartState:
        return replace(self, return_items=tuple(items))

    def with_return_order(self, order_id: str | None, reason: str = "") -> OrderCartState:
        return replace(self, return_order_id=order_id, return_reason=reason)

    def with_payment(self, payment_type: PaymentType, notes: str | None = None) -> OrderCartState:
        return replace(
            self,
            payment_type=payment_type,
            notes=self.notes if notes is None else notes,
        )

    def with_fefo_enabled(self, enabled: bool) -> OrderCartState:
        return replace(self, fefo_enabled=enabled)

    def with_network_connected(self, connected: bool) -> OrderCartState:
        return replace(self, network_connected=connected)

    def clear_selection(self) -> OrderCartState:
        return replace(self, selection=Selection())

    def reset(self) -> OrderCartState:
        """Discard the order being composed.

        Session-level settings survive: connectivity and the FEFO policy.
        """
        return OrderCartState(
            network_connected=self.network_connected,
            fefo_enabled=self.fefo_enabled,
        )
