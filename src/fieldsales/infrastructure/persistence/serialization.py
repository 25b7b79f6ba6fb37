"""JSON (de)serialization for domain records.

Amounts are stored as strings so Decimal precision survives the round
trip; dates are ISO-8601.  Catalog files may carry bare numbers for
prices, in which case the repository's currency applies.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from fieldsales.domain.model.batch import Batch
from fieldsales.domain.model.cart import BatchContribution, CartLineItem, ReturnLineItem
from fieldsales.domain.model.order_state import (
    OrderCartState,
    OrderStage,
    PaymentType,
    Selection,
)
from fieldsales.domain.model.product import Customer, Product
from fieldsales.domain.model.submission import OrderSubmission, StockDeduction
from fieldsales.domain.model.value_objects import DEFAULT_CURRENCY, Money
from fieldsales.domain.service.order_summary import OrderSummary

# --- Scalars ------------------------------------------------------------------


def money_to_raw(money: Money) -> dict:
    return {"amount": str(money.amount), "currency": money.currency}


def money_from_raw(raw, currency: str = DEFAULT_CURRENCY) -> Money:
    if isinstance(raw, dict):
        return Money(Decimal(str(raw["amount"])), raw.get("currency", currency))
    return Money.of(raw, currency)


def _optional_money(raw, currency: str) -> Money | None:
    return None if raw is None else money_from_raw(raw, currency)


def _optional_date(raw: str | None) -> date | None:
    return None if raw is None else date.fromisoformat(raw)


# --- Catalog ------------------------------------------------------------------


def product_to_raw(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "unit_price": money_to_raw(product.unit_price),
        "total_stock": product.total_stock,
        "category_name": product.category_name,
    }


def product_from_raw(raw: dict, currency: str = DEFAULT_CURRENCY) -> Product:
    return Product(
        id=str(raw["id"]),
        name=raw["name"],
        unit_price=money_from_raw(raw["unit_price"], currency),
        total_stock=raw.get("total_stock", 0),
        category_name=raw.get("category_name"),
    )


def customer_to_raw(customer: Customer) -> dict:
    return {
        "id": customer.id,
        "name": customer.name,
        "phone": customer.phone,
        "city": customer.city,
        "credit_limit": (
            money_to_raw(customer.credit_limit) if customer.credit_limit else None
        ),
        "credit_balance": (
            money_to_raw(customer.credit_balance) if customer.credit_balance else None
        ),
    }


def customer_from_raw(raw: dict, currency: str = DEFAULT_CURRENCY) -> Customer:
    return Customer(
        id=str(raw["id"]),
        name=raw["name"],
        phone=raw.get("phone", ""),
        city=raw.get("city"),
        credit_limit=_optional_money(raw.get("credit_limit"), currency),
        credit_balance=_optional_money(raw.get("credit_balance"), currency),
    )


def batch_to_raw(batch: Batch) -> dict:
    return {
        "id": batch.id,
        "lot_number": batch.lot_number,
        "expiry_date": batch.expiry_date.isoformat(),
        "unit_price": money_to_raw(batch.unit_price),
        "available_quantity": batch.available_quantity,
        "product_id": batch.product_id,
        "manufacturing_date": (
            batch.manufacturing_date.isoformat() if batch.manufacturing_date else None
        ),
        "supplier_name": batch.supplier_name,
    }


def batch_from_raw(raw: dict, currency: str = DEFAULT_CURRENCY) -> Batch:
    return Batch(
        id=str(raw["id"]),
        lot_number=raw["lot_number"],
        expiry_date=date.fromisoformat(raw["expiry_date"]),
        unit_price=money_from_raw(raw["unit_price"], currency),
        available_quantity=raw["available_quantity"],
        product_id=str(raw["product_id"]),
        manufacturing_date=_optional_date(raw.get("manufacturing_date")),
        supplier_name=raw.get("supplier_name"),
    )


# --- Cart lines ---------------------------------------------------------------


def cart_line_to_raw(item: CartLineItem) -> dict:
    return {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "batch_id": item.batch_id,
        "lot_number": item.lot_number,
        "expiry_date": item.expiry_date.isoformat(),
        "unit_price": money_to_raw(item.unit_price),
        "quantity": item.quantity,
        "discount": money_to_raw(item.discount),
        "total_price": money_to_raw(item.total_price),
        "max_quantity": item.max_quantity,
        "is_fefo_split": item.is_fefo_split,
        "fefo_batches": (
            None
            if item.fefo_batches is None
            else [
                {
                    "batch_id": c.batch_id,
                    "lot_number": c.lot_number,
                    "expiry_date": c.expiry_date.isoformat(),
                    "quantity": c.quantity,
                    "unit_price": money_to_raw(c.unit_price),
                }
                for c in item.fefo_batches
            ]
        ),
    }


def cart_line_from_raw(raw: dict) -> CartLineItem:
    contributions = raw.get("fefo_batches")
    return CartLineItem(
        product_id=raw["product_id"],
        product_name=raw["product_name"],
        batch_id=raw["batch_id"],
        lot_number=raw["lot_number"],
        expiry_date=date.fromisoformat(raw["expiry_date"]),
        unit_price=money_from_raw(raw["unit_price"]),
        quantity=raw["quantity"],
        discount=money_from_raw(raw["discount"]),
        total_price=money_from_raw(raw["total_price"]),
        max_quantity=raw["max_quantity"],
        is_fefo_split=raw.get("is_fefo_split", False),
        fefo_batches=(
            None
            if contributions is None
            else tuple(
                BatchContribution(
                    batch_id=c["batch_id"],
                    lot_number=c["lot_number"],
                    expiry_date=date.fromisoformat(c["expiry_date"]),
                    quantity=c["quantity"],
                    unit_price=money_from_raw(c["unit_price"]),
                )
                for c in contributions
            )
        ),
    )


def return_line_to_raw(item: ReturnLineItem) -> dict:
    return {
        "product_id": item.product_id,
        "product_name": item.product_name,
        "batch_id": item.batch_id,
        "lot_number": item.lot_number,
        "quantity": item.quantity,
        "unit_price": money_to_raw(item.unit_price),
        "total_price": money_to_raw(item.total_price),
        "reason": item.reason,
        "max_quantity": item.max_quantity,
    }


def return_line_from_raw(raw: dict) -> ReturnLineItem:
    return ReturnLineItem(
        product_id=raw["product_id"],
        product_name=raw["product_name"],
        batch_id=raw["batch_id"],
        lot_number=raw["lot_number"],
        quantity=raw["quantity"],
        unit_price=money_from_raw(raw["unit_price"]),
        total_price=money_from_raw(raw["total_price"]),
        reason=raw.get("reason", ""),
        max_quantity=raw.get("max_quantity", 0),
    )


# --- Draft state ----------------------------------------------------------------


def state_to_raw(state: OrderCartState) -> dict:
    selection = state.selection
    return {
        "stage": state.stage.name,
        "customer": customer_to_raw(state.customer) if state.customer else None,
        "selection": {
            "product": product_to_raw(selection.product) if selection.product else None,
            "batches": [batch_to_raw(b) for b in selection.batches],
            "selected_batch_id": (
                selection.selected_batch.id if selection.selected_batch else None
            ),
            "quantity": selection.quantity,
            "discount": money_to_raw(selection.discount),
        },
        "cart_items": [cart_line_to_raw(i) for i in state.cart_items],
        "return_items": [return_line_to_raw(i) for i in state.return_items],
        "return_order_id": state.return_order_id,
        "return_reason": state.return_reason,
        "payment_type": state.payment_type.value,
        "notes": state.notes,
        "network_connected": state.network_connected,
        "fefo_enabled": state.fefo_enabled,
    }


def state_from_raw(raw: dict) -> OrderCartState:
    sel = raw.get("selection") or {}
    batches = tuple(batch_from_raw(b) for b in sel.get("batches", []))
    selected_id = sel.get("selected_batch_id")
    selection = Selection(
        product=product_from_raw(sel["product"]) if sel.get("product") else None,
        batches=batches,
        selected_batch=next((b for b in batches if b.id == selected_id), None),
        quantity=sel.get("quantity", 1),
        discount=money_from_raw(sel.get("discount", "0")),
    )
    return OrderCartState(
        stage=OrderStage[raw.get("stage", OrderStage.SELECT_CUSTOMER.name)],
        customer=customer_from_raw(raw["customer"]) if raw.get("customer") else None,
        selection=selection,
        cart_items=tuple(cart_line_from_raw(i) for i in raw.get("cart_items", [])),
        return_items=tuple(return_line_from_raw(i) for i in raw.get("return_items", [])),
        return_order_id=raw.get("return_order_id"),
        return_reason=raw.get("return_reason", ""),
        payment_type=PaymentType(raw.get("payment_type", PaymentType.CASH.value)),
        notes=raw.get("notes", ""),
        network_connected=raw.get("network_connected", True),
        fefo_enabled=raw.get("fefo_enabled", True),
    )


# --- Submitted orders -----------------------------------------------------------


def order_to_raw(order: OrderSubmission) -> dict:
    return {
        "id": order.id,
        "customer_id": order.customer_id,
        "customer_name": order.customer_name,
        "items": [cart_line_to_raw(i) for i in order.items],
        "returns": [return_line_to_raw(i) for i in order.returns],
        "return_order_id": order.return_order_id,
        "return_reason": order.return_reason,
        "payment_type": order.payment_type.value,
        "notes": order.notes,
        "summary": {
            "total_order_amount": money_to_raw(order.summary.total_order_amount),
            "total_discount": money_to_raw(order.summary.total_discount),
            "total_returns_amount": money_to_raw(order.summary.total_returns_amount),
            "final_amount": money_to_raw(order.summary.final_amount),
        },
        "deductions": [
            {"batch_id": d.batch_id, "product_id": d.product_id, "quantity": d.quantity}
            for d in order.deductions
        ],
        "created_at": order.created_at.isoformat(),
    }


def order_from_raw(raw: dict) -> OrderSubmission:
    summary = raw["summary"]
    return OrderSubmission(
        id=raw["id"],
        customer_id=raw["customer_id"],
        customer_name=raw["customer_name"],
        items=tuple(cart_line_from_raw(i) for i in raw["items"]),
        returns=tuple(return_line_from_raw(i) for i in raw.get("returns", [])),
        return_order_id=raw.get("return_order_id"),
        return_reason=raw.get("return_reason", ""),
        payment_type=PaymentType(raw["payment_type"]),
        notes=raw.get("notes", ""),
        summary=OrderSummary(
            total_order_amount=money_from_raw(summary["total_order_amount"]),
            total_discount=money_from_raw(summary["total_discount"]),
            total_returns_amount=money_from_raw(summary["total_returns_amount"]),
            final_amount=money_from_raw(summary["final_amount"]),
        ),
        deductions=tuple(
            StockDeduction(d["batch_id"], d["product_id"], d["quantity"])
            for d in raw.get("deductions", [])
        ),
        created_at=datetime.fromisoformat(raw["created_at"]),
    )
