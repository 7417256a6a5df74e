"""
Kargah Trade Primitive — Purchase Invoices and Sales Orders
=============================================================
Purchase invoices reference items by free-text name (matched to parts
case-insensitively on receipt). Sales orders reference finished
products by part id and carry their payment history.

total_amount is always derived from the lines by the owning service.
cost_of_goods_sold is frozen once, at delivery.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Iterable, Optional, Tuple

from kargah.core.primitives.amounts import (
    amount_to_json,
    optional_amount,
    sum_amounts,
    to_amount,
)
from kargah.core.time.periods import parse_day, require_day


# ══════════════════════════════════════════════════════════════
# PURCHASES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PurchaseItem:
    item_name: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price

    def to_dict(self) -> dict:
        return {
            "itemName": self.item_name,
            "quantity": amount_to_json(self.quantity),
            "unitPrice": amount_to_json(self.unit_price),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PurchaseItem:
        return cls(
            item_name=data["itemName"],
            quantity=to_amount(data["quantity"]),
            unit_price=to_amount(data["unitPrice"]),
        )


def purchase_total(items: Iterable[PurchaseItem]) -> Decimal:
    return sum_amounts(item.line_total for item in items)


@dataclass(frozen=True)
class PurchaseInvoice:
    COLLECTION: ClassVar[str] = "purchases"

    id: int
    supplier_id: Optional[int]
    date: date
    items: Tuple[PurchaseItem, ...]
    total_amount: Decimal

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "supplierId": self.supplier_id,
            "date": self.date.isoformat(),
            "items": [item.to_dict() for item in self.items],
            "totalAmount": amount_to_json(self.total_amount),
        }

    @classmethod
    def from_dict(cls, data: dict) -> PurchaseInvoice:
        items = tuple(PurchaseItem.from_dict(i) for i in data.get("items", ()))
        total = data.get("totalAmount")
        return cls(
            id=int(data["id"]),
            supplier_id=data.get("supplierId"),
            date=require_day(data["date"], "date"),
            items=items,
            total_amount=to_amount(total) if total is not None else purchase_total(items),
        )


# ══════════════════════════════════════════════════════════════
# SALES ORDERS
# ══════════════════════════════════════════════════════════════

class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class OrderItem:
    product_id: int
    quantity: Decimal
    price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.price

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "quantity": amount_to_json(self.quantity),
            "price": amount_to_json(self.price),
        }

    @classmethod
    def from_dict(cls, data: dict) -> OrderItem:
        return cls(
            product_id=int(data["productId"]),
            quantity=to_amount(data["quantity"]),
            price=to_amount(data["price"]),
        )


def order_total(items: Iterable[OrderItem]) -> Decimal:
    return sum_amounts(item.line_total for item in items)


@dataclass(frozen=True)
class Payment:
    id: int
    amount: Decimal
    date: date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "amount": amount_to_json(self.amount),
            "date": self.date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Payment:
        return cls(
            id=int(data["id"]),
            amount=to_amount(data["amount"]),
            date=require_day(data["date"], "date"),
        )


@dataclass(frozen=True)
class SalesOrder:
    COLLECTION: ClassVar[str] = "orders"

    id: int
    customer_id: Optional[int]
    date: date
    delivery_date: Optional[date]
    items: Tuple[OrderItem, ...]
    total_amount: Decimal
    payments: Tuple[Payment, ...] = ()
    status: OrderStatus = OrderStatus.PENDING
    cost_of_goods_sold: Optional[Decimal] = None

    @property
    def total_paid(self) -> Decimal:
        return sum_amounts(p.amount for p in self.payments)

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_amount - self.total_paid

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "customerId": self.customer_id,
            "date": self.date.isoformat(),
            "deliveryDate": self.delivery_date.isoformat() if self.delivery_date else "",
            "items": [item.to_dict() for item in self.items],
            "totalAmount": amount_to_json(self.total_amount),
            "payments": [p.to_dict() for p in self.payments],
            "status": self.status.value,
        }
        if self.cost_of_goods_sold is not None:
            data["costOfGoodsSold"] = amount_to_json(self.cost_of_goods_sold)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SalesOrder:
        items = tuple(OrderItem.from_dict(i) for i in data.get("items", ()))
        total = data.get("totalAmount")
        return cls(
            id=int(data["id"]),
            customer_id=data.get("customerId"),
            date=require_day(data["date"], "date"),
            delivery_date=parse_day(data.get("deliveryDate")),
            items=items,
            total_amount=to_amount(total) if total is not None else order_total(items),
            payments=tuple(Payment.from_dict(p) for p in data.get("payments", ())),
            status=OrderStatus(data.get("status", OrderStatus.PENDING.value)),
            cost_of_goods_sold=optional_amount(data.get("costOfGoodsSold")),
        )
