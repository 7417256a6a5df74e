"""
Kargah Sales Engine — Request Commands
========================================
Sales order lifecycle requests: add, pay, deliver, delete.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.errors import ValidationError
from kargah.core.commands.validation import (
    require_date,
    require_id,
    require_non_negative,
    require_positive,
)
from kargah.core.primitives import OrderItem


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

SALES_ORDER_ADD_REQUEST = "sales.order.add.request"
SALES_ORDER_PAYMENT_ADD_REQUEST = "sales.order.payment.add.request"
SALES_ORDER_DELIVER_REQUEST = "sales.order.deliver.request"
SALES_ORDER_DELETE_REQUEST = "sales.order.delete.request"

SALES_COMMAND_TYPES = frozenset({
    SALES_ORDER_ADD_REQUEST,
    SALES_ORDER_PAYMENT_ADD_REQUEST,
    SALES_ORDER_DELIVER_REQUEST,
    SALES_ORDER_DELETE_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderAddRequest:
    """Create a PENDING order; the total is derived from the lines."""
    order_id: int
    customer_id: Optional[int]
    date: date
    items: Tuple[OrderItem, ...]
    delivery_date: Optional[date] = None

    def __post_init__(self):
        require_id(self.order_id, "order_id")
        if self.customer_id is not None:
            require_id(self.customer_id, "customer_id")
        require_date(self.date, "date")
        if self.delivery_date is not None:
            require_date(self.delivery_date, "delivery_date")
        if not self.items:
            raise ValidationError("an order needs at least one item.")
        for item in self.items:
            if not isinstance(item, OrderItem):
                raise ValidationError("items must be OrderItem records.")
            require_id(item.product_id, "product_id")
            require_positive(item.quantity, "quantity")
            require_non_negative(item.price, "price")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            SALES_ORDER_ADD_REQUEST,
            {
                "order_id": self.order_id,
                "customer_id": self.customer_id,
                "date": self.date,
                "delivery_date": self.delivery_date,
                "items": tuple(self.items),
            },
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class PaymentAddRequest:
    """Record a payment against a PENDING order."""
    order_id: int
    amount: Decimal
    date: date

    def __post_init__(self):
        require_id(self.order_id, "order_id")
        require_positive(self.amount, "amount")
        require_date(self.date, "date")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            SALES_ORDER_PAYMENT_ADD_REQUEST,
            {"order_id": self.order_id, "amount": self.amount, "date": self.date},
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class OrderDeliverRequest:
    order_id: int

    def __post_init__(self):
        require_id(self.order_id, "order_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            SALES_ORDER_DELIVER_REQUEST, {"order_id": self.order_id},
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class OrderDeleteRequest:
    order_id: int

    def __post_init__(self):
        require_id(self.order_id, "order_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            SALES_ORDER_DELETE_REQUEST, {"order_id": self.order_id},
            command_id=command_id, issued_at=issued_at,
        )
