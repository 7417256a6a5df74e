"""
Kargah Sales Engine — Application Service
===========================================
Orders, payments and delivery.

Delivery is all-or-nothing: every line is checked against the
product's own stock before any deduction, and cost_of_goods_sold is
valued at delivery time and frozen on the order.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict

from kargah.core.commands.base import Command
from kargah.core.commands.errors import raise_rejection
from kargah.core.config import CostingDiscipline
from kargah.core.primitives import (
    ZERO,
    OrderStatus,
    Part,
    Payment,
    SalesOrder,
    order_total,
)
from kargah.core.store import ChangeSet, EntityStore
from kargah.engines.inventory.policies import (
    check_order_sufficiency,
    insufficient_stock_policy,
    order_requirements,
)
from kargah.engines.inventory.valuation import resolve_cost
from kargah.engines.sales.commands import (
    SALES_ORDER_ADD_REQUEST,
    SALES_ORDER_DELETE_REQUEST,
    SALES_ORDER_DELIVER_REQUEST,
    SALES_ORDER_PAYMENT_ADD_REQUEST,
)
from kargah.engines.sales.events import resolve_sales_event_type
from kargah.engines.sales.policies import (
    delivery_requires_paid_policy,
    overpayment_policy,
    payment_requires_pending_policy,
)
from kargah.engines.service import EngineService, Handler, HandlerResult


# ══════════════════════════════════════════════════════════════
# BALANCE HELPERS
# ══════════════════════════════════════════════════════════════

def total_paid(order: SalesOrder) -> Decimal:
    return order.total_paid


def remaining_balance(order: SalesOrder) -> Decimal:
    return order.remaining_balance


def cost_of_goods(
    store: EntityStore,
    order: SalesOrder,
    discipline: CostingDiscipline = CostingDiscipline.RECURSIVE,
) -> Decimal:
    total = ZERO
    for item in order.items:
        total += resolve_cost(store, item.product_id, discipline=discipline) * item.quantity
    return total


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class SalesService(EngineService):
    ENGINE = "sales"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            SALES_ORDER_ADD_REQUEST: self._add_order,
            SALES_ORDER_PAYMENT_ADD_REQUEST: self._add_payment,
            SALES_ORDER_DELIVER_REQUEST: self._deliver_order,
            SALES_ORDER_DELETE_REQUEST: self._delete_order,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_sales_event_type(command_type)

    def _add_order(self, command: Command) -> HandlerResult:
        payload = command.payload
        order = SalesOrder(
            id=payload["order_id"],
            customer_id=payload["customer_id"],
            date=payload["date"],
            delivery_date=payload["delivery_date"],
            items=payload["items"],
            total_amount=order_total(payload["items"]),
        )
        return ChangeSet(upserts=(order,)), {
            "order_id": order.id,
            "total_amount": order.total_amount,
            "status": order.status.value,
        }

    def _add_payment(self, command: Command) -> HandlerResult:
        payload = command.payload
        order = self._store.require(SalesOrder.COLLECTION, payload["order_id"], "Order")
        amount = payload["amount"]

        raise_rejection(payment_requires_pending_policy(order))
        raise_rejection(overpayment_policy(order, amount, self._rules.overpayment_policy))

        payment = Payment(id=self._ids.next_id(), amount=amount, date=payload["date"])
        updated = replace(order, payments=order.payments + (payment,))
        if updated.total_paid >= updated.total_amount:
            updated = replace(updated, status=OrderStatus.PAID)

        return ChangeSet(upserts=(updated,)), {
            "order_id": updated.id,
            "payment_id": payment.id,
            "total_paid": updated.total_paid,
            "remaining_balance": updated.remaining_balance,
            "status": updated.status.value,
        }

    def _deliver_order(self, command: Command) -> HandlerResult:
        order = self._store.require(
            SalesOrder.COLLECTION, command.payload["order_id"], "Order",
        )
        raise_rejection(delivery_requires_paid_policy(order))
        raise_rejection(insufficient_stock_policy(
            check_order_sufficiency(self._store, order.items)
        ))

        cogs = cost_of_goods(self._store, order, self._rules.costing_discipline)

        deducted = []
        for product_id, quantity in order_requirements(order.items).items():
            part = self._store.get(Part.COLLECTION, product_id)
            deducted.append(replace(part, stock=part.stock - quantity))

        delivered = replace(
            order, status=OrderStatus.DELIVERED, cost_of_goods_sold=cogs,
        )
        return ChangeSet(upserts=tuple(deducted) + (delivered,)), {
            "order_id": delivered.id,
            "cost_of_goods_sold": cogs,
            "status": delivered.status.value,
        }

    def _delete_order(self, command: Command) -> HandlerResult:
        order_id = command.payload["order_id"]
        self._store.require(SalesOrder.COLLECTION, order_id, "Order")
        return (
            ChangeSet(deletions=((SalesOrder.COLLECTION, order_id),)),
            {"order_id": order_id},
        )
