"""
Kargah Sales Engine — Event Types
===================================
"""

from __future__ import annotations

SALES_ORDER_ADDED_V1 = "sales.order.added.v1"
SALES_ORDER_PAYMENT_RECORDED_V1 = "sales.order.payment.recorded.v1"
SALES_ORDER_DELIVERED_V1 = "sales.order.delivered.v1"
SALES_ORDER_DELETED_V1 = "sales.order.deleted.v1"

SALES_EVENT_TYPES = (
    SALES_ORDER_ADDED_V1,
    SALES_ORDER_PAYMENT_RECORDED_V1,
    SALES_ORDER_DELIVERED_V1,
    SALES_ORDER_DELETED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "sales.order.add.request": SALES_ORDER_ADDED_V1,
    "sales.order.payment.add.request": SALES_ORDER_PAYMENT_RECORDED_V1,
    "sales.order.deliver.request": SALES_ORDER_DELIVERED_V1,
    "sales.order.delete.request": SALES_ORDER_DELETED_V1,
}


def resolve_sales_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
