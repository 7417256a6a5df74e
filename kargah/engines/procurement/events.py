"""
Kargah Procurement Engine — Event Types
=========================================
"""

from __future__ import annotations

PROCUREMENT_PURCHASE_RECEIVED_V1 = "procurement.purchase.received.v1"
PROCUREMENT_PURCHASE_EDITED_V1 = "procurement.purchase.edited.v1"
PROCUREMENT_PURCHASE_DELETED_V1 = "procurement.purchase.deleted.v1"

PROCUREMENT_EVENT_TYPES = (
    PROCUREMENT_PURCHASE_RECEIVED_V1,
    PROCUREMENT_PURCHASE_EDITED_V1,
    PROCUREMENT_PURCHASE_DELETED_V1,
)

COMMAND_TO_EVENT_TYPE = {
    "procurement.purchase.add.request": PROCUREMENT_PURCHASE_RECEIVED_V1,
    "procurement.purchase.edit.request": PROCUREMENT_PURCHASE_EDITED_V1,
    "procurement.purchase.delete.request": PROCUREMENT_PURCHASE_DELETED_V1,
}


def resolve_procurement_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
