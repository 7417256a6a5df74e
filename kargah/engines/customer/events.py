"""
Kargah Customer Engine — Event Types
======================================
"""

from __future__ import annotations

CUSTOMER_CONTACT_ADDED_V1 = "customer.contact.added.v1"
CUSTOMER_CONTACT_EDITED_V1 = "customer.contact.edited.v1"
CUSTOMER_CONTACT_DELETED_V1 = "customer.contact.deleted.v1"

COMMAND_TO_EVENT_TYPE = {
    "customer.contact.add.request": CUSTOMER_CONTACT_ADDED_V1,
    "customer.contact.edit.request": CUSTOMER_CONTACT_EDITED_V1,
    "customer.contact.delete.request": CUSTOMER_CONTACT_DELETED_V1,
}


def resolve_customer_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
