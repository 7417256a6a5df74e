"""
Kargah Customer Engine — Application Service
==============================================
Contacts are referenced by orders (customer) and purchases
(supplier); deleting a contact leaves those references in place.
"""

from __future__ import annotations

from typing import Dict

from kargah.core.commands.base import Command
from kargah.core.primitives import Contact
from kargah.core.store import ChangeSet
from kargah.engines.customer.commands import (
    CUSTOMER_CONTACT_ADD_REQUEST,
    CUSTOMER_CONTACT_DELETE_REQUEST,
    CUSTOMER_CONTACT_EDIT_REQUEST,
)
from kargah.engines.customer.events import resolve_customer_event_type
from kargah.engines.service import EngineService, Handler, HandlerResult


def _contact_from_payload(payload: dict) -> Contact:
    return Contact(
        id=payload["contact_id"],
        name=payload["name"],
        roles=payload["roles"],
        contact_info=payload["contact_info"],
        phone=payload["phone"],
        address=payload["address"],
        job=payload["job"],
        activity_type=payload["activity_type"],
    )


class CustomerService(EngineService):
    ENGINE = "customer"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            CUSTOMER_CONTACT_ADD_REQUEST: self._add_contact,
            CUSTOMER_CONTACT_EDIT_REQUEST: self._edit_contact,
            CUSTOMER_CONTACT_DELETE_REQUEST: self._delete_contact,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_customer_event_type(command_type)

    def _add_contact(self, command: Command) -> HandlerResult:
        contact = _contact_from_payload(command.payload)
        return ChangeSet(upserts=(contact,)), {"contact_id": contact.id}

    def _edit_contact(self, command: Command) -> HandlerResult:
        contact = _contact_from_payload(command.payload)
        self._store.require(Contact.COLLECTION, contact.id, "Contact")
        return ChangeSet(upserts=(contact,)), {"contact_id": contact.id}

    def _delete_contact(self, command: Command) -> HandlerResult:
        contact_id = command.payload["contact_id"]
        self._store.require(Contact.COLLECTION, contact_id, "Contact")
        return (
            ChangeSet(deletions=((Contact.COLLECTION, contact_id),)),
            {"contact_id": contact_id},
        )
