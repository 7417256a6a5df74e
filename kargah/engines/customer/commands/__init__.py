"""
Kargah Customer Engine — Request Commands
===========================================
Contacts: customers and suppliers in one directory.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Optional

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.errors import ValidationError
from kargah.core.commands.validation import require_id, require_text
from kargah.core.primitives import ContactRole

CUSTOMER_CONTACT_ADD_REQUEST = "customer.contact.add.request"
CUSTOMER_CONTACT_EDIT_REQUEST = "customer.contact.edit.request"
CUSTOMER_CONTACT_DELETE_REQUEST = "customer.contact.delete.request"

CUSTOMER_COMMAND_TYPES = frozenset({
    CUSTOMER_CONTACT_ADD_REQUEST,
    CUSTOMER_CONTACT_EDIT_REQUEST,
    CUSTOMER_CONTACT_DELETE_REQUEST,
})


def _validate_contact(request) -> None:
    require_id(request.contact_id, "contact_id")
    require_text(request.name, "name")
    if not request.roles:
        raise ValidationError("a contact needs at least one role.")
    for role in request.roles:
        if not isinstance(role, ContactRole):
            raise ValidationError(f"role {role!r} is not a ContactRole.")


def _contact_payload(request) -> dict:
    return {
        "contact_id": request.contact_id,
        "name": request.name.strip(),
        "roles": frozenset(request.roles),
        "contact_info": request.contact_info,
        "phone": request.phone,
        "address": request.address,
        "job": request.job,
        "activity_type": request.activity_type,
    }


@dataclass(frozen=True)
class ContactAddRequest:
    contact_id: int
    name: str
    roles: FrozenSet[ContactRole]
    contact_info: str = ""
    phone: Optional[str] = None
    address: Optional[str] = None
    job: Optional[str] = None
    activity_type: Optional[str] = None

    def __post_init__(self):
        _validate_contact(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            CUSTOMER_CONTACT_ADD_REQUEST, _contact_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class ContactEditRequest:
    contact_id: int
    name: str
    roles: FrozenSet[ContactRole]
    contact_info: str = ""
    phone: Optional[str] = None
    address: Optional[str] = None
    job: Optional[str] = None
    activity_type: Optional[str] = None

    def __post_init__(self):
        _validate_contact(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            CUSTOMER_CONTACT_EDIT_REQUEST, _contact_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class ContactDeleteRequest:
    contact_id: int

    def __post_init__(self):
        require_id(self.contact_id, "contact_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            CUSTOMER_CONTACT_DELETE_REQUEST, {"contact_id": self.contact_id},
            command_id=command_id, issued_at=issued_at,
        )
