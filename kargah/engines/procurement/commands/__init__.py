"""
Kargah Procurement Engine — Request Commands
==============================================
Purchase invoice requests. Lines name their item in free text; the
receipt matches names to parts case-insensitively.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.errors import ValidationError
from kargah.core.commands.validation import (
    require_date,
    require_id,
    require_non_negative,
    require_positive,
    require_text,
)
from kargah.core.primitives import PurchaseItem


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

PROCUREMENT_PURCHASE_ADD_REQUEST = "procurement.purchase.add.request"
PROCUREMENT_PURCHASE_EDIT_REQUEST = "procurement.purchase.edit.request"
PROCUREMENT_PURCHASE_DELETE_REQUEST = "procurement.purchase.delete.request"

PROCUREMENT_COMMAND_TYPES = frozenset({
    PROCUREMENT_PURCHASE_ADD_REQUEST,
    PROCUREMENT_PURCHASE_EDIT_REQUEST,
    PROCUREMENT_PURCHASE_DELETE_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

def _validate_invoice(request) -> None:
    require_id(request.purchase_id, "purchase_id")
    if request.supplier_id is not None:
        require_id(request.supplier_id, "supplier_id")
    require_date(request.date, "date")
    if not request.items:
        raise ValidationError("a purchase needs at least one item.")
    for item in request.items:
        if not isinstance(item, PurchaseItem):
            raise ValidationError("items must be PurchaseItem records.")
        require_text(item.item_name, "item_name")
        require_positive(item.quantity, "quantity")
        require_non_negative(item.unit_price, "unit_price")


def _invoice_payload(request) -> dict:
    return {
        "purchase_id": request.purchase_id,
        "supplier_id": request.supplier_id,
        "date": request.date,
        "items": tuple(request.items),
    }


@dataclass(frozen=True)
class PurchaseAddRequest:
    """Record a purchase invoice and receive its lines into stock."""
    purchase_id: int
    supplier_id: Optional[int]
    date: date
    items: Tuple[PurchaseItem, ...]

    def __post_init__(self):
        _validate_invoice(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            PROCUREMENT_PURCHASE_ADD_REQUEST, _invoice_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class PurchaseEditRequest:
    """Replace an invoice; only the net stock delta per item name is applied."""
    purchase_id: int
    supplier_id: Optional[int]
    date: date
    items: Tuple[PurchaseItem, ...]

    def __post_init__(self):
        _validate_invoice(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            PROCUREMENT_PURCHASE_EDIT_REQUEST, _invoice_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class PurchaseDeleteRequest:
    purchase_id: int

    def __post_init__(self):
        require_id(self.purchase_id, "purchase_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            PROCUREMENT_PURCHASE_DELETE_REQUEST, {"purchase_id": self.purchase_id},
            command_id=command_id, issued_at=issued_at,
        )
