"""
Kargah Workshop Engine — Request Commands
===========================================
Assembly orders and the production logs recorded against them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.validation import require_date, require_id, require_positive


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

WORKSHOP_ASSEMBLY_ADD_REQUEST = "workshop.assembly.add.request"
WORKSHOP_ASSEMBLY_COMPLETE_REQUEST = "workshop.assembly.complete.request"
WORKSHOP_ASSEMBLY_DELETE_REQUEST = "workshop.assembly.delete.request"
WORKSHOP_PRODUCTION_LOG_ADD_REQUEST = "workshop.productionlog.add.request"
WORKSHOP_PRODUCTION_LOG_EDIT_REQUEST = "workshop.productionlog.edit.request"
WORKSHOP_PRODUCTION_LOG_DELETE_REQUEST = "workshop.productionlog.delete.request"

WORKSHOP_COMMAND_TYPES = frozenset({
    WORKSHOP_ASSEMBLY_ADD_REQUEST,
    WORKSHOP_ASSEMBLY_COMPLETE_REQUEST,
    WORKSHOP_ASSEMBLY_DELETE_REQUEST,
    WORKSHOP_PRODUCTION_LOG_ADD_REQUEST,
    WORKSHOP_PRODUCTION_LOG_EDIT_REQUEST,
    WORKSHOP_PRODUCTION_LOG_DELETE_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# ASSEMBLY ORDERS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AssemblyOrderAddRequest:
    """Open a PENDING run producing ``quantity`` units of an assembly."""
    order_id: int
    part_id: int
    quantity: Decimal
    date: date

    def __post_init__(self):
        require_id(self.order_id, "order_id")
        require_id(self.part_id, "part_id")
        require_positive(self.quantity, "quantity")
        require_date(self.date, "date")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            WORKSHOP_ASSEMBLY_ADD_REQUEST,
            {
                "order_id": self.order_id,
                "part_id": self.part_id,
                "quantity": self.quantity,
                "date": self.date,
            },
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class AssemblyOrderCompleteRequest:
    order_id: int

    def __post_init__(self):
        require_id(self.order_id, "order_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            WORKSHOP_ASSEMBLY_COMPLETE_REQUEST, {"order_id": self.order_id},
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class AssemblyOrderDeleteRequest:
    """Allowed only while PENDING; removes the order's production logs too."""
    order_id: int

    def __post_init__(self):
        require_id(self.order_id, "order_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            WORKSHOP_ASSEMBLY_DELETE_REQUEST, {"order_id": self.order_id},
            command_id=command_id, issued_at=issued_at,
        )


# ══════════════════════════════════════════════════════════════
# PRODUCTION LOGS
# ══════════════════════════════════════════════════════════════

def _validate_production_log(request) -> None:
    require_id(request.log_id, "log_id")
    require_id(request.assembly_order_id, "assembly_order_id")
    require_id(request.employee_id, "employee_id")
    require_date(request.date, "date")
    require_positive(request.hours_spent, "hours_spent")


def _production_log_payload(request) -> dict:
    return {
        "log_id": request.log_id,
        "assembly_order_id": request.assembly_order_id,
        "employee_id": request.employee_id,
        "date": request.date,
        "hours_spent": request.hours_spent,
    }


@dataclass(frozen=True)
class ProductionLogAddRequest:
    log_id: int
    assembly_order_id: int
    employee_id: int
    date: date
    hours_spent: Decimal

    def __post_init__(self):
        _validate_production_log(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            WORKSHOP_PRODUCTION_LOG_ADD_REQUEST, _production_log_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class ProductionLogEditRequest:
    log_id: int
    assembly_order_id: int
    employee_id: int
    date: date
    hours_spent: Decimal

    def __post_init__(self):
        _validate_production_log(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            WORKSHOP_PRODUCTION_LOG_EDIT_REQUEST, _production_log_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class ProductionLogDeleteRequest:
    log_id: int

    def __post_init__(self):
        require_id(self.log_id, "log_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            WORKSHOP_PRODUCTION_LOG_DELETE_REQUEST, {"log_id": self.log_id},
            command_id=command_id, issued_at=issued_at,
        )
