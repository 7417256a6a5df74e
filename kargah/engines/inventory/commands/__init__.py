"""
Kargah Inventory Engine — Request Commands
============================================
Typed part requests that convert into canonical Command objects.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.errors import ValidationError
from kargah.core.commands.validation import (
    require_id,
    require_non_negative,
    require_positive,
    require_text,
)
from kargah.core.primitives import ZERO, BomComponent


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

INVENTORY_PART_ADD_REQUEST = "inventory.part.add.request"
INVENTORY_PART_EDIT_REQUEST = "inventory.part.edit.request"
INVENTORY_PART_DELETE_REQUEST = "inventory.part.delete.request"

INVENTORY_COMMAND_TYPES = frozenset({
    INVENTORY_PART_ADD_REQUEST,
    INVENTORY_PART_EDIT_REQUEST,
    INVENTORY_PART_DELETE_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# REQUEST COMMANDS
# ══════════════════════════════════════════════════════════════

def _validate_part_fields(request) -> None:
    require_id(request.part_id, "part_id")
    require_text(request.name, "name")
    require_non_negative(request.stock, "stock")
    require_non_negative(request.threshold, "threshold")
    if request.cost is not None:
        require_non_negative(request.cost, "cost")
    if request.components and not request.is_assembly:
        raise ValidationError("components are only allowed on assemblies.")
    for component in request.components:
        if not isinstance(component, BomComponent):
            raise ValidationError("components must be BomComponent records.")
        require_positive(component.quantity, "component quantity")
        if component.part_id == request.part_id:
            raise ValidationError("an assembly cannot list itself as a component.")


def _part_payload(request) -> dict:
    return {
        "part_id": request.part_id,
        "name": request.name.strip(),
        "is_assembly": request.is_assembly,
        "stock": request.stock,
        "threshold": request.threshold,
        "cost": request.cost,
        "components": tuple(request.components),
    }


@dataclass(frozen=True)
class PartAddRequest:
    """Request to register a raw material or an assembly."""
    part_id: int
    name: str
    is_assembly: bool = False
    stock: Decimal = ZERO
    threshold: Decimal = ZERO
    cost: Optional[Decimal] = None
    components: Tuple[BomComponent, ...] = ()

    def __post_init__(self):
        _validate_part_fields(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            INVENTORY_PART_ADD_REQUEST, _part_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class PartEditRequest:
    """Full-record replace of an existing part."""
    part_id: int
    name: str
    is_assembly: bool = False
    stock: Decimal = ZERO
    threshold: Decimal = ZERO
    cost: Optional[Decimal] = None
    components: Tuple[BomComponent, ...] = ()

    def __post_init__(self):
        _validate_part_fields(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            INVENTORY_PART_EDIT_REQUEST, _part_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class PartDeleteRequest:
    part_id: int

    def __post_init__(self):
        require_id(self.part_id, "part_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            INVENTORY_PART_DELETE_REQUEST, {"part_id": self.part_id},
            command_id=command_id, issued_at=issued_at,
        )
