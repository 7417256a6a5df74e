"""
Kargah Inventory Primitive — Parts and Bills of Materials
===========================================================
A Part is either a raw material (directly costed) or an assembly
(built from a BOM of other parts). Records are frozen; every change
produces a new record via ``dataclasses.replace``.

stock >= 0 is a soft target enforced by the stock validator before
deduction, not by this record.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional, Tuple

from kargah.core.primitives.amounts import (
    ZERO,
    amount_to_json,
    optional_amount,
    to_amount,
)


@dataclass(frozen=True)
class BomComponent:
    """One BOM line: ``quantity`` units of ``part_id`` per produced unit."""
    part_id: int
    quantity: Decimal

    def to_dict(self) -> dict:
        return {"partId": self.part_id, "quantity": amount_to_json(self.quantity)}

    @classmethod
    def from_dict(cls, data: dict) -> BomComponent:
        return cls(part_id=int(data["partId"]), quantity=to_amount(data["quantity"]))


@dataclass(frozen=True)
class Part:
    COLLECTION: ClassVar[str] = "parts"

    id: int
    name: str
    is_assembly: bool = False
    stock: Decimal = ZERO
    threshold: Decimal = ZERO
    cost: Optional[Decimal] = None
    components: Tuple[BomComponent, ...] = ()

    @property
    def has_recipe(self) -> bool:
        return self.is_assembly and len(self.components) > 0

    @property
    def stored_cost(self) -> Decimal:
        return self.cost if self.cost is not None else ZERO

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "isAssembly": self.is_assembly,
            "stock": amount_to_json(self.stock),
            "threshold": amount_to_json(self.threshold),
        }
        if self.cost is not None:
            data["cost"] = amount_to_json(self.cost)
        if self.is_assembly or self.components:
            data["components"] = [c.to_dict() for c in self.components]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Part:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            is_assembly=bool(data.get("isAssembly", False)),
            stock=to_amount(data.get("stock", 0)),
            threshold=to_amount(data.get("threshold", 0)),
            cost=optional_amount(data.get("cost")),
            components=tuple(
                BomComponent.from_dict(c) for c in (data.get("components") or ())
            ),
        )
