"""
Kargah Production Primitive — Assembly Orders and Production Logs
===================================================================
An assembly order builds ``quantity`` units of an assembly part.
Production logs record labour spent on a pending order; the costs
are frozen on the order exactly once, at completion.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from kargah.core.primitives.amounts import amount_to_json, optional_amount, to_amount
from kargah.core.time.periods import require_day


class AssemblyStatus(Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class AssemblyOrder:
    COLLECTION: ClassVar[str] = "assemblyOrders"

    id: int
    part_id: int
    quantity: Decimal
    date: date
    status: AssemblyStatus = AssemblyStatus.PENDING
    material_cost: Optional[Decimal] = None
    labor_cost: Optional[Decimal] = None

    @property
    def is_pending(self) -> bool:
        return self.status == AssemblyStatus.PENDING

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "partId": self.part_id,
            "quantity": amount_to_json(self.quantity),
            "date": self.date.isoformat(),
            "status": self.status.value,
        }
        if self.material_cost is not None:
            data["materialCost"] = amount_to_json(self.material_cost)
        if self.labor_cost is not None:
            data["laborCost"] = amount_to_json(self.labor_cost)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> AssemblyOrder:
        return cls(
            id=int(data["id"]),
            part_id=int(data["partId"]),
            quantity=to_amount(data["quantity"]),
            date=require_day(data["date"], "date"),
            status=AssemblyStatus(data.get("status", AssemblyStatus.PENDING.value)),
            material_cost=optional_amount(data.get("materialCost")),
            labor_cost=optional_amount(data.get("laborCost")),
        )


@dataclass(frozen=True)
class ProductionLog:
    COLLECTION: ClassVar[str] = "productionLogs"

    id: int
    assembly_order_id: int
    employee_id: int
    date: date
    hours_spent: Decimal

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "assemblyOrderId": self.assembly_order_id,
            "employeeId": self.employee_id,
            "date": self.date.isoformat(),
            "hoursSpent": amount_to_json(self.hours_spent),
        }

    @classmethod
    def from_dict(cls, data: dict) -> ProductionLog:
        return cls(
            id=int(data["id"]),
            assembly_order_id=int(data["assemblyOrderId"]),
            employee_id=int(data["employeeId"]),
            date=require_day(data["date"], "date"),
            hours_spent=to_amount(data["hoursSpent"]),
        )
