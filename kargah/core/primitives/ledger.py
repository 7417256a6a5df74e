"""
Kargah Ledger Primitive — Expenses
====================================
Operating expenses outside purchases and payroll (rent, utilities, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar

from kargah.core.primitives.amounts import amount_to_json, to_amount
from kargah.core.time.periods import require_day


@dataclass(frozen=True)
class Expense:
    COLLECTION: ClassVar[str] = "expenses"

    id: int
    date: date
    description: str
    amount: Decimal
    category: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": amount_to_json(self.amount),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Expense:
        return cls(
            id=int(data["id"]),
            date=require_day(data["date"], "date"),
            description=data.get("description", ""),
            amount=to_amount(data["amount"]),
            category=data.get("category", ""),
        )
