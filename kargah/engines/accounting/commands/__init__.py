"""
Kargah Accounting Engine — Request Commands
=============================================
Operating expenses.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.errors import ValidationError
from kargah.core.commands.validation import (
    require_date,
    require_id,
    require_positive,
    require_text,
)

ACCOUNTING_EXPENSE_ADD_REQUEST = "accounting.expense.add.request"
ACCOUNTING_EXPENSE_EDIT_REQUEST = "accounting.expense.edit.request"
ACCOUNTING_EXPENSE_DELETE_REQUEST = "accounting.expense.delete.request"

ACCOUNTING_COMMAND_TYPES = frozenset({
    ACCOUNTING_EXPENSE_ADD_REQUEST,
    ACCOUNTING_EXPENSE_EDIT_REQUEST,
    ACCOUNTING_EXPENSE_DELETE_REQUEST,
})


def _validate_expense(request) -> None:
    require_id(request.expense_id, "expense_id")
    require_date(request.date, "date")
    require_text(request.description, "description")
    require_positive(request.amount, "amount")
    if not isinstance(request.category, str):
        raise ValidationError("category must be a string.")


def _expense_payload(request) -> dict:
    return {
        "expense_id": request.expense_id,
        "date": request.date,
        "description": request.description.strip(),
        "amount": request.amount,
        "category": request.category.strip(),
    }


@dataclass(frozen=True)
class ExpenseAddRequest:
    expense_id: int
    date: date
    description: str
    amount: Decimal
    category: str = ""

    def __post_init__(self):
        _validate_expense(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            ACCOUNTING_EXPENSE_ADD_REQUEST, _expense_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class ExpenseEditRequest:
    expense_id: int
    date: date
    description: str
    amount: Decimal
    category: str = ""

    def __post_init__(self):
        _validate_expense(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            ACCOUNTING_EXPENSE_EDIT_REQUEST, _expense_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class ExpenseDeleteRequest:
    expense_id: int

    def __post_init__(self):
        require_id(self.expense_id, "expense_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            ACCOUNTING_EXPENSE_DELETE_REQUEST, {"expense_id": self.expense_id},
            command_id=command_id, issued_at=issued_at,
        )
