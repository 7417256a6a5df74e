"""
Kargah Accounting Engine — Application Service
================================================
"""

from __future__ import annotations

from typing import Dict

from kargah.core.commands.base import Command
from kargah.core.primitives import Expense
from kargah.core.store import ChangeSet
from kargah.engines.accounting.commands import (
    ACCOUNTING_EXPENSE_ADD_REQUEST,
    ACCOUNTING_EXPENSE_DELETE_REQUEST,
    ACCOUNTING_EXPENSE_EDIT_REQUEST,
)
from kargah.engines.accounting.events import resolve_accounting_event_type
from kargah.engines.service import EngineService, Handler, HandlerResult


def _expense_from_payload(payload: dict) -> Expense:
    return Expense(
        id=payload["expense_id"],
        date=payload["date"],
        description=payload["description"],
        amount=payload["amount"],
        category=payload["category"],
    )


class AccountingService(EngineService):
    ENGINE = "accounting"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            ACCOUNTING_EXPENSE_ADD_REQUEST: self._add_expense,
            ACCOUNTING_EXPENSE_EDIT_REQUEST: self._edit_expense,
            ACCOUNTING_EXPENSE_DELETE_REQUEST: self._delete_expense,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_accounting_event_type(command_type)

    def _add_expense(self, command: Command) -> HandlerResult:
        expense = _expense_from_payload(command.payload)
        return ChangeSet(upserts=(expense,)), {
            "expense_id": expense.id, "amount": expense.amount,
        }

    def _edit_expense(self, command: Command) -> HandlerResult:
        expense = _expense_from_payload(command.payload)
        self._store.require(Expense.COLLECTION, expense.id, "Expense")
        return ChangeSet(upserts=(expense,)), {
            "expense_id": expense.id, "amount": expense.amount,
        }

    def _delete_expense(self, command: Command) -> HandlerResult:
        expense_id = command.payload["expense_id"]
        self._store.require(Expense.COLLECTION, expense_id, "Expense")
        return (
            ChangeSet(deletions=((Expense.COLLECTION, expense_id),)),
            {"expense_id": expense_id},
        )
