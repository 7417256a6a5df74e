"""
Kargah Accounting Engine — Event Types
========================================
"""

from __future__ import annotations

ACCOUNTING_EXPENSE_ADDED_V1 = "accounting.expense.added.v1"
ACCOUNTING_EXPENSE_EDITED_V1 = "accounting.expense.edited.v1"
ACCOUNTING_EXPENSE_DELETED_V1 = "accounting.expense.deleted.v1"

COMMAND_TO_EVENT_TYPE = {
    "accounting.expense.add.request": ACCOUNTING_EXPENSE_ADDED_V1,
    "accounting.expense.edit.request": ACCOUNTING_EXPENSE_EDITED_V1,
    "accounting.expense.delete.request": ACCOUNTING_EXPENSE_DELETED_V1,
}


def resolve_accounting_event_type(command_type: str) -> str | None:
    return COMMAND_TO_EVENT_TYPE.get(command_type)
