"""
Kargah Store — Snapshot Codec
===============================
The snapshot is a JSON-shaped dict keyed by collection name, each
value a list of camelCase records. It is re-serialisable verbatim:
decode(encode(store)) rebuilds an identical store.

Missing collection keys decode to empty collections, not errors.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from kargah.core.primitives import (
    AssemblyOrder,
    Contact,
    Employee,
    Expense,
    Part,
    ProductionLog,
    PurchaseInvoice,
    SalaryPayment,
    SalesOrder,
    work_log_from_dict,
)

WORK_LOGS = "workLogs"

# Decode order matters: employees come first so work logs can be
# decoded into the variant matching their employee's pay type.
RECORD_TYPES = {
    Employee.COLLECTION: Employee,
    Part.COLLECTION: Part,
    PurchaseInvoice.COLLECTION: PurchaseInvoice,
    SalesOrder.COLLECTION: SalesOrder,
    AssemblyOrder.COLLECTION: AssemblyOrder,
    ProductionLog.COLLECTION: ProductionLog,
    SalaryPayment.COLLECTION: SalaryPayment,
    Expense.COLLECTION: Expense,
    Contact.COLLECTION: Contact,
}

COLLECTIONS: Tuple[str, ...] = (
    Employee.COLLECTION,
    WORK_LOGS,
    Part.COLLECTION,
    PurchaseInvoice.COLLECTION,
    SalesOrder.COLLECTION,
    AssemblyOrder.COLLECTION,
    ProductionLog.COLLECTION,
    SalaryPayment.COLLECTION,
    Expense.COLLECTION,
    Contact.COLLECTION,
)


def encode_snapshot(collections: Dict[str, Tuple[Any, ...]]) -> dict:
    return {
        name: [record.to_dict() for record in collections.get(name, ())]
        for name in COLLECTIONS
    }


def decode_snapshot(data: Dict[str, Any] | None) -> Dict[str, Tuple[Any, ...]]:
    data = data or {}
    decoded: Dict[str, Tuple[Any, ...]] = {}
    for name, record_type in RECORD_TYPES.items():
        decoded[name] = tuple(
            record_type.from_dict(item) for item in (data.get(name) or ())
        )

    pay_types = {e.id: e.pay_type for e in decoded[Employee.COLLECTION]}
    decoded[WORK_LOGS] = tuple(
        work_log_from_dict(item, pay_types.get(int(item["employeeId"])))
        for item in (data.get(WORK_LOGS) or ())
    )
    return decoded
