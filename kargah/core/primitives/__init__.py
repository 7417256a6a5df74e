"""
Kargah Core Primitives
========================
Immutable entity records and Decimal amount helpers.
"""

from kargah.core.primitives.amounts import (
    ZERO,
    amount_to_json,
    optional_amount,
    sum_amounts,
    to_amount,
)
from kargah.core.primitives.inventory import BomComponent, Part
from kargah.core.primitives.ledger import Expense
from kargah.core.primitives.party import Contact, ContactRole
from kargah.core.primitives.production import (
    AssemblyOrder,
    AssemblyStatus,
    ProductionLog,
)
from kargah.core.primitives.trade import (
    OrderItem,
    OrderStatus,
    Payment,
    PurchaseInvoice,
    PurchaseItem,
    SalesOrder,
    order_total,
    purchase_total,
)
from kargah.core.primitives.workforce import (
    DailyWorkLog,
    Employee,
    HourlyWorkLog,
    PayType,
    SalaryPayment,
    WorkLog,
    work_log_from_dict,
)

__all__ = [
    "ZERO",
    "amount_to_json",
    "optional_amount",
    "sum_amounts",
    "to_amount",
    "BomComponent",
    "Part",
    "Expense",
    "Contact",
    "ContactRole",
    "AssemblyOrder",
    "AssemblyStatus",
    "ProductionLog",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PurchaseInvoice",
    "PurchaseItem",
    "SalesOrder",
    "order_total",
    "purchase_total",
    "DailyWorkLog",
    "Employee",
    "HourlyWorkLog",
    "PayType",
    "SalaryPayment",
    "WorkLog",
    "work_log_from_dict",
]
