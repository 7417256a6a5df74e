"""
Kargah Reporting Engine — Dashboard, Monthly Revenue, Customer Statement
==========================================================================
Read-only views over the entity store. ``today`` is passed in by the
caller (from its Clock) so the alerts are deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Tuple

from kargah.core.primitives import (
    ZERO,
    Contact,
    Employee,
    HourlyWorkLog,
    OrderStatus,
    Part,
    SalesOrder,
    sum_amounts,
)
from kargah.core.store import EntityStore
from kargah.core.time import DateRange
from kargah.engines.inventory.valuation import low_stock_parts
from kargah.engines.reporting.ledger import delivered_orders


# ══════════════════════════════════════════════════════════════
# MONTHLY REVENUE
# ══════════════════════════════════════════════════════════════

def monthly_revenue(
    store: EntityStore,
    date_range: Optional[DateRange] = None,
) -> Tuple[Tuple[str, Decimal], ...]:
    """Delivered revenue per 'YYYY-MM', oldest month first."""
    totals: Dict[str, Decimal] = {}
    for order in delivered_orders(store, date_range or DateRange.unbounded()):
        month = order.date.strftime("%Y-%m")
        totals[month] = totals.get(month, ZERO) + order.total_amount
    return tuple(sorted(totals.items()))


# ══════════════════════════════════════════════════════════════
# DASHBOARD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DashboardSummary:
    today: date
    total_revenue: Decimal
    gross_profit: Decimal
    pending_order_count: int
    overdue_unpaid_orders: Tuple[SalesOrder, ...]
    attendance_alerts: Tuple[Employee, ...]
    low_stock_parts: Tuple[Part, ...]

    def to_dict(self) -> dict:
        return {
            "today": self.today.isoformat(),
            "total_revenue": self.total_revenue,
            "gross_profit": self.gross_profit,
            "pending_order_count": self.pending_order_count,
            "overdue_unpaid_order_ids": [o.id for o in self.overdue_unpaid_orders],
            "attendance_alert_employee_ids": [e.id for e in self.attendance_alerts],
            "low_stock_part_ids": [p.id for p in self.low_stock_parts],
        }


def dashboard_summary(store: EntityStore, today: date) -> DashboardSummary:
    """
    overdue unpaid:    PENDING orders whose delivery date is before today
    attendance alerts: employees with no work log dated today
    """
    delivered = delivered_orders(store, DateRange.unbounded())
    revenue = sum_amounts(o.total_amount for o in delivered)
    cogs = sum_amounts(o.cost_of_goods_sold or ZERO for o in delivered)

    pending = store.filter(
        SalesOrder.COLLECTION, lambda o: o.status == OrderStatus.PENDING,
    )
    overdue = tuple(
        o for o in pending
        if o.delivery_date is not None and o.delivery_date < today
    )
    logged_today = {
        log.employee_id
        for log in store.filter(HourlyWorkLog.COLLECTION, lambda log: log.date == today)
    }
    absent = store.filter(Employee.COLLECTION, lambda e: e.id not in logged_today)

    return DashboardSummary(
        today=today,
        total_revenue=revenue,
        gross_profit=revenue - cogs,
        pending_order_count=len(pending),
        overdue_unpaid_orders=overdue,
        attendance_alerts=absent,
        low_stock_parts=low_stock_parts(store),
    )


# ══════════════════════════════════════════════════════════════
# CUSTOMER STATEMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CustomerStatement:
    contact_id: int
    contact_name: str
    order_count: int
    total_ordered: Decimal
    total_paid: Decimal

    @property
    def outstanding_balance(self) -> Decimal:
        return self.total_ordered - self.total_paid

    def to_dict(self) -> dict:
        return {
            "contact_id": self.contact_id,
            "contact_name": self.contact_name,
            "order_count": self.order_count,
            "total_ordered": self.total_ordered,
            "total_paid": self.total_paid,
            "outstanding_balance": self.outstanding_balance,
        }


def customer_statement(store: EntityStore, contact_id: int) -> CustomerStatement:
    contact = store.require(Contact.COLLECTION, contact_id, "Contact")
    orders = store.filter(SalesOrder.COLLECTION, lambda o: o.customer_id == contact_id)
    return CustomerStatement(
        contact_id=contact.id,
        contact_name=contact.name,
        order_count=len(orders),
        total_ordered=sum_amounts(o.total_amount for o in orders),
        total_paid=sum_amounts(o.total_paid for o in orders),
    )
