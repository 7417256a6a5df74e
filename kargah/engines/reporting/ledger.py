"""
Kargah Reporting Engine — Ledger Aggregator
=============================================
Period financial report over orders, purchases, work logs and
expenses, each filtered by its ``date`` within an inclusive range.

    total_revenue        = Σ total_amount        (delivered orders)
    total_cogs           = Σ cost_of_goods_sold  (delivered orders, missing → 0)
    total_purchase_costs = Σ total_amount        (purchases, informational)
    total_salaries       = Σ per-employee salary (work logs)
    total_expenses       = Σ amount              (expenses)
    net_profit           = revenue − cogs − salaries − expenses

Product profitability values cost at report time, so it may differ
from the cost_of_goods_sold frozen on each order at delivery.

Every function here is pure: same store + same range → equal output.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from kargah.core.config import CostingDiscipline
from kargah.core.primitives import (
    ZERO,
    Employee,
    Expense,
    HourlyWorkLog,
    OrderStatus,
    Part,
    PurchaseInvoice,
    SalesOrder,
    sum_amounts,
)
from kargah.core.store import EntityStore
from kargah.core.time import DateRange
from kargah.engines.hr.payroll import SalaryBreakdown, compute_salary
from kargah.engines.inventory.valuation import resolve_cost


# ══════════════════════════════════════════════════════════════
# REPORT RECORDS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductProfitability:
    product_id: int
    product_name: str
    quantity_sold: Decimal
    total_revenue: Decimal
    total_cogs: Decimal

    @property
    def total_profit(self) -> Decimal:
        return self.total_revenue - self.total_cogs

    def to_dict(self) -> dict:
        return {
            "product_id": self.product_id,
            "product_name": self.product_name,
            "quantity_sold": self.quantity_sold,
            "total_revenue": self.total_revenue,
            "total_cogs": self.total_cogs,
            "total_profit": self.total_profit,
        }


@dataclass(frozen=True)
class SalaryReport:
    employee_id: int
    employee_name: str
    total_hours: Decimal
    total_days: Decimal
    total_overtime: Decimal
    base_salary: Decimal
    overtime_salary: Decimal

    @property
    def total_salary(self) -> Decimal:
        return self.base_salary + self.overtime_salary

    @classmethod
    def from_breakdown(cls, breakdown: SalaryBreakdown) -> SalaryReport:
        return cls(
            employee_id=breakdown.employee_id,
            employee_name=breakdown.employee_name,
            total_hours=breakdown.total_hours,
            total_days=breakdown.total_days,
            total_overtime=breakdown.total_overtime,
            base_salary=breakdown.base_salary,
            overtime_salary=breakdown.overtime_salary,
        )

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "total_hours": self.total_hours,
            "total_days": self.total_days,
            "total_overtime": self.total_overtime,
            "base_salary": self.base_salary,
            "overtime_salary": self.overtime_salary,
            "total_salary": self.total_salary,
        }


@dataclass(frozen=True)
class FinancialReport:
    date_range: DateRange
    total_revenue: Decimal
    total_cogs: Decimal
    total_purchase_costs: Decimal
    total_salaries: Decimal
    total_expenses: Decimal
    salary_reports: Tuple[SalaryReport, ...]
    product_profitability: Tuple[ProductProfitability, ...]

    @property
    def net_profit(self) -> Decimal:
        return (
            self.total_revenue
            - self.total_cogs
            - self.total_salaries
            - self.total_expenses
        )

    def to_dict(self) -> dict:
        return {
            "start": self.date_range.start.isoformat() if self.date_range.start else None,
            "end": self.date_range.end.isoformat() if self.date_range.end else None,
            "total_revenue": self.total_revenue,
            "total_cogs": self.total_cogs,
            "total_purchase_costs": self.total_purchase_costs,
            "total_salaries": self.total_salaries,
            "total_expenses": self.total_expenses,
            "net_profit": self.net_profit,
            "salary_reports": [r.to_dict() for r in self.salary_reports],
            "product_profitability": [p.to_dict() for p in self.product_profitability],
        }


# ══════════════════════════════════════════════════════════════
# FILTERS
# ══════════════════════════════════════════════════════════════

def delivered_orders(store: EntityStore, date_range: DateRange) -> Tuple[SalesOrder, ...]:
    return store.filter(
        SalesOrder.COLLECTION,
        lambda o: o.status == OrderStatus.DELIVERED and date_range.contains(o.date),
    )


def _in_range(store: EntityStore, collection: str, date_range: DateRange):
    return store.filter(collection, lambda r: date_range.contains(r.date))


# ══════════════════════════════════════════════════════════════
# AGGREGATES
# ══════════════════════════════════════════════════════════════

def salary_breakdowns(store: EntityStore, date_range: DateRange) -> List[SalaryBreakdown]:
    logs = _in_range(store, HourlyWorkLog.COLLECTION, date_range)
    return [compute_salary(employee, logs) for employee in store.all(Employee.COLLECTION)]


def salary_reports(store: EntityStore, date_range: DateRange) -> Tuple[SalaryReport, ...]:
    """Per-employee salary for the range; employees earning nothing are omitted."""
    return tuple(
        SalaryReport.from_breakdown(b)
        for b in salary_breakdowns(store, date_range)
        if b.total_salary != 0
    )


def product_profitability(
    store: EntityStore,
    date_range: DateRange,
    *,
    discipline: CostingDiscipline = CostingDiscipline.RECURSIVE,
) -> Tuple[ProductProfitability, ...]:
    """
    Delivered line items grouped by product, in first-seen order.
    Lines whose product no longer exists are skipped.
    """
    rows: Dict[int, dict] = {}
    for order in delivered_orders(store, date_range):
        for item in order.items:
            product = store.get(Part.COLLECTION, item.product_id)
            if product is None:
                continue
            unit_cost = resolve_cost(store, item.product_id, discipline=discipline)
            row = rows.setdefault(item.product_id, {
                "product_name": product.name,
                "quantity_sold": ZERO,
                "total_revenue": ZERO,
                "total_cogs": ZERO,
            })
            row["quantity_sold"] += item.quantity
            row["total_revenue"] += item.quantity * item.price
            row["total_cogs"] += unit_cost * item.quantity

    return tuple(
        ProductProfitability(product_id=product_id, **row)
        for product_id, row in rows.items()
    )


def get_filtered_report(
    store: EntityStore,
    date_range: Optional[DateRange] = None,
    *,
    discipline: CostingDiscipline = CostingDiscipline.RECURSIVE,
) -> FinancialReport:
    date_range = date_range or DateRange.unbounded()
    delivered = delivered_orders(store, date_range)
    breakdowns = salary_breakdowns(store, date_range)

    return FinancialReport(
        date_range=date_range,
        total_revenue=sum_amounts(o.total_amount for o in delivered),
        total_cogs=sum_amounts(o.cost_of_goods_sold or ZERO for o in delivered),
        total_purchase_costs=sum_amounts(
            p.total_amount for p in _in_range(store, PurchaseInvoice.COLLECTION, date_range)
        ),
        total_salaries=sum_amounts(b.total_salary for b in breakdowns),
        total_expenses=sum_amounts(
            e.amount for e in _in_range(store, Expense.COLLECTION, date_range)
        ),
        salary_reports=tuple(
            SalaryReport.from_breakdown(b) for b in breakdowns if b.total_salary != 0
        ),
        product_profitability=product_profitability(
            store, date_range, discipline=discipline,
        ),
    )
