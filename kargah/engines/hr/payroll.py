"""
Kargah HR Engine — Payroll Computation
========================================
Period salary from work logs:

    base     = total_hours × hourly_rate   (HOURLY)
             = total_days  × daily_rate    (DAILY)
    overtime = total_overtime × overtime_rate
    total    = base + overtime

A salary statement sets the computed salary against the payments
recorded for exactly the same period.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from kargah.core.primitives import (
    ZERO,
    DailyWorkLog,
    Employee,
    HourlyWorkLog,
    PayType,
    SalaryPayment,
    WorkLog,
    sum_amounts,
)
from kargah.core.store import EntityStore
from kargah.core.time import DateRange


@dataclass(frozen=True)
class SalaryBreakdown:
    employee_id: int
    employee_name: str
    pay_type: PayType
    total_hours: Decimal
    total_days: Decimal
    total_overtime: Decimal
    base_salary: Decimal
    overtime_salary: Decimal

    @property
    def total_salary(self) -> Decimal:
        return self.base_salary + self.overtime_salary


def compute_salary(employee: Employee, logs: Iterable[WorkLog]) -> SalaryBreakdown:
    total_hours = ZERO
    total_days = ZERO
    total_overtime = ZERO
    for log in logs:
        if log.employee_id != employee.id:
            continue
        if isinstance(log, HourlyWorkLog):
            total_hours += log.hours_worked
        elif isinstance(log, DailyWorkLog):
            total_days += log.days_worked
        total_overtime += log.overtime_hours

    if employee.pay_type == PayType.HOURLY:
        base = total_hours * employee.hourly_rate
    else:
        base = total_days * employee.daily_rate

    return SalaryBreakdown(
        employee_id=employee.id,
        employee_name=employee.name,
        pay_type=employee.pay_type,
        total_hours=total_hours,
        total_days=total_days,
        total_overtime=total_overtime,
        base_salary=base,
        overtime_salary=total_overtime * employee.overtime_rate,
    )


# ══════════════════════════════════════════════════════════════
# SALARY STATEMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SalaryStatement:
    period_start: date
    period_end: date
    breakdown: SalaryBreakdown
    paid: Decimal

    @property
    def total_salary(self) -> Decimal:
        return self.breakdown.total_salary

    @property
    def remaining(self) -> Decimal:
        return self.total_salary - self.paid

    @property
    def is_settled(self) -> bool:
        return self.remaining <= 0


def salary_statement(
    store: EntityStore,
    employee_id: int,
    period_start: date,
    period_end: date,
) -> SalaryStatement:
    employee = store.require(Employee.COLLECTION, employee_id, "Employee")
    period = DateRange(period_start, period_end)
    logs = store.filter(
        HourlyWorkLog.COLLECTION,
        lambda log: log.employee_id == employee_id and period.contains(log.date),
    )
    payments = store.filter(
        SalaryPayment.COLLECTION,
        lambda p: (
            p.employee_id == employee_id
            and p.period_start == period_start
            and p.period_end == period_end
        ),
    )
    return SalaryStatement(
        period_start=period_start,
        period_end=period_end,
        breakdown=compute_salary(employee, logs),
        paid=sum_amounts(p.amount for p in payments),
    )
