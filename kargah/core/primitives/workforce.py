"""
Kargah Workforce Primitive — Employees, Work Logs, Salary Payments
====================================================================
Work logs are a tagged union selected by the employee's pay type:

    HOURLY → HourlyWorkLog (hours_worked)
    DAILY  → DailyWorkLog  (worked_day)

Both variants carry overtime hours. Salary payments are an
append-only ledger against a computed period salary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional, Union

from kargah.core.primitives.amounts import ZERO, amount_to_json, to_amount
from kargah.core.time.periods import require_day


class PayType(Enum):
    HOURLY = "HOURLY"
    DAILY = "DAILY"


@dataclass(frozen=True)
class Employee:
    COLLECTION: ClassVar[str] = "employees"

    id: int
    name: str
    pay_type: PayType
    hourly_rate: Decimal = ZERO
    daily_rate: Decimal = ZERO
    overtime_rate: Decimal = ZERO

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "payType": self.pay_type.value,
            "hourlyRate": amount_to_json(self.hourly_rate),
            "dailyRate": amount_to_json(self.daily_rate),
            "overtimeRate": amount_to_json(self.overtime_rate),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Employee:
        return cls(
            id=int(data["id"]),
            name=data["name"],
            pay_type=PayType(data.get("payType", PayType.HOURLY.value)),
            hourly_rate=to_amount(data.get("hourlyRate")),
            daily_rate=to_amount(data.get("dailyRate")),
            overtime_rate=to_amount(data.get("overtimeRate")),
        )


# ══════════════════════════════════════════════════════════════
# WORK LOGS (tagged union)
# ══════════════════════════════════════════════════════════════

def _base_log_dict(log) -> dict:
    data = {
        "id": log.id,
        "employeeId": log.employee_id,
        "date": log.date.isoformat(),
        "overtimeHours": amount_to_json(log.overtime_hours),
    }
    if log.description:
        data["description"] = log.description
    return data


@dataclass(frozen=True)
class HourlyWorkLog:
    COLLECTION: ClassVar[str] = "workLogs"
    PAY_TYPE: ClassVar[PayType] = PayType.HOURLY

    id: int
    employee_id: int
    date: date
    hours_worked: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    description: Optional[str] = None

    def to_dict(self) -> dict:
        data = _base_log_dict(self)
        data["hoursWorked"] = amount_to_json(self.hours_worked)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> HourlyWorkLog:
        return cls(
            id=int(data["id"]),
            employee_id=int(data["employeeId"]),
            date=require_day(data["date"], "date"),
            hours_worked=to_amount(data.get("hoursWorked")),
            overtime_hours=to_amount(data.get("overtimeHours")),
            description=data.get("description") or None,
        )


@dataclass(frozen=True)
class DailyWorkLog:
    COLLECTION: ClassVar[str] = "workLogs"
    PAY_TYPE: ClassVar[PayType] = PayType.DAILY

    id: int
    employee_id: int
    date: date
    worked_day: bool = True
    overtime_hours: Decimal = ZERO
    description: Optional[str] = None

    @property
    def days_worked(self) -> Decimal:
        return Decimal(1) if self.worked_day else ZERO

    def to_dict(self) -> dict:
        data = _base_log_dict(self)
        data["workedDay"] = self.worked_day
        return data

    @classmethod
    def from_dict(cls, data: dict) -> DailyWorkLog:
        return cls(
            id=int(data["id"]),
            employee_id=int(data["employeeId"]),
            date=require_day(data["date"], "date"),
            worked_day=bool(data.get("workedDay", False)),
            overtime_hours=to_amount(data.get("overtimeHours")),
            description=data.get("description") or None,
        )


WorkLog = Union[HourlyWorkLog, DailyWorkLog]

WORK_LOG_VARIANTS = {
    PayType.HOURLY: HourlyWorkLog,
    PayType.DAILY: DailyWorkLog,
}


def work_log_from_dict(data: dict, pay_type: Optional[PayType] = None) -> WorkLog:
    """
    Decode a stored work log into its variant.

    The discriminating key decides (``workedDay`` or ``hoursWorked``),
    so a log keeps its variant after its employee changes pay type.
    A log carrying neither follows the employee's pay type.
    """
    if "workedDay" in data:
        pay_type = PayType.DAILY
    elif "hoursWorked" in data:
        pay_type = PayType.HOURLY
    elif pay_type is None:
        pay_type = PayType.HOURLY
    return WORK_LOG_VARIANTS[pay_type].from_dict(data)


# ══════════════════════════════════════════════════════════════
# SALARY PAYMENTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SalaryPayment:
    COLLECTION: ClassVar[str] = "salaryPayments"

    id: int
    employee_id: int
    period_start: date
    period_end: date
    amount: Decimal
    payment_date: date
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "employeeId": self.employee_id,
            "periodStart": self.period_start.isoformat(),
            "periodEnd": self.period_end.isoformat(),
            "amount": amount_to_json(self.amount),
            "paymentDate": self.payment_date.isoformat(),
        }
        if self.notes:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> SalaryPayment:
        return cls(
            id=int(data["id"]),
            employee_id=int(data["employeeId"]),
            period_start=require_day(data["periodStart"], "periodStart"),
            period_end=require_day(data["periodEnd"], "periodEnd"),
            amount=to_amount(data["amount"]),
            payment_date=require_day(data["paymentDate"], "paymentDate"),
            notes=data.get("notes") or None,
        )
