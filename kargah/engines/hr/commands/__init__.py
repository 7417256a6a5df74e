"""
Kargah HR Engine — Request Commands
=====================================
Employees, work logs and salary payments.

Work log requests carry both ``hours_worked`` and ``worked_day``;
the service keeps the one matching the employee's pay type.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from kargah.core.commands.base import Command, build_command
from kargah.core.commands.errors import ValidationError
from kargah.core.commands.validation import (
    require_date,
    require_id,
    require_non_negative,
    require_positive,
    require_text,
)
from kargah.core.primitives import ZERO, PayType


# ══════════════════════════════════════════════════════════════
# COMMAND TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

HR_EMPLOYEE_ADD_REQUEST = "hr.employee.add.request"
HR_EMPLOYEE_EDIT_REQUEST = "hr.employee.edit.request"
HR_EMPLOYEE_DELETE_REQUEST = "hr.employee.delete.request"
HR_WORK_LOG_ADD_REQUEST = "hr.worklog.add.request"
HR_WORK_LOG_EDIT_REQUEST = "hr.worklog.edit.request"
HR_WORK_LOG_DELETE_REQUEST = "hr.worklog.delete.request"
HR_SALARY_PAY_REQUEST = "hr.salary.pay.request"

HR_COMMAND_TYPES = frozenset({
    HR_EMPLOYEE_ADD_REQUEST,
    HR_EMPLOYEE_EDIT_REQUEST,
    HR_EMPLOYEE_DELETE_REQUEST,
    HR_WORK_LOG_ADD_REQUEST,
    HR_WORK_LOG_EDIT_REQUEST,
    HR_WORK_LOG_DELETE_REQUEST,
    HR_SALARY_PAY_REQUEST,
})


# ══════════════════════════════════════════════════════════════
# EMPLOYEES
# ══════════════════════════════════════════════════════════════

def _validate_employee(request) -> None:
    require_id(request.employee_id, "employee_id")
    require_text(request.name, "name")
    if not isinstance(request.pay_type, PayType):
        raise ValidationError("pay_type must be PayType enum.")
    require_non_negative(request.hourly_rate, "hourly_rate")
    require_non_negative(request.daily_rate, "daily_rate")
    require_non_negative(request.overtime_rate, "overtime_rate")


def _employee_payload(request) -> dict:
    return {
        "employee_id": request.employee_id,
        "name": request.name.strip(),
        "pay_type": request.pay_type,
        "hourly_rate": request.hourly_rate,
        "daily_rate": request.daily_rate,
        "overtime_rate": request.overtime_rate,
    }


@dataclass(frozen=True)
class EmployeeAddRequest:
    employee_id: int
    name: str
    pay_type: PayType = PayType.HOURLY
    hourly_rate: Decimal = ZERO
    daily_rate: Decimal = ZERO
    overtime_rate: Decimal = ZERO

    def __post_init__(self):
        _validate_employee(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_EMPLOYEE_ADD_REQUEST, _employee_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class EmployeeEditRequest:
    employee_id: int
    name: str
    pay_type: PayType = PayType.HOURLY
    hourly_rate: Decimal = ZERO
    daily_rate: Decimal = ZERO
    overtime_rate: Decimal = ZERO

    def __post_init__(self):
        _validate_employee(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_EMPLOYEE_EDIT_REQUEST, _employee_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class EmployeeDeleteRequest:
    """Deleting an employee also deletes their work logs."""
    employee_id: int

    def __post_init__(self):
        require_id(self.employee_id, "employee_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_EMPLOYEE_DELETE_REQUEST, {"employee_id": self.employee_id},
            command_id=command_id, issued_at=issued_at,
        )


# ══════════════════════════════════════════════════════════════
# WORK LOGS
# ══════════════════════════════════════════════════════════════

def _validate_work_log(request) -> None:
    require_id(request.work_log_id, "work_log_id")
    require_id(request.employee_id, "employee_id")
    require_date(request.date, "date")
    require_non_negative(request.hours_worked, "hours_worked")
    require_non_negative(request.overtime_hours, "overtime_hours")
    if not isinstance(request.worked_day, bool):
        raise ValidationError("worked_day must be a boolean.")


def _work_log_payload(request) -> dict:
    return {
        "work_log_id": request.work_log_id,
        "employee_id": request.employee_id,
        "date": request.date,
        "hours_worked": request.hours_worked,
        "worked_day": request.worked_day,
        "overtime_hours": request.overtime_hours,
        "description": request.description,
    }


@dataclass(frozen=True)
class WorkLogAddRequest:
    work_log_id: int
    employee_id: int
    date: date
    hours_worked: Decimal = ZERO
    worked_day: bool = True
    overtime_hours: Decimal = ZERO
    description: Optional[str] = None

    def __post_init__(self):
        _validate_work_log(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_WORK_LOG_ADD_REQUEST, _work_log_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class WorkLogEditRequest:
    work_log_id: int
    employee_id: int
    date: date
    hours_worked: Decimal = ZERO
    worked_day: bool = True
    overtime_hours: Decimal = ZERO
    description: Optional[str] = None

    def __post_init__(self):
        _validate_work_log(self)

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_WORK_LOG_EDIT_REQUEST, _work_log_payload(self),
            command_id=command_id, issued_at=issued_at,
        )


@dataclass(frozen=True)
class WorkLogDeleteRequest:
    work_log_id: int

    def __post_init__(self):
        require_id(self.work_log_id, "work_log_id")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_WORK_LOG_DELETE_REQUEST, {"work_log_id": self.work_log_id},
            command_id=command_id, issued_at=issued_at,
        )


# ══════════════════════════════════════════════════════════════
# SALARY PAYMENTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SalaryPayRequest:
    """Append a (possibly partial) payment against a salary period."""
    payment_id: int
    employee_id: int
    period_start: date
    period_end: date
    amount: Decimal
    payment_date: date
    notes: Optional[str] = None

    def __post_init__(self):
        require_id(self.payment_id, "payment_id")
        require_id(self.employee_id, "employee_id")
        require_date(self.period_start, "period_start")
        require_date(self.period_end, "period_end")
        require_date(self.payment_date, "payment_date")
        require_positive(self.amount, "amount")
        if self.period_start > self.period_end:
            raise ValidationError("period_start must not be after period_end.")

    def to_command(self, *, command_id: uuid.UUID, issued_at: datetime) -> Command:
        return build_command(
            HR_SALARY_PAY_REQUEST,
            {
                "payment_id": self.payment_id,
                "employee_id": self.employee_id,
                "period_start": self.period_start,
                "period_end": self.period_end,
                "amount": self.amount,
                "payment_date": self.payment_date,
                "notes": self.notes,
            },
            command_id=command_id, issued_at=issued_at,
        )
