"""
Kargah HR Engine — Application Service
========================================
Employees (delete cascades their work logs), work logs built as the
variant matching the employee's pay type, and the append-only
salary payment ledger.
"""

from __future__ import annotations

from typing import Dict

from kargah.core.commands.base import Command
from kargah.core.primitives import (
    DailyWorkLog,
    Employee,
    HourlyWorkLog,
    PayType,
    SalaryPayment,
    WorkLog,
)
from kargah.core.store import ChangeSet
from kargah.engines.hr.commands import (
    HR_EMPLOYEE_ADD_REQUEST,
    HR_EMPLOYEE_DELETE_REQUEST,
    HR_EMPLOYEE_EDIT_REQUEST,
    HR_SALARY_PAY_REQUEST,
    HR_WORK_LOG_ADD_REQUEST,
    HR_WORK_LOG_DELETE_REQUEST,
    HR_WORK_LOG_EDIT_REQUEST,
)
from kargah.engines.hr.events import resolve_hr_event_type
from kargah.engines.service import EngineService, Handler, HandlerResult

WORK_LOGS = HourlyWorkLog.COLLECTION


def build_work_log(employee: Employee, payload: dict) -> WorkLog:
    if employee.pay_type == PayType.HOURLY:
        return HourlyWorkLog(
            id=payload["work_log_id"],
            employee_id=employee.id,
            date=payload["date"],
            hours_worked=payload["hours_worked"],
            overtime_hours=payload["overtime_hours"],
            description=payload["description"],
        )
    return DailyWorkLog(
        id=payload["work_log_id"],
        employee_id=employee.id,
        date=payload["date"],
        worked_day=payload["worked_day"],
        overtime_hours=payload["overtime_hours"],
        description=payload["description"],
    )


class HRService(EngineService):
    ENGINE = "hr"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            HR_EMPLOYEE_ADD_REQUEST: self._add_employee,
            HR_EMPLOYEE_EDIT_REQUEST: self._edit_employee,
            HR_EMPLOYEE_DELETE_REQUEST: self._delete_employee,
            HR_WORK_LOG_ADD_REQUEST: self._add_work_log,
            HR_WORK_LOG_EDIT_REQUEST: self._edit_work_log,
            HR_WORK_LOG_DELETE_REQUEST: self._delete_work_log,
            HR_SALARY_PAY_REQUEST: self._pay_salary,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_hr_event_type(command_type)

    # ── Employees ─────────────────────────────────────────────

    def _employee_from_payload(self, payload: dict) -> Employee:
        return Employee(
            id=payload["employee_id"],
            name=payload["name"],
            pay_type=payload["pay_type"],
            hourly_rate=payload["hourly_rate"],
            daily_rate=payload["daily_rate"],
            overtime_rate=payload["overtime_rate"],
        )

    def _add_employee(self, command: Command) -> HandlerResult:
        employee = self._employee_from_payload(command.payload)
        return ChangeSet(upserts=(employee,)), {"employee_id": employee.id}

    def _edit_employee(self, command: Command) -> HandlerResult:
        employee = self._employee_from_payload(command.payload)
        self._store.require(Employee.COLLECTION, employee.id, "Employee")
        return ChangeSet(upserts=(employee,)), {"employee_id": employee.id}

    def _delete_employee(self, command: Command) -> HandlerResult:
        employee_id = command.payload["employee_id"]
        self._store.require(Employee.COLLECTION, employee_id, "Employee")
        logs = self._store.filter(WORK_LOGS, lambda log: log.employee_id == employee_id)
        deletions = ((Employee.COLLECTION, employee_id),) + tuple(
            (WORK_LOGS, log.id) for log in logs
        )
        return ChangeSet(deletions=deletions), {
            "employee_id": employee_id,
            "deleted_work_log_ids": tuple(log.id for log in logs),
        }

    # ── Work logs ─────────────────────────────────────────────

    def _add_work_log(self, command: Command) -> HandlerResult:
        payload = command.payload
        employee = self._store.require(Employee.COLLECTION, payload["employee_id"], "Employee")
        log = build_work_log(employee, payload)
        return ChangeSet(upserts=(log,)), {"work_log_id": log.id, "employee_id": employee.id}

    def _edit_work_log(self, command: Command) -> HandlerResult:
        payload = command.payload
        self._store.require(WORK_LOGS, payload["work_log_id"], "WorkLog")
        employee = self._store.require(Employee.COLLECTION, payload["employee_id"], "Employee")
        log = build_work_log(employee, payload)
        return ChangeSet(upserts=(log,)), {"work_log_id": log.id, "employee_id": employee.id}

    def _delete_work_log(self, command: Command) -> HandlerResult:
        work_log_id = command.payload["work_log_id"]
        self._store.require(WORK_LOGS, work_log_id, "WorkLog")
        return (
            ChangeSet(deletions=((WORK_LOGS, work_log_id),)),
            {"work_log_id": work_log_id},
        )

    # ── Salary payments ───────────────────────────────────────

    def _pay_salary(self, command: Command) -> HandlerResult:
        payload = command.payload
        self._store.require(Employee.COLLECTION, payload["employee_id"], "Employee")
        payment = SalaryPayment(
            id=payload["payment_id"],
            employee_id=payload["employee_id"],
            period_start=payload["period_start"],
            period_end=payload["period_end"],
            amount=payload["amount"],
            payment_date=payload["payment_date"],
            notes=payload["notes"],
        )
        return ChangeSet(upserts=(payment,)), {
            "payment_id": payment.id,
            "employee_id": payment.employee_id,
            "amount": payment.amount,
        }
