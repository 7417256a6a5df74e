"""
Kargah HR Engine Tests
========================
Employees, pay-type specific work logs, salary computation,
salary payments and statements.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

NOW = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)
D = Decimal
MAY_1 = date(2024, 5, 1)
MAY_31 = date(2024, 5, 31)


def kw():
    return dict(command_id=uuid.uuid4(), issued_at=NOW)


def make_service(store=None):
    from kargah.core.store import EntityStore
    from kargah.core.time import SequentialIdProvider
    from kargah.engines.hr import HRService
    return HRService(store=store or EntityStore(), id_provider=SequentialIdProvider(300))


def hire(service, employee_id, pay_type="HOURLY", hourly=0, daily=0, overtime=0):
    from kargah.core.primitives import PayType
    from kargah.engines.hr.commands import EmployeeAddRequest
    return service.execute(EmployeeAddRequest(
        employee_id=employee_id, name=f"Employee {employee_id}",
        pay_type=PayType(pay_type), hourly_rate=D(hourly),
        daily_rate=D(daily), overtime_rate=D(overtime),
    ).to_command(**kw()))


def log_work(service, log_id, employee_id, day, hours=0, worked_day=True, overtime=0):
    from kargah.engines.hr.commands import WorkLogAddRequest
    return service.execute(WorkLogAddRequest(
        work_log_id=log_id, employee_id=employee_id, date=day,
        hours_worked=D(hours), worked_day=worked_day, overtime_hours=D(overtime),
    ).to_command(**kw()))


def pay(service, payment_id, employee_id, amount, start=MAY_1, end=MAY_31):
    from kargah.engines.hr.commands import SalaryPayRequest
    return service.execute(SalaryPayRequest(
        payment_id=payment_id, employee_id=employee_id, period_start=start,
        period_end=end, amount=D(amount), payment_date=end,
    ).to_command(**kw()))


# ══════════════════════════════════════════════════════════════
# REQUESTS
# ══════════════════════════════════════════════════════════════

class TestHRRequests:

    def test_employee_command(self):
        from kargah.core.primitives import PayType
        from kargah.engines.hr.commands import EmployeeAddRequest
        cmd = EmployeeAddRequest(
            employee_id=1, name=" Reza ", pay_type=PayType.DAILY, daily_rate=D(800),
        ).to_command(**kw())
        assert cmd.command_type == "hr.employee.add.request"
        assert cmd.payload["name"] == "Reza"

    def test_pay_type_must_be_enum(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.hr.commands import EmployeeAddRequest
        with pytest.raises(ValidationError, match="pay_type"):
            EmployeeAddRequest(employee_id=1, name="Reza", pay_type="HOURLY")

    def test_negative_rate_rejected(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.hr.commands import EmployeeAddRequest
        with pytest.raises(ValidationError, match="hourly_rate"):
            EmployeeAddRequest(employee_id=1, name="Reza", hourly_rate=D(-1))

    def test_salary_period_order(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.hr.commands import SalaryPayRequest
        with pytest.raises(ValidationError, match="period_start"):
            SalaryPayRequest(
                payment_id=1, employee_id=1, period_start=MAY_31, period_end=MAY_1,
                amount=D(10), payment_date=MAY_31,
            )


# ══════════════════════════════════════════════════════════════
# EMPLOYEES AND WORK LOGS
# ══════════════════════════════════════════════════════════════

class TestEmployeesAndLogs:

    def test_hourly_employee_gets_hourly_logs(self):
        from kargah.core.primitives import HourlyWorkLog
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100)
        result = log_work(service, 10, 1, MAY_1, hours=8)
        assert result.event_type == "hr.worklog.added.v1"
        log = service.store.get("workLogs", 10)
        assert isinstance(log, HourlyWorkLog)
        assert log.hours_worked == D(8)

    def test_daily_employee_gets_daily_logs(self):
        from kargah.core.primitives import DailyWorkLog
        service = make_service()
        hire(service, 2, "DAILY", daily=800)
        log_work(service, 11, 2, MAY_1, hours=8, worked_day=False)
        log = service.store.get("workLogs", 11)
        assert isinstance(log, DailyWorkLog)
        assert log.days_worked == D(0)

    def test_log_for_missing_employee(self):
        from kargah.core.commands import NotFoundError
        with pytest.raises(NotFoundError, match="Employee #9"):
            log_work(make_service(), 1, 9, MAY_1, hours=1)

    def test_edit_work_log(self):
        from kargah.engines.hr.commands import WorkLogEditRequest
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100)
        log_work(service, 10, 1, MAY_1, hours=8)
        result = service.execute(WorkLogEditRequest(
            work_log_id=10, employee_id=1, date=MAY_1, hours_worked=D(6),
        ).to_command(**kw()))
        assert result.event_type == "hr.worklog.edited.v1"
        assert service.store.get("workLogs", 10).hours_worked == D(6)

    def test_delete_work_log(self):
        from kargah.engines.hr.commands import WorkLogDeleteRequest
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100)
        log_work(service, 10, 1, MAY_1, hours=8)
        service.execute(WorkLogDeleteRequest(work_log_id=10).to_command(**kw()))
        assert service.store.all("workLogs") == ()

    def test_delete_employee_cascades_work_logs(self):
        from kargah.engines.hr.commands import EmployeeDeleteRequest
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100)
        hire(service, 2, "DAILY", daily=800)
        log_work(service, 10, 1, MAY_1, hours=8)
        log_work(service, 11, 2, MAY_1)
        result = service.execute(EmployeeDeleteRequest(employee_id=1).to_command(**kw()))
        assert result.event_type == "hr.employee.deleted.v1"
        assert result["deleted_work_log_ids"] == (10,)
        assert [log.id for log in service.store.all("workLogs")] == [11]

    def test_edit_missing_employee(self):
        from kargah.core.commands import NotFoundError
        from kargah.engines.hr.commands import EmployeeEditRequest
        with pytest.raises(NotFoundError):
            make_service().execute(
                EmployeeEditRequest(employee_id=4, name="Nobody").to_command(**kw())
            )

    def test_pay_type_change_keeps_existing_variants(self):
        from kargah.core.primitives import HourlyWorkLog, PayType
        from kargah.engines.hr.commands import EmployeeEditRequest
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100)
        log_work(service, 10, 1, MAY_1, hours=8)
        service.execute(EmployeeEditRequest(
            employee_id=1, name="Employee 1", pay_type=PayType.DAILY, daily_rate=D(900),
        ).to_command(**kw()))
        assert isinstance(service.store.get("workLogs", 10), HourlyWorkLog)


# ══════════════════════════════════════════════════════════════
# SALARY COMPUTATION
# ══════════════════════════════════════════════════════════════

class TestSalary:

    def test_hourly_salary(self):
        from kargah.engines.hr import compute_salary
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100, overtime=150)
        log_work(service, 10, 1, MAY_1, hours=8, overtime=2)
        log_work(service, 11, 1, date(2024, 5, 2), hours=6)
        employee = service.store.get("employees", 1)
        breakdown = compute_salary(employee, service.store.all("workLogs"))
        assert breakdown.total_hours == D(14)
        assert breakdown.base_salary == D(1400)
        assert breakdown.overtime_salary == D(300)
        assert breakdown.total_salary == D(1700)

    def test_daily_salary_counts_worked_days(self):
        from kargah.engines.hr import compute_salary
        service = make_service()
        hire(service, 2, "DAILY", daily=800, overtime=120)
        log_work(service, 10, 2, MAY_1, worked_day=True, overtime=1)
        log_work(service, 11, 2, date(2024, 5, 2), worked_day=True)
        log_work(service, 12, 2, date(2024, 5, 3), worked_day=False)
        employee = service.store.get("employees", 2)
        breakdown = compute_salary(employee, service.store.all("workLogs"))
        assert breakdown.total_days == D(2)
        assert breakdown.total_salary == D(1720)

    def test_other_employees_logs_ignored(self):
        from kargah.engines.hr import compute_salary
        service = make_service()
        hire(service, 1, "HOURLY", hourly=100)
        hire(service, 2, "HOURLY", hourly=100)
        log_work(service, 10, 2, MAY_1, hours=8)
        employee = service.store.get("employees", 1)
        assert compute_salary(employee, service.store.all("workLogs")).total_salary == D(0)


# ══════════════════════════════════════════════════════════════
# SALARY PAYMENTS AND STATEMENTS
# ══════════════════════════════════════════════════════════════

class TestSalaryStatement:

    def setup_method(self):
        self.service = make_service()
        hire(self.service, 1, "HOURLY", hourly=100)
        log_work(self.service, 10, 1, MAY_1, hours=10)
        log_work(self.service, 11, 1, date(2024, 6, 1), hours=10)

    def test_payment_recorded(self):
        result = pay(self.service, 20, 1, 400)
        assert result.event_type == "hr.salary.paid.v1"
        assert self.service.store.get("salaryPayments", 20).amount == D(400)

    def test_statement_counts_period_logs_only(self):
        from kargah.engines.hr import salary_statement
        statement = salary_statement(self.service.store, 1, MAY_1, MAY_31)
        assert statement.total_salary == D(1000)

    def test_partial_payments_accumulate(self):
        from kargah.engines.hr import salary_statement
        pay(self.service, 20, 1, 400)
        pay(self.service, 21, 1, 350)
        statement = salary_statement(self.service.store, 1, MAY_1, MAY_31)
        assert statement.paid == D(750)
        assert statement.remaining == D(250)
        assert not statement.is_settled

    def test_other_periods_do_not_count(self):
        from kargah.engines.hr import salary_statement
        pay(self.service, 20, 1, 1000, start=date(2024, 5, 1), end=date(2024, 5, 15))
        statement = salary_statement(self.service.store, 1, MAY_1, MAY_31)
        assert statement.paid == D(0)

    def test_settled(self):
        from kargah.engines.hr import salary_statement
        pay(self.service, 20, 1, 1000)
        assert salary_statement(self.service.store, 1, MAY_1, MAY_31).is_settled

    def test_payment_for_missing_employee(self):
        from kargah.core.commands import NotFoundError
        with pytest.raises(NotFoundError):
            pay(self.service, 20, 9, 100)
