"""
Kargah Workshop Session
=========================
The application-facing facade. A session owns one EntityStore, the
engine rules, a Clock and an id provider, and exposes one method per
command plus the report queries.

Every command method:
    1. builds and validates a Request (ValidationError on bad shape)
    2. converts it to a Command stamped by the session clock
    3. routes it through the CommandBus to its engine service
    4. returns the ExecutionResult, or raises a typed CommandRejected

Usage:
    session = WorkshopSession()
    part_id = session.add_part(name="Steel sheet", cost=1000)["part_id"]
    session.add_purchase(date="2024-05-01", items=[("Steel sheet", 10, 1000)])
    report = session.get_filtered_report("2024-05-01", "2024-05-31")
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from kargah.core.commands import CommandBus, ExecutionResult
from kargah.core.commands.errors import ValidationError
from kargah.core.config import EngineRules, rules_from_settings
from kargah.core.primitives import (
    BomComponent,
    ContactRole,
    OrderItem,
    PayType,
    PurchaseItem,
    optional_amount,
    to_amount,
)
from kargah.core.store import EntityStore
from kargah.core.time import (
    Clock,
    ClockIdProvider,
    DateRange,
    IdProvider,
    SystemClock,
    parse_day,
    today,
)
from kargah.engines.accounting import AccountingService
from kargah.engines.accounting.commands import (
    ExpenseAddRequest,
    ExpenseDeleteRequest,
    ExpenseEditRequest,
)
from kargah.engines.customer import CustomerService
from kargah.engines.customer.commands import (
    ContactAddRequest,
    ContactDeleteRequest,
    ContactEditRequest,
)
from kargah.engines.hr import HRService, SalaryStatement, salary_statement
from kargah.engines.hr.commands import (
    EmployeeAddRequest,
    EmployeeDeleteRequest,
    EmployeeEditRequest,
    SalaryPayRequest,
    WorkLogAddRequest,
    WorkLogDeleteRequest,
    WorkLogEditRequest,
)
from kargah.engines.inventory import InventoryService, resolve_cost
from kargah.engines.inventory.commands import (
    PartAddRequest,
    PartDeleteRequest,
    PartEditRequest,
)
from kargah.engines.procurement import ProcurementService
from kargah.engines.procurement.commands import (
    PurchaseAddRequest,
    PurchaseDeleteRequest,
    PurchaseEditRequest,
)
from kargah.engines.reporting import (
    CustomerStatement,
    DashboardSummary,
    FinancialReport,
    customer_statement,
    dashboard_summary,
    get_filtered_report,
    monthly_revenue,
)
from kargah.engines.sales import SalesService
from kargah.engines.sales.commands import (
    OrderAddRequest,
    OrderDeleteRequest,
    OrderDeliverRequest,
    PaymentAddRequest,
)
from kargah.engines.workshop import WorkshopService
from kargah.engines.workshop.commands import (
    AssemblyOrderAddRequest,
    AssemblyOrderCompleteRequest,
    AssemblyOrderDeleteRequest,
    ProductionLogAddRequest,
    ProductionLogDeleteRequest,
    ProductionLogEditRequest,
)
from kargah.persistence.base import SnapshotRepository

logger = logging.getLogger("kargah.session")


# ══════════════════════════════════════════════════════════════
# INPUT COERCION
# ══════════════════════════════════════════════════════════════

def _amount(value: Any, field_name: str) -> Decimal:
    try:
        return to_amount(value)
    except ValueError as exc:
        raise ValidationError(f"{field_name}: {exc}") from exc


def _cost(value: Any) -> Optional[Decimal]:
    if value == "":
        return None
    try:
        return optional_amount(value)
    except ValueError as exc:
        raise ValidationError(f"cost: {exc}") from exc


def _day(value: Any, field_name: str) -> Optional[date]:
    try:
        return parse_day(value)
    except ValueError as exc:
        raise ValidationError(f"{field_name}: {exc}") from exc


def _required_day(value: Any, field_name: str) -> date:
    day = _day(value, field_name)
    if day is None:
        raise ValidationError(f"{field_name} must be a date.")
    return day


def _range(start: Any, end: Any) -> DateRange:
    first, last = _day(start, "start"), _day(end, "end")
    try:
        return DateRange(start=first, end=last)
    except ValueError as exc:
        raise ValidationError(f"range: {exc}") from exc


def _field(line: Any, *names: str) -> Any:
    for name in names:
        if name in line:
            return line[name]
    raise ValidationError(f"line is missing '{names[0]}'.")


def _components(lines: Optional[Iterable[Any]]) -> tuple:
    """BomComponent records, (part_id, quantity) pairs or mappings."""
    result = []
    for line in lines or ():
        if isinstance(line, BomComponent):
            result.append(line)
        elif isinstance(line, Mapping):
            result.append(BomComponent(
                part_id=_field(line, "part_id", "partId"),
                quantity=_amount(_field(line, "quantity"), "quantity"),
            ))
        else:
            part_id, quantity = line
            result.append(BomComponent(part_id=part_id, quantity=_amount(quantity, "quantity")))
    return tuple(result)


def _purchase_items(lines: Iterable[Any]) -> tuple:
    """PurchaseItem records, (name, quantity, unit_price) triples or mappings."""
    result = []
    for line in lines or ():
        if isinstance(line, PurchaseItem):
            result.append(line)
        elif isinstance(line, Mapping):
            result.append(PurchaseItem(
                item_name=_field(line, "item_name", "itemName"),
                quantity=_amount(_field(line, "quantity"), "quantity"),
                unit_price=_amount(_field(line, "unit_price", "unitPrice"), "unit_price"),
            ))
        else:
            name, quantity, unit_price = line
            result.append(PurchaseItem(
                item_name=name,
                quantity=_amount(quantity, "quantity"),
                unit_price=_amount(unit_price, "unit_price"),
            ))
    return tuple(result)


def _order_items(lines: Iterable[Any]) -> tuple:
    """OrderItem records, (product_id, quantity, price) triples or mappings."""
    result = []
    for line in lines or ():
        if isinstance(line, OrderItem):
            result.append(line)
        elif isinstance(line, Mapping):
            result.append(OrderItem(
                product_id=_field(line, "product_id", "productId"),
                quantity=_amount(_field(line, "quantity"), "quantity"),
                price=_amount(_field(line, "price"), "price"),
            ))
        else:
            product_id, quantity, price = line
            result.append(OrderItem(
                product_id=product_id,
                quantity=_amount(quantity, "quantity"),
                price=_amount(price, "price"),
            ))
    return tuple(result)


def _roles(values: Iterable[Any]) -> frozenset:
    try:
        return frozenset(
            v if isinstance(v, ContactRole) else ContactRole(str(v).upper())
            for v in values or ()
        )
    except ValueError as exc:
        raise ValidationError(f"roles: {exc}") from exc


def _pay_type(value: Any) -> PayType:
    if isinstance(value, PayType):
        return value
    try:
        return PayType(str(value).upper())
    except ValueError as exc:
        raise ValidationError(f"pay_type: {exc}") from exc


# ══════════════════════════════════════════════════════════════
# SESSION
# ══════════════════════════════════════════════════════════════

class WorkshopSession:
    def __init__(
        self,
        *,
        store: Optional[EntityStore] = None,
        rules: Optional[EngineRules] = None,
        clock: Optional[Clock] = None,
        id_provider: Optional[IdProvider] = None,
    ):
        self._store = store or EntityStore()
        self._rules = rules or rules_from_settings()
        self._clock = clock or SystemClock()
        self._ids = id_provider or ClockIdProvider(self._clock)
        self._bus = CommandBus()

        services = dict(store=self._store, rules=self._rules, id_provider=self._ids)
        for service in (
            InventoryService(**services),
            ProcurementService(**services),
            SalesService(**services),
            WorkshopService(**services),
            HRService(**services),
            AccountingService(**services),
            CustomerService(**services),
        ):
            service.register(self._bus)

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def rules(self) -> EngineRules:
        return self._rules

    def _submit(self, request) -> ExecutionResult:
        command = request.to_command(
            command_id=self._ids.new_command_id(),
            issued_at=self._clock.now_utc(),
        )
        return self._bus.handle(command)

    def _new_id(self, entity_id: Optional[int]) -> int:
        return entity_id if entity_id is not None else self._ids.next_id()

    # ══════════════════════════════════════════════════════════
    # PARTS
    # ══════════════════════════════════════════════════════════

    def add_part(
        self,
        *,
        name: str,
        is_assembly: bool = False,
        stock: Any = 0,
        threshold: Any = 0,
        cost: Any = None,
        components: Optional[Iterable[Any]] = None,
        part_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(PartAddRequest(
            part_id=self._new_id(part_id),
            name=name,
            is_assembly=is_assembly,
            stock=_amount(stock, "stock"),
            threshold=_amount(threshold, "threshold"),
            cost=_cost(cost),
            components=_components(components),
        ))

    def edit_part(
        self,
        part_id: int,
        *,
        name: str,
        is_assembly: bool = False,
        stock: Any = 0,
        threshold: Any = 0,
        cost: Any = None,
        components: Optional[Iterable[Any]] = None,
    ) -> ExecutionResult:
        return self._submit(PartEditRequest(
            part_id=part_id,
            name=name,
            is_assembly=is_assembly,
            stock=_amount(stock, "stock"),
            threshold=_amount(threshold, "threshold"),
            cost=_cost(cost),
            components=_components(components),
        ))

    def delete_part(self, part_id: int) -> ExecutionResult:
        return self._submit(PartDeleteRequest(part_id=part_id))

    # ══════════════════════════════════════════════════════════
    # PURCHASES
    # ══════════════════════════════════════════════════════════

    def add_purchase(
        self,
        *,
        date: Any,
        items: Iterable[Any],
        supplier_id: Optional[int] = None,
        purchase_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(PurchaseAddRequest(
            purchase_id=self._new_id(purchase_id),
            supplier_id=supplier_id,
            date=_required_day(date, "date"),
            items=_purchase_items(items),
        ))

    def edit_purchase(
        self,
        purchase_id: int,
        *,
        date: Any,
        items: Iterable[Any],
        supplier_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(PurchaseEditRequest(
            purchase_id=purchase_id,
            supplier_id=supplier_id,
            date=_required_day(date, "date"),
            items=_purchase_items(items),
        ))

    def delete_purchase(self, purchase_id: int) -> ExecutionResult:
        return self._submit(PurchaseDeleteRequest(purchase_id=purchase_id))

    # ══════════════════════════════════════════════════════════
    # SALES ORDERS
    # ══════════════════════════════════════════════════════════

    def add_order(
        self,
        *,
        date: Any,
        items: Iterable[Any],
        customer_id: Optional[int] = None,
        delivery_date: Any = None,
        order_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(OrderAddRequest(
            order_id=self._new_id(order_id),
            customer_id=customer_id,
            date=_required_day(date, "date"),
            delivery_date=_day(delivery_date, "delivery_date"),
            items=_order_items(items),
        ))

    def add_payment(self, order_id: int, *, amount: Any, date: Any = None) -> ExecutionResult:
        return self._submit(PaymentAddRequest(
            order_id=order_id,
            amount=_amount(amount, "amount"),
            date=_day(date, "date") or today(self._clock),
        ))

    def deliver_order(self, order_id: int) -> ExecutionResult:
        return self._submit(OrderDeliverRequest(order_id=order_id))

    def delete_order(self, order_id: int) -> ExecutionResult:
        return self._submit(OrderDeleteRequest(order_id=order_id))

    # ══════════════════════════════════════════════════════════
    # ASSEMBLY ORDERS & PRODUCTION LOGS
    # ══════════════════════════════════════════════════════════

    def add_assembly_order(
        self,
        *,
        part_id: int,
        quantity: Any,
        date: Any,
        order_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(AssemblyOrderAddRequest(
            order_id=self._new_id(order_id),
            part_id=part_id,
            quantity=_amount(quantity, "quantity"),
            date=_required_day(date, "date"),
        ))

    def complete_assembly_order(self, order_id: int) -> ExecutionResult:
        return self._submit(AssemblyOrderCompleteRequest(order_id=order_id))

    def delete_assembly_order(self, order_id: int) -> ExecutionResult:
        return self._submit(AssemblyOrderDeleteRequest(order_id=order_id))

    def add_production_log(
        self,
        *,
        assembly_order_id: int,
        employee_id: int,
        date: Any,
        hours_spent: Any,
        log_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(ProductionLogAddRequest(
            log_id=self._new_id(log_id),
            assembly_order_id=assembly_order_id,
            employee_id=employee_id,
            date=_required_day(date, "date"),
            hours_spent=_amount(hours_spent, "hours_spent"),
        ))

    def edit_production_log(
        self,
        log_id: int,
        *,
        assembly_order_id: int,
        employee_id: int,
        date: Any,
        hours_spent: Any,
    ) -> ExecutionResult:
        return self._submit(ProductionLogEditRequest(
            log_id=log_id,
            assembly_order_id=assembly_order_id,
            employee_id=employee_id,
            date=_required_day(date, "date"),
            hours_spent=_amount(hours_spent, "hours_spent"),
        ))

    def delete_production_log(self, log_id: int) -> ExecutionResult:
        return self._submit(ProductionLogDeleteRequest(log_id=log_id))

    # ══════════════════════════════════════════════════════════
    # EMPLOYEES, WORK LOGS, SALARY
    # ══════════════════════════════════════════════════════════

    def add_employee(
        self,
        *,
        name: str,
        pay_type: Any = PayType.HOURLY,
        hourly_rate: Any = 0,
        daily_rate: Any = 0,
        overtime_rate: Any = 0,
        employee_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(EmployeeAddRequest(
            employee_id=self._new_id(employee_id),
            name=name,
            pay_type=_pay_type(pay_type),
            hourly_rate=_amount(hourly_rate, "hourly_rate"),
            daily_rate=_amount(daily_rate, "daily_rate"),
            overtime_rate=_amount(overtime_rate, "overtime_rate"),
        ))

    def edit_employee(
        self,
        employee_id: int,
        *,
        name: str,
        pay_type: Any = PayType.HOURLY,
        hourly_rate: Any = 0,
        daily_rate: Any = 0,
        overtime_rate: Any = 0,
    ) -> ExecutionResult:
        return self._submit(EmployeeEditRequest(
            employee_id=employee_id,
            name=name,
            pay_type=_pay_type(pay_type),
            hourly_rate=_amount(hourly_rate, "hourly_rate"),
            daily_rate=_amount(daily_rate, "daily_rate"),
            overtime_rate=_amount(overtime_rate, "overtime_rate"),
        ))

    def delete_employee(self, employee_id: int) -> ExecutionResult:
        return self._submit(EmployeeDeleteRequest(employee_id=employee_id))

    def add_work_log(
        self,
        *,
        employee_id: int,
        date: Any,
        hours_worked: Any = 0,
        worked_day: bool = True,
        overtime_hours: Any = 0,
        description: Optional[str] = None,
        work_log_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(WorkLogAddRequest(
            work_log_id=self._new_id(work_log_id),
            employee_id=employee_id,
            date=_required_day(date, "date"),
            hours_worked=_amount(hours_worked, "hours_worked"),
            worked_day=worked_day,
            overtime_hours=_amount(overtime_hours, "overtime_hours"),
            description=description,
        ))

    def edit_work_log(
        self,
        work_log_id: int,
        *,
        employee_id: int,
        date: Any,
        hours_worked: Any = 0,
        worked_day: bool = True,
        overtime_hours: Any = 0,
        description: Optional[str] = None,
    ) -> ExecutionResult:
        return self._submit(WorkLogEditRequest(
            work_log_id=work_log_id,
            employee_id=employee_id,
            date=_required_day(date, "date"),
            hours_worked=_amount(hours_worked, "hours_worked"),
            worked_day=worked_day,
            overtime_hours=_amount(overtime_hours, "overtime_hours"),
            description=description,
        ))

    def delete_work_log(self, work_log_id: int) -> ExecutionResult:
        return self._submit(WorkLogDeleteRequest(work_log_id=work_log_id))

    def pay_salary(
        self,
        *,
        employee_id: int,
        period_start: Any,
        period_end: Any,
        amount: Any,
        payment_date: Any = None,
        notes: Optional[str] = None,
        payment_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(SalaryPayRequest(
            payment_id=self._new_id(payment_id),
            employee_id=employee_id,
            period_start=_required_day(period_start, "period_start"),
            period_end=_required_day(period_end, "period_end"),
            amount=_amount(amount, "amount"),
            payment_date=_day(payment_date, "payment_date") or today(self._clock),
            notes=notes,
        ))

    # ══════════════════════════════════════════════════════════
    # EXPENSES
    # ══════════════════════════════════════════════════════════

    def add_expense(
        self,
        *,
        date: Any,
        description: str,
        amount: Any,
        category: str = "",
        expense_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(ExpenseAddRequest(
            expense_id=self._new_id(expense_id),
            date=_required_day(date, "date"),
            description=description,
            amount=_amount(amount, "amount"),
            category=category,
        ))

    def edit_expense(
        self,
        expense_id: int,
        *,
        date: Any,
        description: str,
        amount: Any,
        category: str = "",
    ) -> ExecutionResult:
        return self._submit(ExpenseEditRequest(
            expense_id=expense_id,
            date=_required_day(date, "date"),
            description=description,
            amount=_amount(amount, "amount"),
            category=category,
        ))

    def delete_expense(self, expense_id: int) -> ExecutionResult:
        return self._submit(ExpenseDeleteRequest(expense_id=expense_id))

    # ══════════════════════════════════════════════════════════
    # CONTACTS
    # ══════════════════════════════════════════════════════════

    def add_contact(
        self,
        *,
        name: str,
        roles: Iterable[Any],
        contact_info: str = "",
        phone: Optional[str] = None,
        address: Optional[str] = None,
        job: Optional[str] = None,
        activity_type: Optional[str] = None,
        contact_id: Optional[int] = None,
    ) -> ExecutionResult:
        return self._submit(ContactAddRequest(
            contact_id=self._new_id(contact_id),
            name=name,
            roles=_roles(roles),
            contact_info=contact_info,
            phone=phone,
            address=address,
            job=job,
            activity_type=activity_type,
        ))

    def edit_contact(
        self,
        contact_id: int,
        *,
        name: str,
        roles: Iterable[Any],
        contact_info: str = "",
        phone: Optional[str] = None,
        address: Optional[str] = None,
        job: Optional[str] = None,
        activity_type: Optional[str] = None,
    ) -> ExecutionResult:
        return self._submit(ContactEditRequest(
            contact_id=contact_id,
            name=name,
            roles=_roles(roles),
            contact_info=contact_info,
            phone=phone,
            address=address,
            job=job,
            activity_type=activity_type,
        ))

    def delete_contact(self, contact_id: int) -> ExecutionResult:
        return self._submit(ContactDeleteRequest(contact_id=contact_id))

    # ══════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════

    def resolve_cost(self, part_id: int) -> Decimal:
        return resolve_cost(
            self._store, part_id, discipline=self._rules.costing_discipline,
        )

    def get_filtered_report(self, start: Any = None, end: Any = None) -> FinancialReport:
        return get_filtered_report(
            self._store,
            _range(start, end),
            discipline=self._rules.costing_discipline,
        )

    def monthly_revenue(self, start: Any = None, end: Any = None):
        return monthly_revenue(self._store, _range(start, end))

    def salary_statement(
        self,
        employee_id: int,
        period_start: Any,
        period_end: Any,
    ) -> SalaryStatement:
        period = _range(
            _required_day(period_start, "period_start"),
            _required_day(period_end, "period_end"),
        )
        return salary_statement(self._store, employee_id, period.start, period.end)

    def dashboard(self, on_day: Any = None) -> DashboardSummary:
        return dashboard_summary(self._store, _day(on_day, "on_day") or today(self._clock))

    def customer_statement(self, contact_id: int) -> CustomerStatement:
        return customer_statement(self._store, contact_id)

    # ══════════════════════════════════════════════════════════
    # SNAPSHOT
    # ══════════════════════════════════════════════════════════

    def snapshot(self) -> dict:
        return self._store.to_snapshot()

    def load_snapshot(self, data: Optional[dict]) -> None:
        """Replace every collection with the snapshot's contents."""
        self._store.replace_all(EntityStore.from_snapshot(data))
        logger.info("Snapshot loaded")

    def save_to(self, repository: SnapshotRepository) -> None:
        repository.save(self.snapshot())

    def load_from(self, repository: SnapshotRepository) -> None:
        self.load_snapshot(repository.load())
