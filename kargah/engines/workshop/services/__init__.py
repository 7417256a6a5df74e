"""
Kargah Workshop Engine — Application Service
==============================================
Assembly orders, production logs and the completion recipe.

Completion (one ChangeSet, after every check has passed):
    1. deduct component.quantity × orderQuantity from each component
    2. material = Σ resolve_cost(component) × component.quantity × orderQuantity
    3. labour   = Σ hours_spent × effective_hourly_rate(employee)
    4. costPerUnit = (material + labour) / orderQuantity
    5. weighted-average receipt of (orderQuantity, costPerUnit) into the assembly
    6. freeze material/labour cost on the order, status COMPLETED
"""

from __future__ import annotations

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable

from kargah.core.commands.base import Command
from kargah.core.commands.errors import raise_rejection
from kargah.core.primitives import (
    ZERO,
    AssemblyOrder,
    AssemblyStatus,
    Employee,
    Part,
    PayType,
    ProductionLog,
)
from kargah.core.store import ChangeSet, EntityStore
from kargah.engines.inventory.policies import (
    bom_requirements,
    check_bom_sufficiency,
    insufficient_stock_policy,
)
from kargah.engines.inventory.valuation import (
    apply_weighted_average_receipt,
    resolve_cost,
)
from kargah.engines.service import EngineService, Handler, HandlerResult
from kargah.engines.workshop.commands import (
    WORKSHOP_ASSEMBLY_ADD_REQUEST,
    WORKSHOP_ASSEMBLY_COMPLETE_REQUEST,
    WORKSHOP_ASSEMBLY_DELETE_REQUEST,
    WORKSHOP_PRODUCTION_LOG_ADD_REQUEST,
    WORKSHOP_PRODUCTION_LOG_DELETE_REQUEST,
    WORKSHOP_PRODUCTION_LOG_EDIT_REQUEST,
)
from kargah.engines.workshop.events import resolve_workshop_event_type
from kargah.engines.workshop.policies import (
    order_must_be_pending_policy,
    recipe_required_policy,
    target_must_be_assembly_policy,
)


# ══════════════════════════════════════════════════════════════
# LABOUR COSTING
# ══════════════════════════════════════════════════════════════

def effective_hourly_rate(employee: Employee, hours_per_day: Decimal = Decimal(8)) -> Decimal:
    if employee.pay_type == PayType.HOURLY:
        return employee.hourly_rate
    return employee.daily_rate / hours_per_day


def labor_cost(
    store: EntityStore,
    logs: Iterable[ProductionLog],
    hours_per_day: Decimal = Decimal(8),
) -> Decimal:
    """Logs whose employee no longer exists contribute nothing."""
    total = ZERO
    for log in logs:
        employee = store.get(Employee.COLLECTION, log.employee_id)
        if employee is None:
            continue
        total += log.hours_spent * effective_hourly_rate(employee, hours_per_day)
    return total


# ══════════════════════════════════════════════════════════════
# APPLICATION SERVICE
# ══════════════════════════════════════════════════════════════

class WorkshopService(EngineService):
    ENGINE = "workshop"

    def _handlers(self) -> Dict[str, Handler]:
        return {
            WORKSHOP_ASSEMBLY_ADD_REQUEST: self._add_assembly_order,
            WORKSHOP_ASSEMBLY_COMPLETE_REQUEST: self._complete_assembly_order,
            WORKSHOP_ASSEMBLY_DELETE_REQUEST: self._delete_assembly_order,
            WORKSHOP_PRODUCTION_LOG_ADD_REQUEST: self._add_production_log,
            WORKSHOP_PRODUCTION_LOG_EDIT_REQUEST: self._edit_production_log,
            WORKSHOP_PRODUCTION_LOG_DELETE_REQUEST: self._delete_production_log,
        }

    def _resolve_event_type(self, command_type: str):
        return resolve_workshop_event_type(command_type)

    def _logs_of(self, order_id: int):
        return self._store.filter(
            ProductionLog.COLLECTION, lambda log: log.assembly_order_id == order_id,
        )

    # ── Assembly orders ───────────────────────────────────────

    def _add_assembly_order(self, command: Command) -> HandlerResult:
        payload = command.payload
        part = self._store.require(Part.COLLECTION, payload["part_id"], "Part")
        raise_rejection(target_must_be_assembly_policy(part))

        order = AssemblyOrder(
            id=payload["order_id"],
            part_id=part.id,
            quantity=payload["quantity"],
            date=payload["date"],
        )
        return ChangeSet(upserts=(order,)), {
            "order_id": order.id,
            "part_id": order.part_id,
            "status": order.status.value,
        }

    def _complete_assembly_order(self, command: Command) -> HandlerResult:
        order = self._store.require(
            AssemblyOrder.COLLECTION, command.payload["order_id"], "AssemblyOrder",
        )
        raise_rejection(order_must_be_pending_policy(order, "complete it"))
        target = self._store.require(Part.COLLECTION, order.part_id, "Part")
        raise_rejection(recipe_required_policy(target))
        raise_rejection(insufficient_stock_policy(
            check_bom_sufficiency(self._store, target, order.quantity)
        ))

        discipline = self._rules.costing_discipline
        material = ZERO
        for component in target.components:
            unit = resolve_cost(self._store, component.part_id, discipline=discipline)
            material += unit * component.quantity * order.quantity
        labour = labor_cost(self._store, self._logs_of(order.id), self._rules.hours_per_day)
        cost_per_unit = (material + labour) / order.quantity

        upserts = []
        for part_id, quantity in bom_requirements(target.components, order.quantity).items():
            part = self._store.get(Part.COLLECTION, part_id)
            upserts.append(replace(part, stock=part.stock - quantity))
        received = apply_weighted_average_receipt(target, order.quantity, cost_per_unit)
        completed = replace(
            order,
            status=AssemblyStatus.COMPLETED,
            material_cost=material,
            labor_cost=labour,
        )

        return ChangeSet(upserts=tuple(upserts) + (received, completed)), {
            "order_id": completed.id,
            "part_id": target.id,
            "material_cost": material,
            "labor_cost": labour,
            "cost_per_unit": cost_per_unit,
            "status": completed.status.value,
        }

    def _delete_assembly_order(self, command: Command) -> HandlerResult:
        order = self._store.require(
            AssemblyOrder.COLLECTION, command.payload["order_id"], "AssemblyOrder",
        )
        raise_rejection(order_must_be_pending_policy(order, "delete it"))

        logs = self._logs_of(order.id)
        deletions = ((AssemblyOrder.COLLECTION, order.id),) + tuple(
            (ProductionLog.COLLECTION, log.id) for log in logs
        )
        return ChangeSet(deletions=deletions), {
            "order_id": order.id,
            "deleted_log_ids": tuple(log.id for log in logs),
        }

    # ── Production logs ───────────────────────────────────────

    def _production_log_from_payload(self, payload: dict, action: str) -> ProductionLog:
        order = self._store.require(
            AssemblyOrder.COLLECTION, payload["assembly_order_id"], "AssemblyOrder",
        )
        raise_rejection(order_must_be_pending_policy(order, action))
        self._store.require(Employee.COLLECTION, payload["employee_id"], "Employee")
        return ProductionLog(
            id=payload["log_id"],
            assembly_order_id=order.id,
            employee_id=payload["employee_id"],
            date=payload["date"],
            hours_spent=payload["hours_spent"],
        )

    def _add_production_log(self, command: Command) -> HandlerResult:
        log = self._production_log_from_payload(command.payload, "log production")
        return ChangeSet(upserts=(log,)), {
            "log_id": log.id,
            "assembly_order_id": log.assembly_order_id,
        }

    def _edit_production_log(self, command: Command) -> HandlerResult:
        existing = self._store.require(
            ProductionLog.COLLECTION, command.payload["log_id"], "ProductionLog",
        )
        current_order = self._store.get(AssemblyOrder.COLLECTION, existing.assembly_order_id)
        if current_order is not None:
            raise_rejection(order_must_be_pending_policy(current_order, "edit its production logs"))
        log = self._production_log_from_payload(command.payload, "edit its production logs")
        return ChangeSet(upserts=(log,)), {
            "log_id": log.id,
            "assembly_order_id": log.assembly_order_id,
        }

    def _delete_production_log(self, command: Command) -> HandlerResult:
        log = self._store.require(
            ProductionLog.COLLECTION, command.payload["log_id"], "ProductionLog",
        )
        order = self._store.get(AssemblyOrder.COLLECTION, log.assembly_order_id)
        if order is not None:
            raise_rejection(order_must_be_pending_policy(order, "delete its production logs"))
        return (
            ChangeSet(deletions=((ProductionLog.COLLECTION, log.id),)),
            {"log_id": log.id},
        )
