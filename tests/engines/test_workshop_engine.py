"""
Kargah Workshop Engine Tests
==============================
Assembly orders, production logs and the completion recipe:
material and labour costing, all-or-nothing stock deduction,
weighted-average receipt and the PENDING-only rules.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

NOW = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)
DAY = date(2024, 5, 1)
D = Decimal


def kw():
    return dict(command_id=uuid.uuid4(), issued_at=NOW)


def bracket_store(stock_a=100, stock_b=100):
    from kargah.core.primitives import BomComponent, Employee, Part, PayType
    from kargah.core.store import EntityStore
    return EntityStore({
        "parts": [
            Part(id=1, name="A", stock=D(stock_a), cost=D(1000)),
            Part(id=2, name="B", stock=D(stock_b), cost=D(5000)),
            Part(
                id=3, name="Bracket", is_assembly=True, stock=D(0),
                components=(
                    BomComponent(part_id=1, quantity=D(2)),
                    BomComponent(part_id=2, quantity=D(8)),
                ),
            ),
            Part(id=4, name="Empty frame", is_assembly=True),
        ],
        "employees": [
            Employee(id=50, name="Reza", pay_type=PayType.HOURLY, hourly_rate=D(150000)),
            Employee(id=51, name="Sara", pay_type=PayType.DAILY, daily_rate=D(800000)),
        ],
    })


def make_service(store=None, **rules):
    from kargah.core.config import EngineRules
    from kargah.core.time import SequentialIdProvider
    from kargah.engines.workshop import WorkshopService
    return WorkshopService(
        store=store or bracket_store(),
        rules=EngineRules(**rules),
        id_provider=SequentialIdProvider(700),
    )


def open_order(service, order_id=10, part_id=3, quantity=10):
    from kargah.engines.workshop.commands import AssemblyOrderAddRequest
    return service.execute(AssemblyOrderAddRequest(
        order_id=order_id, part_id=part_id, quantity=D(quantity), date=DAY,
    ).to_command(**kw()))


def log_hours(service, log_id, order_id=10, employee_id=50, hours=2):
    from kargah.engines.workshop.commands import ProductionLogAddRequest
    return service.execute(ProductionLogAddRequest(
        log_id=log_id, assembly_order_id=order_id, employee_id=employee_id,
        date=DAY, hours_spent=D(hours),
    ).to_command(**kw()))


def complete(service, order_id=10):
    from kargah.engines.workshop.commands import AssemblyOrderCompleteRequest
    return service.execute(
        AssemblyOrderCompleteRequest(order_id=order_id).to_command(**kw())
    )


# ══════════════════════════════════════════════════════════════
# REQUESTS
# ══════════════════════════════════════════════════════════════

class TestWorkshopRequests:

    def test_assembly_order_command(self):
        from kargah.engines.workshop.commands import AssemblyOrderAddRequest
        cmd = AssemblyOrderAddRequest(
            order_id=1, part_id=3, quantity=D(2), date=DAY,
        ).to_command(**kw())
        assert cmd.command_type == "workshop.assembly.add.request"
        assert cmd.source_engine == "workshop"

    def test_quantity_must_be_positive(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.workshop.commands import AssemblyOrderAddRequest
        with pytest.raises(ValidationError, match="quantity"):
            AssemblyOrderAddRequest(order_id=1, part_id=3, quantity=D(0), date=DAY)

    def test_hours_must_be_positive(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.workshop.commands import ProductionLogAddRequest
        with pytest.raises(ValidationError, match="hours_spent"):
            ProductionLogAddRequest(
                log_id=1, assembly_order_id=1, employee_id=1, date=DAY, hours_spent=D(0),
            )


# ══════════════════════════════════════════════════════════════
# ASSEMBLY ORDERS
# ══════════════════════════════════════════════════════════════

class TestAssemblyOrders:

    def test_open_order_is_pending(self):
        service = make_service()
        result = open_order(service)
        assert result.event_type == "workshop.assembly.added.v1"
        assert result["status"] == "PENDING"
        assert service.store.get("assemblyOrders", 10).is_pending

    def test_target_must_be_assembly(self):
        from kargah.core.commands import ValidationError
        service = make_service()
        with pytest.raises(ValidationError, match="not an assembly"):
            open_order(service, part_id=1)

    def test_target_must_exist(self):
        from kargah.core.commands import NotFoundError
        with pytest.raises(NotFoundError):
            open_order(make_service(), part_id=99)

    def test_delete_pending_cascades_logs(self):
        from kargah.engines.workshop.commands import AssemblyOrderDeleteRequest
        service = make_service()
        open_order(service)
        log_hours(service, 1)
        log_hours(service, 2)
        result = service.execute(
            AssemblyOrderDeleteRequest(order_id=10).to_command(**kw())
        )
        assert result["deleted_log_ids"] == (1, 2)
        assert service.store.all("assemblyOrders") == ()
        assert service.store.all("productionLogs") == ()

    def test_delete_completed_rejected(self):
        from kargah.core.commands import InvalidStateError
        from kargah.engines.workshop.commands import AssemblyOrderDeleteRequest
        service = make_service()
        open_order(service)
        complete(service)
        with pytest.raises(InvalidStateError, match="COMPLETED"):
            service.execute(AssemblyOrderDeleteRequest(order_id=10).to_command(**kw()))


# ══════════════════════════════════════════════════════════════
# COMPLETION
# ══════════════════════════════════════════════════════════════

class TestCompletion:

    def test_material_labour_and_unit_cost(self):
        service = make_service()
        open_order(service)
        log_hours(service, 1, hours=2)
        result = complete(service)
        assert result.event_type == "workshop.assembly.completed.v1"
        assert result["material_cost"] == D(420000)
        assert result["labor_cost"] == D(300000)
        assert result["cost_per_unit"] == D(72000)

    def test_completion_receives_into_assembly(self):
        service = make_service()
        open_order(service)
        log_hours(service, 1, hours=2)
        complete(service)
        bracket = service.store.get("parts", 3)
        assert bracket.stock == D(10)
        assert bracket.cost == D(72000)

    def test_completion_deducts_components(self):
        service = make_service()
        open_order(service)
        complete(service)
        assert service.store.get("parts", 1).stock == D(80)
        assert service.store.get("parts", 2).stock == D(20)

    def test_costs_frozen_on_order(self):
        service = make_service()
        open_order(service)
        log_hours(service, 1, hours=2)
        complete(service)
        order = service.store.get("assemblyOrders", 10)
        assert order.status.value == "COMPLETED"
        assert order.material_cost == D(420000)
        assert order.labor_cost == D(300000)

    def test_daily_employee_rate_uses_hours_per_day(self):
        service = make_service()
        open_order(service, quantity=1)
        log_hours(service, 1, employee_id=51, hours=4)
        assert complete(service)["labor_cost"] == D(400000)

    def test_hours_per_day_is_configurable(self):
        service = make_service(hours_per_day=D(10))
        open_order(service, quantity=1)
        log_hours(service, 1, employee_id=51, hours=5)
        assert complete(service)["labor_cost"] == D(400000)

    def test_shortage_changes_nothing(self):
        from kargah.core.commands import InsufficientStockError
        service = make_service(bracket_store(stock_a=100, stock_b=79))
        open_order(service)
        before = service.store.to_snapshot()
        with pytest.raises(InsufficientStockError) as exc_info:
            complete(service)
        assert exc_info.value.part_name == "B"
        assert exc_info.value.required == D(80)
        assert service.store.to_snapshot() == before

    def test_missing_recipe(self):
        from kargah.core.commands import MissingRecipeError
        service = make_service()
        open_order(service, part_id=4)
        with pytest.raises(MissingRecipeError, match="Empty frame"):
            complete(service)

    def test_complete_twice_rejected(self):
        from kargah.core.commands import InvalidStateError
        service = make_service()
        open_order(service)
        complete(service)
        with pytest.raises(InvalidStateError):
            complete(service)
        assert service.store.get("parts", 3).stock == D(10)

    def test_second_run_averages_cost(self):
        service = make_service(bracket_store(stock_a=200, stock_b=200))
        open_order(service, order_id=10)
        log_hours(service, 1, order_id=10, hours=2)
        complete(service, 10)
        open_order(service, order_id=11)
        complete(service, 11)
        bracket = service.store.get("parts", 3)
        assert bracket.stock == D(20)
        # (10 × 72000 + 10 × 42000) / 20
        assert bracket.cost == D(57000)

    def test_labour_of_deleted_employee_is_zero(self):
        from kargah.core.primitives import ProductionLog
        from kargah.core.store import ChangeSet
        service = make_service()
        open_order(service, quantity=1)
        service.store.commit(ChangeSet(upserts=(ProductionLog(
            id=1, assembly_order_id=10, employee_id=404, date=DAY, hours_spent=D(3),
        ),)))
        assert complete(service)["labor_cost"] == D(0)


# ══════════════════════════════════════════════════════════════
# PRODUCTION LOGS
# ══════════════════════════════════════════════════════════════

class TestProductionLogs:

    def test_log_requires_existing_employee(self):
        from kargah.core.commands import NotFoundError
        service = make_service()
        open_order(service)
        with pytest.raises(NotFoundError, match="Employee"):
            log_hours(service, 1, employee_id=404)

    def test_log_against_completed_order_rejected(self):
        from kargah.core.commands import InvalidStateError
        service = make_service()
        open_order(service)
        complete(service)
        with pytest.raises(InvalidStateError):
            log_hours(service, 1)

    def test_edit_log(self):
        from kargah.engines.workshop.commands import ProductionLogEditRequest
        service = make_service()
        open_order(service)
        log_hours(service, 1, hours=2)
        result = service.execute(ProductionLogEditRequest(
            log_id=1, assembly_order_id=10, employee_id=50, date=DAY, hours_spent=D(3),
        ).to_command(**kw()))
        assert result.event_type == "workshop.productionlog.edited.v1"
        assert service.store.get("productionLogs", 1).hours_spent == D(3)

    def test_edit_log_of_completed_order_rejected(self):
        from kargah.core.commands import InvalidStateError
        from kargah.engines.workshop.commands import ProductionLogEditRequest
        service = make_service()
        open_order(service, order_id=10)
        open_order(service, order_id=11)
        log_hours(service, 1, order_id=10)
        complete(service, 10)
        with pytest.raises(InvalidStateError):
            service.execute(ProductionLogEditRequest(
                log_id=1, assembly_order_id=11, employee_id=50, date=DAY, hours_spent=D(1),
            ).to_command(**kw()))

    def test_delete_log(self):
        from kargah.engines.workshop.commands import ProductionLogDeleteRequest
        service = make_service()
        open_order(service)
        log_hours(service, 1)
        service.execute(ProductionLogDeleteRequest(log_id=1).to_command(**kw()))
        assert service.store.all("productionLogs") == ()

    def test_delete_log_of_completed_order_rejected(self):
        from kargah.core.commands import InvalidStateError
        from kargah.engines.workshop.commands import ProductionLogDeleteRequest
        service = make_service()
        open_order(service)
        log_hours(service, 1)
        complete(service)
        with pytest.raises(InvalidStateError):
            service.execute(ProductionLogDeleteRequest(log_id=1).to_command(**kw()))
        assert len(service.store.all("productionLogs")) == 1


# ══════════════════════════════════════════════════════════════
# LABOUR HELPERS
# ══════════════════════════════════════════════════════════════

class TestLabourHelpers:

    def test_effective_hourly_rate(self):
        from kargah.core.primitives import Employee, PayType
        from kargah.engines.workshop import effective_hourly_rate
        hourly = Employee(id=1, name="H", pay_type=PayType.HOURLY, hourly_rate=D(120))
        daily = Employee(id=2, name="D", pay_type=PayType.DAILY, daily_rate=D(800))
        assert effective_hourly_rate(hourly) == D(120)
        assert effective_hourly_rate(daily) == D(100)
        assert effective_hourly_rate(daily, D(10)) == D(80)
