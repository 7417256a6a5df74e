"""
Kargah Core Store / Time / Config Tests
=========================================
Entity store commits, the snapshot codec, calendar-day ranges,
id providers, amounts and engine rules.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest


def sample_snapshot():
    return {
        "employees": [
            {"id": 1, "name": "Reza", "payType": "HOURLY",
             "hourlyRate": 100, "dailyRate": 0, "overtimeRate": 150},
            {"id": 2, "name": "Sara", "payType": "DAILY",
             "hourlyRate": 0, "dailyRate": 800, "overtimeRate": 120},
        ],
        "workLogs": [
            {"id": 10, "employeeId": 1, "date": "2024-05-02",
             "hoursWorked": 8, "overtimeHours": 1},
            {"id": 11, "employeeId": 2, "date": "2024-05-02",
             "workedDay": True, "overtimeHours": 0},
        ],
        "parts": [
            {"id": 100, "name": "Steel sheet", "isAssembly": False,
             "stock": 10, "threshold": 5, "cost": 1000},
            {"id": 101, "name": "Cabinet", "isAssembly": True, "stock": 0,
             "threshold": 1, "components": [{"partId": 100, "quantity": 2}]},
        ],
        "orders": [
            {"id": 200, "customerId": None, "date": "2024-05-03", "deliveryDate": "",
             "items": [{"productId": 101, "quantity": 1, "price": 5000}],
             "totalAmount": 5000, "payments": [], "status": "PENDING"},
        ],
    }


# ══════════════════════════════════════════════════════════════
# ENTITY STORE
# ══════════════════════════════════════════════════════════════

class TestEntityStore:

    def test_new_store_has_every_collection_empty(self):
        from kargah.core.store import EntityStore
        from kargah.core.store.snapshot import COLLECTIONS
        store = EntityStore()
        for name in COLLECTIONS:
            assert store.all(name) == ()

    def test_unknown_collection_raises(self):
        from kargah.core.store import EntityStore
        with pytest.raises(ValueError, match="Unknown collection"):
            EntityStore().all("widgets")

    def test_commit_upserts_and_replaces_by_id(self):
        from kargah.core.primitives import Part
        from kargah.core.store import ChangeSet, EntityStore
        store = EntityStore()
        store.commit(ChangeSet(upserts=(Part(id=1, name="Bolt"),)))
        store.commit(ChangeSet(upserts=(Part(id=1, name="Hex bolt"),)))
        assert [p.name for p in store.all("parts")] == ["Hex bolt"]

    def test_commit_deletes(self):
        from kargah.core.primitives import Part
        from kargah.core.store import ChangeSet, EntityStore
        store = EntityStore({"parts": [Part(id=1, name="Bolt"), Part(id=2, name="Nut")]})
        store.commit(ChangeSet(deletions=(("parts", 1),)))
        assert [p.id for p in store.all("parts")] == [2]

    def test_change_set_rejects_foreign_records(self):
        from kargah.core.store import ChangeSet
        with pytest.raises(ValueError):
            ChangeSet(upserts=(object(),))
        with pytest.raises(ValueError):
            ChangeSet(deletions=(("widgets", 1),))

    def test_require_raises_not_found(self):
        from kargah.core.commands import NotFoundError
        from kargah.core.store import EntityStore
        with pytest.raises(NotFoundError, match="Part #9 not found"):
            EntityStore().require("parts", 9, "Part")

    def test_filter(self):
        from kargah.core.primitives import Part
        from kargah.core.store import EntityStore
        store = EntityStore({"parts": [
            Part(id=1, name="Bolt", is_assembly=False),
            Part(id=2, name="Frame", is_assembly=True),
        ]})
        assert [p.id for p in store.filter("parts", lambda p: p.is_assembly)] == [2]

    def test_replace_all(self):
        from kargah.core.primitives import Part
        from kargah.core.store import EntityStore
        store = EntityStore({"parts": [Part(id=1, name="Bolt")]})
        store.replace_all(EntityStore())
        assert store.all("parts") == ()


# ══════════════════════════════════════════════════════════════
# SNAPSHOT CODEC
# ══════════════════════════════════════════════════════════════

class TestSnapshot:

    def test_missing_keys_decode_to_empty(self):
        from kargah.core.store import EntityStore
        store = EntityStore.from_snapshot({"parts": []})
        assert store.all("orders") == ()
        assert store.all("salaryPayments") == ()

    def test_none_decodes_to_empty_store(self):
        from kargah.core.store import EntityStore
        assert EntityStore.from_snapshot(None).all("employees") == ()

    def test_snapshot_reserialises_verbatim(self):
        from kargah.core.store import EntityStore
        data = EntityStore.from_snapshot(sample_snapshot()).to_snapshot()
        again = EntityStore.from_snapshot(data).to_snapshot()
        assert again == data

    def test_encode_lists_every_collection(self):
        from kargah.core.store import EntityStore
        from kargah.core.store.snapshot import COLLECTIONS
        data = EntityStore().to_snapshot()
        assert set(data) == set(COLLECTIONS)

    def test_work_logs_decode_by_variant(self):
        from kargah.core.primitives import DailyWorkLog, HourlyWorkLog
        from kargah.core.store import EntityStore
        store = EntityStore.from_snapshot(sample_snapshot())
        logs = {log.id: log for log in store.all("workLogs")}
        assert isinstance(logs[10], HourlyWorkLog)
        assert logs[10].hours_worked == Decimal(8)
        assert isinstance(logs[11], DailyWorkLog)
        assert logs[11].worked_day is True

    def test_work_log_without_key_follows_pay_type(self):
        from kargah.core.primitives import DailyWorkLog
        from kargah.core.store import EntityStore
        data = sample_snapshot()
        data["workLogs"] = [{"id": 12, "employeeId": 2, "date": "2024-05-04"}]
        log = EntityStore.from_snapshot(data).all("workLogs")[0]
        assert isinstance(log, DailyWorkLog)

    def test_amounts_decode_as_decimal(self):
        from kargah.core.store import EntityStore
        store = EntityStore.from_snapshot(sample_snapshot())
        part = store.get("parts", 100)
        assert part.cost == Decimal(1000)
        assert isinstance(part.stock, Decimal)

    def test_empty_delivery_date_round_trips(self):
        from kargah.core.store import EntityStore
        store = EntityStore.from_snapshot(sample_snapshot())
        order = store.get("orders", 200)
        assert order.delivery_date is None
        assert order.to_dict()["deliveryDate"] == ""

    def test_fractional_amounts_encode_as_float(self):
        from kargah.core.primitives import Part
        from kargah.core.store import EntityStore
        store = EntityStore({"parts": [Part(id=1, name="Wire", cost=Decimal("12.5"))]})
        assert store.to_snapshot()["parts"][0]["cost"] == 12.5


# ══════════════════════════════════════════════════════════════
# CALENDAR DAYS AND RANGES
# ══════════════════════════════════════════════════════════════

class TestPeriods:

    def test_parse_day_accepts_iso_and_datetime(self):
        from kargah.core.time import parse_day
        assert parse_day("2024-05-15") == date(2024, 5, 15)
        assert parse_day("2024-05-15T23:10:00Z") == date(2024, 5, 15)
        assert parse_day(datetime(2024, 5, 15, 8, tzinfo=timezone.utc)) == date(2024, 5, 15)
        assert parse_day("") is None
        assert parse_day(None) is None

    def test_range_is_inclusive_both_ends(self):
        from kargah.core.time import DateRange
        period = DateRange.parse("2024-05-01", "2024-05-31")
        assert period.contains("2024-05-01")
        assert period.contains("2024-05-31")
        assert not period.contains("2024-06-01")
        assert not period.contains("2024-04-30")

    def test_open_ended_ranges(self):
        from kargah.core.time import DateRange
        assert DateRange.parse(None, "2024-05-31").contains("1999-01-01")
        assert DateRange.parse("2024-05-01", None).contains("2099-01-01")
        assert DateRange.unbounded().contains(None)

    def test_start_after_end_raises(self):
        from kargah.core.time import DateRange
        with pytest.raises(ValueError, match="after"):
            DateRange.parse("2024-06-01", "2024-05-01")

    def test_require_day(self):
        from kargah.core.time import require_day
        with pytest.raises(ValueError, match="date"):
            require_day("", "date")


# ══════════════════════════════════════════════════════════════
# CLOCKS AND IDS
# ══════════════════════════════════════════════════════════════

class TestClockAndIds:

    def test_fixed_clock_requires_tz(self):
        from kargah.core.time import FixedClock
        with pytest.raises(ValueError):
            FixedClock(datetime(2024, 5, 1))

    def test_fixed_clock_today_and_advance(self):
        from kargah.core.time import FixedClock, today
        clock = FixedClock(datetime(2024, 5, 1, 23, 0, tzinfo=timezone.utc))
        assert today(clock) == date(2024, 5, 1)
        clock.advance(3600 * 2)
        assert today(clock) == date(2024, 5, 2)

    def test_clock_ids_are_unique_under_stalled_clock(self):
        from kargah.core.time import ClockIdProvider, FixedClock
        ids = ClockIdProvider(FixedClock(datetime(2024, 5, 1, tzinfo=timezone.utc)))
        minted = [ids.next_id() for _ in range(5)]
        assert len(set(minted)) == 5
        assert minted == sorted(minted)

    def test_sequential_ids_are_deterministic(self):
        from kargah.core.time import SequentialIdProvider
        a, b = SequentialIdProvider(10), SequentialIdProvider(10)
        assert [a.next_id(), a.next_id()] == [10, 11]
        assert a.new_command_id() == b.new_command_id()


# ══════════════════════════════════════════════════════════════
# AMOUNTS
# ══════════════════════════════════════════════════════════════

class TestAmounts:

    def test_to_amount_goes_through_str(self):
        from kargah.core.primitives import to_amount
        assert to_amount(0.1) == Decimal("0.1")
        assert to_amount("") == Decimal(0)
        assert to_amount(None) == Decimal(0)

    def test_to_amount_rejects_garbage(self):
        from kargah.core.primitives import to_amount
        with pytest.raises(ValueError):
            to_amount("ten")
        with pytest.raises(ValueError):
            to_amount(True)

    def test_amount_to_json(self):
        from kargah.core.primitives import amount_to_json
        assert amount_to_json(Decimal("3.00")) == 3
        assert isinstance(amount_to_json(Decimal("3.00")), int)
        assert amount_to_json(Decimal("2.5")) == 2.5


# ══════════════════════════════════════════════════════════════
# ENGINE RULES
# ══════════════════════════════════════════════════════════════

class TestEngineRules:

    def test_defaults(self):
        from kargah.core.config import CostingDiscipline, EngineRules, OverpaymentPolicy
        rules = EngineRules()
        assert rules.overpayment_policy == OverpaymentPolicy.ACCEPT
        assert rules.costing_discipline == CostingDiscipline.RECURSIVE
        assert rules.hours_per_day == Decimal(8)

    def test_from_dict(self):
        from kargah.core.config import CostingDiscipline, EngineRules, OverpaymentPolicy
        rules = EngineRules.from_dict({
            "OVERPAYMENT_POLICY": "REJECT",
            "COSTING_DISCIPLINE": "STORED",
            "HOURS_PER_DAY": 10,
        })
        assert rules.overpayment_policy == OverpaymentPolicy.REJECT
        assert rules.costing_discipline == CostingDiscipline.STORED
        assert rules.hours_per_day == Decimal(10)
        assert EngineRules.from_dict(rules.to_dict()) == rules

    def test_invalid_values_raise(self):
        from kargah.core.config import EngineRules
        with pytest.raises(ValueError, match="Invalid engine rule"):
            EngineRules.from_dict({"OVERPAYMENT_POLICY": "MAYBE"})
        with pytest.raises(ValueError, match="hours_per_day"):
            EngineRules(hours_per_day=Decimal(0))

    def test_rules_from_settings_object(self):
        from types import SimpleNamespace

        from kargah.core.config import OverpaymentPolicy, rules_from_settings
        settings_obj = SimpleNamespace(KARGAH_ENGINE_RULES={"OVERPAYMENT_POLICY": "REJECT"})
        assert rules_from_settings(settings_obj).overpayment_policy == OverpaymentPolicy.REJECT

    def test_rules_from_django_settings(self, settings):
        from kargah.core.config import CostingDiscipline, rules_from_settings
        settings.KARGAH_ENGINE_RULES = {"COSTING_DISCIPLINE": "STORED"}
        assert rules_from_settings().costing_discipline == CostingDiscipline.STORED
