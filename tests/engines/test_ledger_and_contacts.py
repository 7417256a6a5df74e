"""
Kargah Accounting and Customer Engine Tests
=============================================
Expense CRUD and contact CRUD with customer/supplier roles.
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


def accounting():
    from kargah.core.store import EntityStore
    from kargah.engines.accounting import AccountingService
    return AccountingService(store=EntityStore())


def customers():
    from kargah.core.store import EntityStore
    from kargah.engines.customer import CustomerService
    return CustomerService(store=EntityStore())


# ══════════════════════════════════════════════════════════════
# EXPENSES
# ══════════════════════════════════════════════════════════════

class TestExpenses:

    def test_add_expense(self):
        from kargah.engines.accounting.commands import ExpenseAddRequest
        service = accounting()
        result = service.execute(ExpenseAddRequest(
            expense_id=1, date=DAY, description=" Rent ", amount=D(5000), category="Rent",
        ).to_command(**kw()))
        assert result.event_type == "accounting.expense.added.v1"
        expense = service.store.get("expenses", 1)
        assert expense.description == "Rent"
        assert expense.amount == D(5000)

    def test_amount_must_be_positive(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.accounting.commands import ExpenseAddRequest
        with pytest.raises(ValidationError, match="amount"):
            ExpenseAddRequest(expense_id=1, date=DAY, description="Rent", amount=D(0))

    def test_description_required(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.accounting.commands import ExpenseAddRequest
        with pytest.raises(ValidationError, match="description"):
            ExpenseAddRequest(expense_id=1, date=DAY, description="", amount=D(1))

    def test_edit_and_delete(self):
        from kargah.engines.accounting.commands import (
            ExpenseAddRequest, ExpenseDeleteRequest, ExpenseEditRequest,
        )
        service = accounting()
        service.execute(ExpenseAddRequest(
            expense_id=1, date=DAY, description="Power", amount=D(100),
        ).to_command(**kw()))
        service.execute(ExpenseEditRequest(
            expense_id=1, date=DAY, description="Power", amount=D(120),
        ).to_command(**kw()))
        assert service.store.get("expenses", 1).amount == D(120)
        result = service.execute(ExpenseDeleteRequest(expense_id=1).to_command(**kw()))
        assert result.event_type == "accounting.expense.deleted.v1"
        assert service.store.all("expenses") == ()

    def test_edit_missing_expense(self):
        from kargah.core.commands import NotFoundError
        from kargah.engines.accounting.commands import ExpenseEditRequest
        with pytest.raises(NotFoundError, match="Expense #3"):
            accounting().execute(ExpenseEditRequest(
                expense_id=3, date=DAY, description="Power", amount=D(1),
            ).to_command(**kw()))


# ══════════════════════════════════════════════════════════════
# CONTACTS
# ══════════════════════════════════════════════════════════════

class TestContacts:

    def test_add_contact_with_both_roles(self):
        from kargah.core.primitives import ContactRole
        from kargah.engines.customer.commands import ContactAddRequest
        service = customers()
        result = service.execute(ContactAddRequest(
            contact_id=1, name="Asia Steel",
            roles=frozenset({ContactRole.CUSTOMER, ContactRole.SUPPLIER}),
            phone="021-555",
        ).to_command(**kw()))
        assert result.event_type == "customer.contact.added.v1"
        contact = service.store.get("contacts", 1)
        assert contact.is_customer and contact.is_supplier
        assert contact.to_dict()["roles"] == ["CUSTOMER", "SUPPLIER"]

    def test_roles_required(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.customer.commands import ContactAddRequest
        with pytest.raises(ValidationError, match="role"):
            ContactAddRequest(contact_id=1, name="Nobody", roles=frozenset())

    def test_roles_must_be_enum(self):
        from kargah.core.commands import ValidationError
        from kargah.engines.customer.commands import ContactAddRequest
        with pytest.raises(ValidationError, match="ContactRole"):
            ContactAddRequest(contact_id=1, name="Nobody", roles=frozenset({"CUSTOMER"}))

    def test_edit_and_delete(self):
        from kargah.core.primitives import ContactRole
        from kargah.engines.customer.commands import (
            ContactAddRequest, ContactDeleteRequest, ContactEditRequest,
        )
        service = customers()
        roles = frozenset({ContactRole.CUSTOMER})
        service.execute(ContactAddRequest(
            contact_id=1, name="Ali", roles=roles,
        ).to_command(**kw()))
        service.execute(ContactEditRequest(
            contact_id=1, name="Ali Karimi", roles=roles, address="Tabriz",
        ).to_command(**kw()))
        assert service.store.get("contacts", 1).address == "Tabriz"
        service.execute(ContactDeleteRequest(contact_id=1).to_command(**kw()))
        assert service.store.all("contacts") == ()

    def test_delete_missing_contact(self):
        from kargah.core.commands import NotFoundError
        from kargah.engines.customer.commands import ContactDeleteRequest
        with pytest.raises(NotFoundError):
            customers().execute(ContactDeleteRequest(contact_id=5).to_command(**kw()))
