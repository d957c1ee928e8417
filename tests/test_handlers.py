import asyncio
import threading
from types import SimpleNamespace

import pytest

from handlers import common
from handlers.inventory_handler import component_changes, update_component_command
from handlers.loan_handler import add_loan_command, emi_command
from handlers.transaction_handler import add_expense_command, delete_command
from services.finance_state import StateRegistry
from utils.errors import ValidationError


class _Message:
    def __init__(self):
        self.replies = []

    async def reply_text(self, text, **kwargs):
        self.replies.append(text)


def _update(user_id=42):
    return SimpleNamespace(effective_user=SimpleNamespace(id=user_id, first_name="Test"), message=_Message())


def _run(handler, update, *args):
    asyncio.run(handler(update, SimpleNamespace(args=list(args))))
    return update.message.replies


@pytest.fixture
def registry(monkeypatch, stores):
    reg = StateRegistry(stores_factory=lambda: stores)
    monkeypatch.setattr(common, "registry", reg)
    return reg


def test_add_expense_records_transaction(registry):
    replies = _run(add_expense_command, _update(), "category=rent", "amount=12,000", 'description="March', 'rent"')
    [tx] = registry.get(42).transactions
    assert tx.amount == 12000
    assert tx.description == "March rent"
    assert replies[0].startswith("✅ Expense recorded")


def test_domain_errors_become_replies(registry):
    replies = _run(add_expense_command, _update(), "category=rent", "amount=0")
    assert replies == ["⚠️ Please enter a valid amount"]
    assert registry.get(42).transactions == []


def test_store_failures_become_replies(registry, stores):
    stores.transactions.fail_writes = True
    replies = _run(add_expense_command, _update(), "category=rent", "amount=10")
    assert replies == ["⚠️ Failed to add transaction"]


def test_delete_unknown_id(registry):
    assert _run(delete_command, _update(), "id=missing") == ["⚠️ No transaction with that id."]


def test_add_loan_computes_emi(registry):
    _run(add_loan_command, _update(), 'name="Equipment', 'Loan"', "principal=100000", "rate=12", "months=12")
    [loan] = registry.get(42).loans
    assert loan.emi_amount == 8885.0


def test_emi_calculator_validates(registry):
    assert _run(emi_command, _update(), "principal=1000", "rate=5", "months=0")[0].startswith("⚠️")


def test_update_component_reply(registry):
    state = registry.get(42)
    replies = _run(update_component_command, _update(), "quantity=3")
    assert replies[0].startswith("⚠️ Usage")
    assert state.components == []


def test_component_changes_types():
    assert component_changes({"id": "x", "quantity": "4", "unit_price": "2.5", "name": "LED"}) == {
        "quantity": 4, "unit_price": 2.5, "name": "LED",
    }
    with pytest.raises(ValidationError):
        component_changes({"id": "x", "colour": "red"})


def test_store_calls_run_off_the_event_loop_thread(registry, stores):
    loop_thread = threading.get_ident()
    seen = []
    add = stores.transactions.add

    def recording_add(record, user_id):
        seen.append(threading.get_ident())
        return add(record, user_id)

    stores.transactions.add = recording_add
    _run(add_expense_command, _update(), "category=rent", "amount=10")
    assert len(seen) == 1
    assert seen[0] != loop_thread


def test_run_blocking_returns_the_result():
    assert asyncio.run(common.run_blocking(sum, [1, 2, 3])) == 6
