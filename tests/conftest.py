"""
Shared fixtures: an in-memory record store that behaves like the
PostgreSQL repositories, and FinanceState instances wired to it.
"""

import uuid
from dataclasses import fields, replace
from datetime import date, datetime

import pytest

from models.inventory import Component
from models.project import Project
from models.transaction import EXPENSE, INCOME, Transaction
from repositories.inventory_repo import ComponentRepository
from repositories.loan_repo import LoanRepository
from repositories.project_repo import ProjectRepository
from repositories.team_repo import ShareholderRepository
from services.finance_state import FinanceState, Stores


class InMemoryStore:
    """list_all/add/update/delete over a list; ``fail_writes``/``fail_reads`` simulate outages."""

    def __init__(self, updatable=frozenset()):
        self.updatable = updatable
        self.records: dict[int, list] = {}
        self.fail_writes = False
        self.fail_reads = False
        self.calls: list[str] = []

    def _rows(self, user_id):
        return self.records.setdefault(user_id, [])

    def list_all(self, user_id):
        self.calls.append("list_all")
        if self.fail_reads:
            raise ConnectionError("store unreachable")
        return list(self._rows(user_id))

    def add(self, record, user_id):
        self.calls.append("add")
        if self.fail_writes:
            raise ConnectionError("store unreachable")
        changes = {"id": str(uuid.uuid4())}
        if "created_at" in {f.name for f in fields(record)}:
            changes["created_at"] = datetime.now()
        stored = replace(record, **changes)
        self._rows(user_id).append(stored)
        return stored

    def update(self, record_id, user_id, **changes):
        self.calls.append("update")
        if self.fail_writes:
            raise ConnectionError("store unreachable")
        if not changes or set(changes) - self.updatable:
            raise ValueError("bad update")
        rows = self._rows(user_id)
        for i, row in enumerate(rows):
            if row.id == record_id:
                rows[i] = replace(row, **changes)
                return rows[i]
        return None

    def delete(self, record_id, user_id):
        self.calls.append("delete")
        if self.fail_writes:
            raise ConnectionError("store unreachable")
        rows = self._rows(user_id)
        kept = [r for r in rows if r.id != record_id]
        self.records[user_id] = kept
        return len(kept) != len(rows)


@pytest.fixture
def stores():
    return Stores(
        transactions=InMemoryStore(),
        employees=InMemoryStore(),
        components=InMemoryStore(ComponentRepository.updatable),
        students=InMemoryStore(),
        print_jobs=InMemoryStore(),
        projects=InMemoryStore(ProjectRepository.updatable),
        loans=InMemoryStore(LoanRepository.updatable),
        shareholders=InMemoryStore(ShareholderRepository.updatable),
        investments=InMemoryStore(),
    )


@pytest.fixture
def state(stores):
    finance_state = FinanceState(user_id=42, stores=stores)
    finance_state.load()
    return finance_state


@pytest.fixture
def sample_transactions():
    return [
        Transaction(INCOME, "courses", 50000, date(2025, 3, 5), "Batch 7 fees", id="t1"),
        Transaction(INCOME, "3d-printing", 8000, date(2025, 3, 10), id="t2"),
        Transaction(EXPENSE, "rent", 15000, date(2025, 3, 1), id="t3"),
        Transaction(EXPENSE, "salary", 30000, date(2025, 2, 28), id="t4"),
        Transaction(EXPENSE, "marketing", 5000, date(2025, 3, 12), id="t5"),
        Transaction(INCOME, "marketing", 2000, date(2025, 3, 14), id="t6"),
    ]


@pytest.fixture
def sample_components():
    return [
        Component("Arduino Uno R3", 10, 25.0, min_stock=15, category="Boards", id="c1"),
        Component("Ultrasonic sensor", 20, 24.0, min_stock=5, category="Sensors", id="c2"),
    ]


@pytest.fixture
def sample_projects():
    return [
        Project("School robotics kit", total_cost=20000, total_income=45000, id="p1"),
        Project("Line follower workshop", total_cost=8000, total_income=5000, status="completed", id="p2"),
    ]
