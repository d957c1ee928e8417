"""
services/finance_state.py
-------------------------
In-memory state of one account, backed by the record stores.

Workflow for every mutation:
    1. Validate the input (no store call on failure).
    2. Call the store.
    3. On failure raise StoreError; local collections are left untouched.
    4. On success reload that entity kind in full from the store. If only
       the reload fails, the write still counts and the stored record is
       merged locally.

Consistency comes from the full reload, not from merging deltas, so the
local view always mirrors what the store returned last.
"""

import threading
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Optional

from models.inventory import Component
from models.loan import LOAN_ACTIVE, LOAN_COMPLETED, Loan
from models.print_job import PrintJob
from models.project import Project
from models.summary import DashboardSummary
from models.team import Employee, Shareholder, ShareholderInvestment, Student
from models.transaction import EXPENSE, Transaction
from repositories.inventory_repo import ComponentRepository
from repositories.loan_repo import LoanRepository
from repositories.print_job_repo import PrintJobRepository
from repositories.project_repo import ProjectRepository
from repositories.team_repo import (
    EmployeeRepository,
    InvestmentRepository,
    ShareholderRepository,
    StudentRepository,
)
from repositories.transaction_repo import TransactionRepository
from services.summary_service import aggregate
from utils.errors import RecordNotFoundError, StoreError, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

# kind -> (singular label, plural label) used in user-facing messages
KINDS: dict[str, tuple[str, str]] = {
    "transactions": ("transaction", "transactions"),
    "employees": ("employee", "employees"),
    "components": ("component", "components"),
    "students": ("student", "students"),
    "print_jobs": ("print job", "print jobs"),
    "projects": ("project", "projects"),
    "loans": ("loan", "loans"),
    "shareholders": ("shareholder", "shareholders"),
    "investments": ("investment", "investments"),
}


@dataclass
class Stores:
    """One record store per entity kind; anything with list_all/add/update/delete fits."""
    transactions: Any
    employees: Any
    components: Any
    students: Any
    print_jobs: Any
    projects: Any
    loans: Any
    shareholders: Any
    investments: Any

    @classmethod
    def postgres(cls) -> "Stores":
        return cls(
            transactions=TransactionRepository(),
            employees=EmployeeRepository(),
            components=ComponentRepository(),
            students=StudentRepository(),
            print_jobs=PrintJobRepository(),
            projects=ProjectRepository(),
            loans=LoanRepository(),
            shareholders=ShareholderRepository(),
            investments=InvestmentRepository(),
        )


class FinanceState:
    """
    Collections of a single account plus the operations that change them.

    Attributes mirror ``KINDS``: ``transactions``, ``employees``,
    ``components``, ``students``, ``print_jobs``, ``projects``, ``loans``,
    ``shareholders`` and ``investments``, each a list in store order.
    """

    def __init__(self, user_id: int, stores: Stores):
        self.user_id = user_id
        self.stores = stores
        self.transactions: list[Transaction] = []
        self.employees: list[Employee] = []
        self.components: list[Component] = []
        self.students: list[Student] = []
        self.print_jobs: list[PrintJob] = []
        self.projects: list[Project] = []
        self.loans: list[Loan] = []
        self.shareholders: list[Shareholder] = []
        self.investments: list[ShareholderInvestment] = []

    # ── LOADING ───────────────────────────────────────────

    def load(self) -> None:
        """Reload every entity kind."""
        for kind in KINDS:
            self.refresh(kind)

    def refresh(self, kind: str) -> list:
        """Replace the local list of ``kind`` with a fresh copy from the store."""
        _, plural = KINDS[kind]
        try:
            records = getattr(self.stores, kind).list_all(self.user_id)
        except Exception as e:
            logger.error(f"Failed to load {plural} for user {self.user_id}: {e}")
            raise StoreError(f"load {plural}") from e
        setattr(self, kind, list(records))
        return getattr(self, kind)

    def find(self, kind: str, record_id: str) -> Optional[Any]:
        return next((r for r in getattr(self, kind) if r.id == record_id), None)

    # ── SUMMARY ───────────────────────────────────────────

    def summary(self, today: Optional[date] = None) -> DashboardSummary:
        return aggregate(self.transactions, self.components, self.projects, today)

    # ── TRANSACTIONS ──────────────────────────────────────

    def add_transaction(self, transaction: Transaction) -> Transaction:
        return self._create("transactions", transaction)

    def delete_transaction(self, transaction_id: str) -> bool:
        return self._delete("transactions", transaction_id)

    # ── INVENTORY ─────────────────────────────────────────

    def add_component(self, component: Component) -> Component:
        return self._create("components", component)

    def update_component(self, component_id: str, **fields: Any) -> Component:
        return self._update("components", component_id, fields)

    def delete_component(self, component_id: str) -> bool:
        return self._delete("components", component_id)

    # ── PROJECTS ──────────────────────────────────────────

    def add_project(self, project: Project) -> Project:
        return self._create("projects", project)

    def update_project(self, project_id: str, **fields: Any) -> Project:
        return self._update("projects", project_id, fields)

    def delete_project(self, project_id: str) -> bool:
        return self._delete("projects", project_id)

    # ── PEOPLE ────────────────────────────────────────────

    def add_employee(self, employee: Employee) -> Employee:
        return self._create("employees", employee)

    def delete_employee(self, employee_id: str) -> bool:
        return self._delete("employees", employee_id)

    def add_student(self, student: Student) -> Student:
        return self._create("students", student)

    def delete_student(self, student_id: str) -> bool:
        return self._delete("students", student_id)

    def add_shareholder(self, shareholder: Shareholder) -> Shareholder:
        return self._create("shareholders", shareholder)

    def delete_shareholder(self, shareholder_id: str) -> bool:
        deleted = self._delete("shareholders", shareholder_id)
        if deleted:
            # Investments go with their shareholder (ON DELETE CASCADE)
            self.investments = [i for i in self.investments if i.shareholder_id != shareholder_id]
            self._reload_after_write("investments")
        return deleted

    def record_investment(self, investment: ShareholderInvestment) -> Shareholder:
        """
        Store an investment and add its amount to the shareholder's total.

        Returns:
            The shareholder with the new ``total_invested``.

        The two writes are not atomic: if patching the total fails, the
        investment row stays stored and ``total_invested`` is unchanged.
        """
        investment.validate()
        shareholder = self.find("shareholders", investment.shareholder_id)
        if shareholder is None:
            raise RecordNotFoundError("shareholder", investment.shareholder_id)
        self._create("investments", investment, action="record investment")
        return self._update(
            "shareholders",
            shareholder.id,
            {"total_invested": shareholder.total_invested + investment.amount},
            action="record investment",
        )

    # ── PRINTING ──────────────────────────────────────────

    def add_print_job(self, job: PrintJob) -> PrintJob:
        """Store the job and book its total cost as a 3d-printing expense."""
        stored = self._create("print_jobs", job)
        self.add_transaction(Transaction(
            type=EXPENSE,
            category="3d-printing",
            amount=stored.total_cost,
            date=stored.date,
            description=f"3D Print Job: {stored.name}",
        ))
        return stored

    def delete_print_job(self, job_id: str) -> bool:
        return self._delete("print_jobs", job_id)

    # ── LOANS ─────────────────────────────────────────────

    def add_loan(self, loan: Loan) -> Loan:
        return self._create("loans", replace(loan, paid_emi_count=0, status=LOAN_ACTIVE))

    def pay_emi(self, loan_id: str) -> Loan:
        """Record one installment; the loan completes with its last EMI."""
        loan = self.find("loans", loan_id)
        if loan is None:
            raise RecordNotFoundError("loan", loan_id)
        if loan.paid_emi_count >= loan.total_emi_count:
            raise ValidationError("All EMIs already paid")
        paid = loan.paid_emi_count + 1
        status = LOAN_COMPLETED if paid >= loan.total_emi_count else LOAN_ACTIVE
        return self._update(
            "loans", loan_id, {"paid_emi_count": paid, "status": status},
            action="record payment",
        )

    def delete_loan(self, loan_id: str) -> bool:
        return self._delete("loans", loan_id)

    # ── HELPERS ───────────────────────────────────────────

    def _create(self, kind: str, record: Any, action: Optional[str] = None) -> Any:
        label, _ = KINDS[kind]
        record.validate()
        stored = self._call_store(
            action or f"add {label}",
            lambda: getattr(self.stores, kind).add(record, self.user_id),
        )
        self._reload_after_write(kind, stored)
        return stored

    def _update(self, kind: str, record_id: str, fields: dict, action: Optional[str] = None) -> Any:
        label, _ = KINDS[kind]
        store = getattr(self.stores, kind)
        if not fields:
            raise ValidationError(f"Nothing to update on {label}")
        unknown = set(fields) - set(store.updatable)
        if unknown:
            raise ValidationError(f"Cannot change {', '.join(sorted(unknown))} on a {label}")
        current = self.find(kind, record_id)
        if current is not None:
            replace(current, **fields).validate()

        updated = self._call_store(
            action or f"update {label}",
            lambda: store.update(record_id, self.user_id, **fields),
        )
        if updated is None:
            raise RecordNotFoundError(label, record_id)
        self._reload_after_write(kind, updated)
        return updated

    def _delete(self, kind: str, record_id: str) -> bool:
        label, _ = KINDS[kind]
        deleted = self._call_store(
            f"delete {label}",
            lambda: getattr(self.stores, kind).delete(record_id, self.user_id),
        )
        if deleted:
            setattr(self, kind, [r for r in getattr(self, kind) if r.id != record_id])
        else:
            logger.info(f"Delete of unknown {label} {record_id} for user {self.user_id}")
        self._reload_after_write(kind)
        return deleted

    def _reload_after_write(self, kind: str, stored: Any = None) -> None:
        """
        Reload ``kind`` after the store confirmed a write.

        A failed reload does not fail the write: the stored record is
        merged into the local list and the next refresh reconciles.
        """
        try:
            self.refresh(kind)
        except StoreError as e:
            logger.warning(f"Write to {kind} for user {self.user_id} succeeded but reload failed: {e}")
            if stored is None:
                return
            records = getattr(self, kind)
            if any(r.id == stored.id for r in records):
                setattr(self, kind, [stored if r.id == stored.id else r for r in records])
            else:
                setattr(self, kind, records + [stored])

    def _call_store(self, action: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except Exception as e:
            logger.error(f"Failed to {action} for user {self.user_id}: {e}")
            raise StoreError(action) from e


class StateRegistry:
    """Keeps one loaded FinanceState per account for the lifetime of the process."""

    def __init__(self, stores_factory: Callable[[], Stores] = Stores.postgres):
        self._stores_factory = stores_factory
        self._states: dict[int, FinanceState] = {}
        # Handlers call get() from worker threads
        self._lock = threading.Lock()

    def get(self, user_id: int) -> FinanceState:
        with self._lock:
            state = self._states.get(user_id)
            if state is None:
                state = FinanceState(user_id, self._stores_factory())
                state.load()
                self._states[user_id] = state
            return state
