"""
services/report_service.py
--------------------------
Per-feature breakdowns behind the individual bot views (monthly entries,
category pages, inventory, projects, payroll, printing, courses,
shareholders). Like the summary, every function here is a pure fold over
the collections it is given.
"""

from dataclasses import dataclass
from typing import Iterable

from models.inventory import Component
from models.print_job import PrintJob
from models.project import Project
from models.team import Employee, Shareholder, Student
from models.transaction import Transaction
from services.summary_service import in_month


@dataclass(frozen=True)
class FlowStats:
    """Income and expense totals over some slice of transactions."""
    income: float = 0.0
    expense: float = 0.0
    count: int = 0

    @property
    def net(self) -> float:
        return self.income - self.expense


def flow_stats(transactions: Iterable[Transaction]) -> FlowStats:
    income = expense = 0.0
    count = 0
    for tx in transactions:
        count += 1
        if tx.is_income():
            income += tx.amount
        elif tx.is_expense():
            expense += tx.amount
    return FlowStats(income=income, expense=expense, count=count)


def month_stats(transactions: Iterable[Transaction], year: int, month: int) -> FlowStats:
    return flow_stats(tx for tx in transactions if in_month(tx, year, month))


def month_transactions(transactions: Iterable[Transaction], year: int, month: int) -> list[Transaction]:
    return [tx for tx in transactions if in_month(tx, year, month)]


def yearly_breakdown(transactions: Iterable[Transaction], year: int) -> list[FlowStats]:
    """Twelve FlowStats, January first."""
    buckets: list[list[Transaction]] = [[] for _ in range(12)]
    for tx in transactions:
        if tx.date.year == year:
            buckets[tx.date.month - 1].append(tx)
    return [flow_stats(bucket) for bucket in buckets]


def category_report(transactions: Iterable[Transaction], category: str) -> FlowStats:
    """Income and expense of one category, kept apart (unlike the summary's NET fields)."""
    return flow_stats(tx for tx in transactions if tx.category == category)


def marketing_roi(transactions: Iterable[Transaction]) -> float:
    """(income − spend) / spend × 100, one decimal; 0 when nothing was spent."""
    stats = category_report(transactions, "marketing")
    if stats.expense <= 0:
        return 0.0
    return round((stats.income - stats.expense) / stats.expense * 100, 1)


@dataclass(frozen=True)
class InventoryReport:
    total_value: float
    item_count: int
    low_stock_count: int
    stock_purchases: float


def inventory_report(components: Iterable[Component], transactions: Iterable[Transaction]) -> InventoryReport:
    components = list(components)
    return InventoryReport(
        total_value=sum((c.stock_value for c in components), 0.0),
        item_count=len(components),
        low_stock_count=sum(1 for c in components if c.is_low_stock),
        stock_purchases=category_report(transactions, "stock").expense,
    )


@dataclass(frozen=True)
class ProjectReport:
    total_profit: float
    total_hours: float
    active_count: int


def project_report(projects: Iterable[Project]) -> ProjectReport:
    projects = list(projects)
    return ProjectReport(
        total_profit=sum((p.profit for p in projects), 0.0),
        total_hours=sum((p.hours_spent for p in projects), 0.0),
        active_count=sum(1 for p in projects if p.status == "active"),
    )


@dataclass(frozen=True)
class PayrollReport:
    monthly_payroll: float
    salary_paid: float
    headcount: int


def payroll_report(employees: Iterable[Employee], transactions: Iterable[Transaction]) -> PayrollReport:
    employees = list(employees)
    return PayrollReport(
        monthly_payroll=sum((e.salary for e in employees), 0.0),
        salary_paid=category_report(transactions, "salary").expense,
        headcount=len(employees),
    )


@dataclass(frozen=True)
class PrintReport:
    revenue: float
    total_cost: float
    total_hours: float

    @property
    def profit(self) -> float:
        return self.revenue - self.total_cost


def print_report(print_jobs: Iterable[PrintJob], transactions: Iterable[Transaction]) -> PrintReport:
    jobs = list(print_jobs)
    return PrintReport(
        revenue=category_report(transactions, "3d-printing").income,
        total_cost=sum((j.total_cost for j in jobs), 0.0),
        total_hours=sum((j.labor_hours for j in jobs), 0.0),
    )


@dataclass(frozen=True)
class EnrollmentReport:
    paid_count: int
    unpaid_count: int
    course_revenue: float


def enrollment_report(students: Iterable[Student], transactions: Iterable[Transaction]) -> EnrollmentReport:
    students = list(students)
    paid = sum(1 for s in students if s.has_paid)
    return EnrollmentReport(
        paid_count=paid,
        unpaid_count=len(students) - paid,
        course_revenue=category_report(transactions, "courses").income,
    )


@dataclass(frozen=True)
class ShareholderReport:
    total_invested: float
    total_ownership: float


def shareholder_report(shareholders: Iterable[Shareholder]) -> ShareholderReport:
    shareholders = list(shareholders)
    return ShareholderReport(
        total_invested=sum((s.total_invested or 0.0 for s in shareholders), 0.0),
        total_ownership=sum((s.ownership_percentage for s in shareholders), 0.0),
    )
