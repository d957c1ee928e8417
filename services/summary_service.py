"""
services/summary_service.py
---------------------------
Computes the dashboard summary from the current collections.

``aggregate`` is a pure function: it reads its inputs once, mutates
nothing, keeps no state, and returns the same result for the same
arguments. It is cheap enough to call on every request.
"""

from datetime import date
from enum import Enum
from typing import Iterable, Optional

from models.inventory import Component
from models.project import Project
from models.summary import DashboardSummary
from models.transaction import Transaction


class CategoryPolicy(str, Enum):
    """How a per-category summary field picks its rows."""

    # Income and expense rows of the category are added together, unsigned.
    NET = "net"
    # Only income rows of the category count.
    REVENUE_ONLY = "revenue_only"


# summary field -> (category, policy)
CATEGORY_FIELDS: dict[str, tuple[str, CategoryPolicy]] = {
    "rent_total": ("rent", CategoryPolicy.NET),
    "salary_total": ("salary", CategoryPolicy.NET),
    "marketing_total": ("marketing", CategoryPolicy.NET),
    "utilities_total": ("utilities", CategoryPolicy.NET),
    "transfer_total": ("transfer", CategoryPolicy.NET),
    "print_jobs_revenue": ("3d-printing", CategoryPolicy.REVENUE_ONLY),
    "courses_revenue": ("courses", CategoryPolicy.REVENUE_ONLY),
    "school_revenue": ("school", CategoryPolicy.REVENUE_ONLY),
}


def in_month(tx: Transaction, year: int, month: int) -> bool:
    return tx.date.year == year and tx.date.month == month


def aggregate(
    transactions: Iterable[Transaction],
    components: Iterable[Component] = (),
    projects: Iterable[Project] = (),
    today: Optional[date] = None,
) -> DashboardSummary:
    """
    Build the DashboardSummary.

    Args:
        transactions: All transactions of the account, any order.
        components: Inventory items, for the stock value.
        projects: Projects, for the summed project profit.
        today: Reference date for the monthly figures (default: today).

    Returns:
        A DashboardSummary; all zeros for empty input.
    """
    today = today or date.today()
    totals = {name: 0.0 for name in CATEGORY_FIELDS}
    total_income = total_expense = 0.0
    monthly_income = monthly_expense = 0.0

    for tx in transactions:
        this_month = in_month(tx, today.year, today.month)
        if tx.is_income():
            total_income += tx.amount
            if this_month:
                monthly_income += tx.amount
        elif tx.is_expense():
            total_expense += tx.amount
            if this_month:
                monthly_expense += tx.amount

        for name, (category, policy) in CATEGORY_FIELDS.items():
            if tx.category != category:
                continue
            if policy is CategoryPolicy.REVENUE_ONLY and not tx.is_income():
                continue
            totals[name] += tx.amount

    return DashboardSummary(
        total_income=total_income,
        total_expense=total_expense,
        profit=total_income - total_expense,
        stock_value=sum((c.quantity * c.unit_price for c in components), 0.0),
        projects_profit=sum((p.total_income - p.total_cost for p in projects), 0.0),
        monthly_income=monthly_income,
        monthly_expense=monthly_expense,
        **totals,
    )
