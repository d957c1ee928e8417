"""
models/summary.py
-----------------
The dashboard's headline numbers. Derived on every read, never stored.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class DashboardSummary:
    total_income: float = 0.0
    total_expense: float = 0.0
    profit: float = 0.0
    rent_total: float = 0.0
    salary_total: float = 0.0
    marketing_total: float = 0.0
    utilities_total: float = 0.0
    transfer_total: float = 0.0
    stock_value: float = 0.0
    print_jobs_revenue: float = 0.0
    courses_revenue: float = 0.0
    school_revenue: float = 0.0
    projects_profit: float = 0.0
    monthly_income: float = 0.0
    monthly_expense: float = 0.0

    @property
    def monthly_profit(self) -> float:
        return self.monthly_income - self.monthly_expense

    def to_json(self) -> dict:
        """camelCase keys, matching the names used by the web dashboard and the prediction payload."""
        return {_camel(key): value for key, value in asdict(self).items()}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
