from datetime import date

import pytest

from models.inventory import Component
from models.summary import DashboardSummary
from models.transaction import EXPENSE, INCOME, Transaction
from services.summary_service import CATEGORY_FIELDS, CategoryPolicy, aggregate

TODAY = date(2025, 3, 20)


def test_empty_input_gives_all_zeros():
    summary = aggregate([], today=TODAY)
    assert summary == DashboardSummary()
    assert summary.profit == 0.0
    assert summary.monthly_profit == 0.0


def test_totals_and_profit(sample_transactions):
    summary = aggregate(sample_transactions, today=TODAY)
    assert summary.total_income == 60000
    assert summary.total_expense == 50000
    assert summary.profit == summary.total_income - summary.total_expense == 10000


def test_category_fields(sample_transactions):
    summary = aggregate(sample_transactions, today=TODAY)
    assert summary.rent_total == 15000
    assert summary.salary_total == 30000
    # NET: marketing spend and marketing income are added together
    assert summary.marketing_total == 7000
    assert summary.courses_revenue == 50000
    assert summary.print_jobs_revenue == 8000
    assert summary.school_revenue == 0
    assert summary.utilities_total == 0
    assert summary.transfer_total == 0


def test_category_fields_never_exceed_grand_total(sample_transactions):
    summary = aggregate(sample_transactions, today=TODAY)
    category_sum = sum(getattr(summary, name) for name in CATEGORY_FIELDS)
    assert category_sum <= summary.total_income + summary.total_expense


def test_rent_counts_income_but_courses_ignore_expenses():
    transactions = [
        Transaction(INCOME, "rent", 1000, date(2025, 1, 1)),
        Transaction(EXPENSE, "rent", 4000, date(2025, 1, 2)),
        Transaction(INCOME, "courses", 3000, date(2025, 1, 3)),
        Transaction(EXPENSE, "courses", 500, date(2025, 1, 4)),
    ]
    summary = aggregate(transactions, today=TODAY)
    assert summary.rent_total == 5000
    assert summary.courses_revenue == 3000


def test_policies_are_assigned_as_documented():
    assert CATEGORY_FIELDS["rent_total"] == ("rent", CategoryPolicy.NET)
    assert CATEGORY_FIELDS["transfer_total"] == ("transfer", CategoryPolicy.NET)
    assert CATEGORY_FIELDS["school_revenue"] == ("school", CategoryPolicy.REVENUE_ONLY)


def test_stock_value_and_project_profit(sample_transactions, sample_components, sample_projects):
    summary = aggregate(sample_transactions, sample_components, sample_projects, today=TODAY)
    assert summary.stock_value == 730
    assert summary.projects_profit == 22000


def test_monthly_figures_use_reference_date(sample_transactions):
    summary = aggregate(sample_transactions, today=TODAY)
    assert summary.monthly_income == 60000
    assert summary.monthly_expense == 20000
    assert summary.monthly_profit == 40000

    february = aggregate(sample_transactions, today=date(2025, 2, 1))
    assert february.monthly_income == 0
    assert february.monthly_expense == 30000


def test_same_month_of_another_year_is_not_monthly():
    transactions = [Transaction(INCOME, "courses", 700, date(2024, 3, 20))]
    summary = aggregate(transactions, today=TODAY)
    assert summary.total_income == 700
    assert summary.monthly_income == 0


def test_aggregate_is_deterministic_and_does_not_mutate(sample_transactions, sample_components):
    before = list(sample_transactions)
    first = aggregate(sample_transactions, sample_components, today=TODAY)
    second = aggregate(sample_transactions, sample_components, today=TODAY)
    assert first == second
    assert sample_transactions == before


def test_accepts_single_pass_iterables(sample_transactions):
    summary = aggregate(iter(sample_transactions), iter([]), iter([]), today=TODAY)
    assert summary.total_income == 60000


@pytest.mark.parametrize("amount", [0.1, 0.2, 0.3])
def test_float_sums(amount):
    transactions = [Transaction(INCOME, "other", amount, TODAY) for _ in range(3)]
    assert aggregate(transactions, today=TODAY).total_income == pytest.approx(amount * 3)


def test_to_json_uses_camel_case(sample_transactions):
    payload = aggregate(sample_transactions, today=TODAY).to_json()
    assert payload["totalIncome"] == 60000
    assert payload["printJobsRevenue"] == 8000
    assert "monthlyExpense" in payload
    assert "total_income" not in payload


def test_stock_value_of_reference_inventory():
    components = [Component("Arduino", 25, 22.0), Component("Sensor", 15, 12.0)]
    assert aggregate([], components, today=TODAY).stock_value == 25 * 22 + 15 * 12 == 730
