from datetime import date

from models.print_job import price_print_job
from models.team import Employee, Shareholder, Student
from models.transaction import EXPENSE, INCOME, Transaction
from services.report_service import (
    category_report,
    enrollment_report,
    inventory_report,
    marketing_roi,
    month_stats,
    payroll_report,
    print_report,
    project_report,
    shareholder_report,
    yearly_breakdown,
)


def test_month_stats(sample_transactions):
    march = month_stats(sample_transactions, 2025, 3)
    assert march.income == 60000
    assert march.expense == 20000
    assert march.count == 5
    assert march.net == 40000


def test_yearly_breakdown(sample_transactions):
    months = yearly_breakdown(sample_transactions, 2025)
    assert len(months) == 12
    assert months[1].expense == 30000
    assert months[2].count == 5
    assert all(m.count == 0 for m in months[3:])
    assert all(m.count == 0 for m in yearly_breakdown(sample_transactions, 2024))


def test_category_report_keeps_directions_apart(sample_transactions):
    marketing = category_report(sample_transactions, "marketing")
    assert marketing.income == 2000
    assert marketing.expense == 5000


def test_marketing_roi(sample_transactions):
    assert marketing_roi(sample_transactions) == -60.0
    assert marketing_roi([]) == 0.0


def test_inventory_report(sample_components):
    purchases = [Transaction(EXPENSE, "stock", 900, date(2025, 1, 1))]
    report = inventory_report(sample_components, purchases)
    assert report.total_value == 730
    assert report.item_count == 2
    assert report.low_stock_count == 1
    assert report.stock_purchases == 900


def test_project_report(sample_projects):
    report = project_report(sample_projects)
    assert report.total_profit == 22000
    assert report.active_count == 1


def test_payroll_report():
    employees = [Employee("A", "Engineer", 30000), Employee("B", "Trainer", 20000)]
    paid = [Transaction(EXPENSE, "salary", 50000, date(2025, 1, 31))]
    report = payroll_report(employees, paid)
    assert report.monthly_payroll == 50000
    assert report.salary_paid == 50000
    assert report.headcount == 2


def test_print_report():
    jobs = [price_print_job("Gear", 100, 2), price_print_job("Case", 200, 1)]
    sales = [Transaction(INCOME, "3d-printing", 200, date(2025, 1, 1))]
    report = print_report(jobs, sales)
    assert report.revenue == 200
    assert round(report.total_cost, 2) == 84.0
    assert report.total_hours == 3
    assert round(report.profit, 2) == 116.0


def test_enrollment_report(sample_transactions):
    students = [
        Student("Nadia", "Arduino", payment_status="paid"),
        Student("Tanvir", "Arduino"),
        Student("Rafi", "Python", payment_status="overdue"),
    ]
    report = enrollment_report(students, sample_transactions)
    assert report.paid_count == 1
    assert report.unpaid_count == 2
    assert report.course_revenue == 50000


def test_shareholder_report():
    report = shareholder_report([
        Shareholder("Karim", ownership_percentage=60, total_invested=300000),
        Shareholder("Sadia", ownership_percentage=40),
    ])
    assert report.total_invested == 300000
    assert report.total_ownership == 100
