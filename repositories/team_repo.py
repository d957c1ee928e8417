"""
repositories/team_repo.py
-------------------------
Data access layer for people records: `employees`, `students`,
`shareholders` and `shareholder_investments`.
"""

from models.team import Employee, Shareholder, ShareholderInvestment, Student
from repositories.base import RecordRepository


class EmployeeRepository(RecordRepository):
    table = "employees"
    columns = ("name", "position", "salary", "start_date")
    order_by = (("name", "ASC"),)

    @staticmethod
    def _from_row(row) -> Employee:
        return Employee(
            id=str(row["id"]),
            name=row["name"],
            position=row["position"],
            salary=float(row["salary"]),
            start_date=row["start_date"],
        )


class StudentRepository(RecordRepository):
    table = "students"
    columns = ("name", "email", "course", "batch_id", "enrollment_date", "payment_status")
    order_by = (("name", "ASC"),)

    @staticmethod
    def _from_row(row) -> Student:
        return Student(
            id=str(row["id"]),
            name=row["name"],
            email=row["email"] or "",
            course=row["course"],
            batch_id=row["batch_id"] or "",
            enrollment_date=row["enrollment_date"],
            payment_status=row["payment_status"],
        )


class ShareholderRepository(RecordRepository):
    table = "shareholders"
    columns = ("name", "designation", "ownership_percentage", "total_invested", "email", "phone")
    updatable = frozenset({"total_invested"})
    order_by = (("ownership_percentage", "DESC"), ("name", "ASC"))

    @staticmethod
    def _from_row(row) -> Shareholder:
        return Shareholder(
            id=str(row["id"]),
            name=row["name"],
            designation=row["designation"] or "",
            ownership_percentage=float(row["ownership_percentage"]),
            total_invested=float(row["total_invested"] or 0),
            email=row["email"] or "",
            phone=row["phone"] or "",
        )


class InvestmentRepository(RecordRepository):
    table = "shareholder_investments"
    columns = ("shareholder_id", "amount", "investment_date", "description")
    order_by = (("investment_date", "DESC"),)

    @staticmethod
    def _from_row(row) -> ShareholderInvestment:
        return ShareholderInvestment(
            id=str(row["id"]),
            shareholder_id=str(row["shareholder_id"]),
            amount=float(row["amount"]),
            investment_date=row["investment_date"],
            description=row["description"] or "",
        )
