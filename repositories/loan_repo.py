"""
repositories/loan_repo.py
-------------------------
Data access layer for the `loans` table.
"""

from models.loan import Loan
from repositories.base import RecordRepository


class LoanRepository(RecordRepository):
    """Loans, most recently added first. Only repayment progress is patched."""

    table = "loans"
    columns = (
        "name", "principal_amount", "interest_rate", "total_emi_count",
        "paid_emi_count", "emi_amount", "start_date", "lender", "notes", "status",
    )
    server_columns = ("id", "created_at")
    updatable = frozenset({"paid_emi_count", "status"})
    order_by = (("created_at", "DESC"),)

    @staticmethod
    def _from_row(row) -> Loan:
        return Loan(
            id=str(row["id"]),
            name=row["name"],
            principal_amount=float(row["principal_amount"]),
            interest_rate=float(row["interest_rate"]),
            total_emi_count=int(row["total_emi_count"]),
            paid_emi_count=int(row["paid_emi_count"]),
            emi_amount=float(row["emi_amount"]),
            start_date=row["start_date"],
            lender=row["lender"] or "",
            notes=row["notes"] or "",
            status=row["status"],
            created_at=row["created_at"],
        )
