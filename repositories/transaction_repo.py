"""
repositories/transaction_repo.py
--------------------------------
Data access layer for the `transactions` table.
"""

from models.transaction import Transaction
from repositories.base import RecordRepository


class TransactionRepository(RecordRepository):
    """Transactions, newest first. Rows are never patched, only added or deleted."""

    table = "transactions"
    columns = ("type", "category", "amount", "description", "date")
    server_columns = ("id", "created_at")
    order_by = (("date", "DESC"), ("created_at", "DESC"))

    @staticmethod
    def _from_row(row) -> Transaction:
        return Transaction(
            id=str(row["id"]),
            type=row["type"],
            category=row["category"],
            amount=float(row["amount"]),
            description=row["description"] or "",
            date=row["date"],
            created_at=row["created_at"],
        )
