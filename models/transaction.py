"""
models/transaction.py
---------------------
Domain model for ledger transactions (income and expenses).
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from utils.errors import ValidationError

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

CATEGORIES = (
    "rent",
    "salary",
    "marketing",
    "general",
    "stock",
    "3d-printing",
    "courses",
    "school",
    "projects",
    "utilities",
    "transfer",
    "other",
)


@dataclass(frozen=True)
class Transaction:
    """
    A single dated income or expense entry.

    Records are immutable; edits produce a new instance via
    ``dataclasses.replace``.

    Attributes:
        type: Either 'income' or 'expense'.
        category: One of ``CATEGORIES``.
        amount: Transaction amount. Entry requires > 0, but rows read back
            from the store are taken as given.
        description: Free text, may be empty.
        date: Calendar date of the transaction.
        id: Opaque store id (None for records not yet stored).
        created_at: Insertion timestamp set by the store.
    """
    type: str
    category: str
    amount: float
    date: date = field(default_factory=date.today)
    description: str = ""
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def is_income(self) -> bool:
        return self.type == INCOME

    def is_expense(self) -> bool:
        return self.type == EXPENSE

    def validate(self) -> None:
        """Entry-time checks; raises ValidationError."""
        if self.type not in TRANSACTION_TYPES:
            raise ValidationError(f"Unknown transaction type '{self.type}'")
        if self.category not in CATEGORIES:
            raise ValidationError(
                f"Unknown category '{self.category}'. Choose one of: {', '.join(CATEGORIES)}"
            )
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise ValidationError("Please enter a valid amount")

    def to_json(self) -> dict:
        """Compact camelCase view used in the prediction payload."""
        return {
            "type": self.type,
            "category": self.category,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"{sign}{self.amount:.2f} | {self.category} | {self.date}"
