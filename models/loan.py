"""
models/loan.py
--------------
Domain model for company loans repaid in equal monthly installments (EMIs).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from utils.errors import ValidationError

LOAN_ACTIVE = "active"
LOAN_COMPLETED = "completed"
LOAN_STATUSES = (LOAN_ACTIVE, LOAN_COMPLETED)


@dataclass(frozen=True)
class Loan:
    """
    An amortizing loan.

    Attributes:
        name: Friendly name, e.g. 'Equipment Loan'.
        principal_amount: Amount borrowed.
        interest_rate: Annual interest rate in percent.
        total_emi_count: Number of monthly installments.
        emi_amount: Fixed installment amount.
        paid_emi_count: Installments paid so far.
        status: 'active' until every EMI is paid, then 'completed'.
    """
    name: str
    principal_amount: float
    interest_rate: float
    total_emi_count: int
    emi_amount: float
    paid_emi_count: int = 0
    start_date: date = field(default_factory=date.today)
    lender: str = ""
    notes: str = ""
    status: str = LOAN_ACTIVE
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def remaining_emis(self) -> int:
        return max(self.total_emi_count - self.paid_emi_count, 0)

    @property
    def outstanding(self) -> float:
        return self.remaining_emis * self.emi_amount

    @property
    def is_active(self) -> bool:
        return self.status == LOAN_ACTIVE

    @property
    def progress(self) -> float:
        """Fraction of installments paid, 0.0-1.0."""
        if self.total_emi_count <= 0:
            return 0.0
        return min(self.paid_emi_count / self.total_emi_count, 1.0)

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("Please enter a loan name")
        if not self.principal_amount > 0:
            raise ValidationError("Principal must be positive")
        if not self.interest_rate >= 0:
            raise ValidationError("Interest rate cannot be negative")
        if self.total_emi_count < 1:
            raise ValidationError("A loan needs at least one installment")
        if not self.emi_amount >= 0:
            raise ValidationError("EMI amount cannot be negative")
