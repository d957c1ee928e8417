"""
services/loan_service.py
------------------------
Loan arithmetic: the EMI formula and portfolio-level totals.
"""

import math
from dataclasses import dataclass
from typing import Iterable

from models.loan import Loan


def calculate_emi(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """
    Fixed monthly installment for an amortizing loan.

    With a monthly rate ``r = annual_rate_percent / 100 / 12``:

        r == 0:  principal / term_months            (not rounded)
        r > 0:   P·r·(1+r)^n / ((1+r)^n − 1)        rounded half-up to a whole unit

    Precondition: ``term_months >= 1`` (callers validate it).
    """
    r = annual_rate_percent / 100 / 12
    if r == 0:
        return principal / term_months
    growth = (1 + r) ** term_months
    emi = principal * r * growth / (growth - 1)
    return float(math.floor(emi + 0.5))


@dataclass(frozen=True)
class LoanPortfolio:
    total_outstanding: float = 0.0
    total_principal: float = 0.0
    monthly_emi: float = 0.0
    active_count: int = 0


def loan_portfolio(loans: Iterable[Loan]) -> LoanPortfolio:
    """Totals shown at the top of the loans view."""
    outstanding = principal = monthly = 0.0
    active = 0
    for loan in loans:
        outstanding += loan.outstanding
        principal += loan.principal_amount
        if loan.is_active:
            monthly += loan.emi_amount
            active += 1
    return LoanPortfolio(
        total_outstanding=outstanding,
        total_principal=principal,
        monthly_emi=monthly,
        active_count=active,
    )
