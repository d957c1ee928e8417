"""
models/team.py
--------------
Domain models for people around the business: employees, students and
shareholders (with their investment history).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from utils.errors import ValidationError

PAYMENT_STATUSES = ("paid", "pending", "overdue")


@dataclass(frozen=True)
class Employee:
    """A salaried team member; ``salary`` is the monthly amount."""
    name: str
    position: str
    salary: float
    start_date: date = field(default_factory=date.today)
    id: Optional[str] = None

    def validate(self) -> None:
        if not self.name.strip() or not self.position.strip():
            raise ValidationError("Please fill in all required fields")
        if not self.salary >= 0:
            raise ValidationError("Salary cannot be negative")


@dataclass(frozen=True)
class Student:
    """A course participant and the state of their fee payment."""
    name: str
    course: str
    email: str = ""
    batch_id: str = ""
    enrollment_date: date = field(default_factory=date.today)
    payment_status: str = "pending"
    id: Optional[str] = None

    @property
    def has_paid(self) -> bool:
        return self.payment_status == "paid"

    def validate(self) -> None:
        if not self.name.strip() or not self.course.strip():
            raise ValidationError("Please fill in all required fields")
        if self.payment_status not in PAYMENT_STATUSES:
            raise ValidationError(
                f"Unknown payment status '{self.payment_status}'. "
                f"Choose one of: {', '.join(PAYMENT_STATUSES)}"
            )


@dataclass(frozen=True)
class Shareholder:
    """
    An owner of the company.

    Attributes:
        ownership_percentage: Share of the company, 0-100.
        total_invested: Running sum of recorded investments.
    """
    name: str
    designation: str = ""
    ownership_percentage: float = 0.0
    total_invested: float = 0.0
    email: str = ""
    phone: str = ""
    id: Optional[str] = None

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("Please fill in all required fields")
        if not 0 <= self.ownership_percentage <= 100:
            raise ValidationError("Ownership must be between 0 and 100 percent")


@dataclass(frozen=True)
class ShareholderInvestment:
    """A single capital injection by a shareholder."""
    shareholder_id: str
    amount: float
    investment_date: date = field(default_factory=date.today)
    description: str = ""
    id: Optional[str] = None

    def validate(self) -> None:
        if not self.amount > 0:
            raise ValidationError("Investment amount must be positive")
