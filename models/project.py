"""
models/project.py
-----------------
Domain model for client projects.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from utils.errors import ValidationError

PROJECT_STATUSES = ("active", "completed", "paused")


@dataclass(frozen=True)
class Project:
    """
    A client project with its running cost and income.

    Attributes:
        name: Project name.
        description: Optional notes.
        total_cost: Money spent so far.
        total_income: Money received so far.
        hours_spent: Labour hours logged.
        status: 'active', 'completed' or 'paused'.
        start_date: When the project started.
        id: Opaque store id.
    """
    name: str
    description: str = ""
    total_cost: float = 0.0
    total_income: float = 0.0
    hours_spent: float = 0.0
    status: str = "active"
    start_date: date = field(default_factory=date.today)
    id: Optional[str] = None

    @property
    def profit(self) -> float:
        return self.total_income - self.total_cost

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("Please enter a project name")
        if self.status not in PROJECT_STATUSES:
            raise ValidationError(
                f"Unknown status '{self.status}'. Choose one of: {', '.join(PROJECT_STATUSES)}"
            )
