"""
models/print_job.py
-------------------
Domain model for 3D-print jobs and their cost breakdown.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from utils.errors import ValidationError

DEFAULT_FILAMENT_COST_PER_GRAM = 0.03
DEFAULT_HOURLY_RATE = 25.0


@dataclass(frozen=True)
class PrintJob:
    """
    A finished 3D-print job.

    Attributes:
        filament_used: Filament consumed, in grams.
        filament_cost: Cost of that filament.
        labor_hours: Hours of operator time.
        hourly_rate: Labour rate per hour.
        electricity_cost: Power cost of the print.
        total_cost: filament + labour + electricity.
    """
    name: str
    filament_used: float
    filament_cost: float
    labor_hours: float
    hourly_rate: float
    electricity_cost: float
    total_cost: float
    date: date = field(default_factory=date.today)
    id: Optional[str] = None

    def validate(self) -> None:
        if not self.name.strip() or not self.filament_used > 0 or not self.labor_hours > 0:
            raise ValidationError("Please fill in all required fields")
        if not self.hourly_rate >= 0 or not self.electricity_cost >= 0:
            raise ValidationError("Rates and costs cannot be negative")


def price_print_job(
    name: str,
    filament_used: float,
    labor_hours: float,
    cost_per_gram: float = DEFAULT_FILAMENT_COST_PER_GRAM,
    hourly_rate: float = DEFAULT_HOURLY_RATE,
    electricity_cost: float = 0.0,
    job_date: Optional[date] = None,
) -> PrintJob:
    """Build a PrintJob, computing its filament and total cost."""
    filament_cost = filament_used * cost_per_gram
    total_cost = filament_cost + labor_hours * hourly_rate + electricity_cost
    return PrintJob(
        name=name,
        filament_used=filament_used,
        filament_cost=filament_cost,
        labor_hours=labor_hours,
        hourly_rate=hourly_rate,
        electricity_cost=electricity_cost,
        total_cost=total_cost,
        date=job_date or date.today(),
    )
