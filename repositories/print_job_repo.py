"""
repositories/print_job_repo.py
------------------------------
Data access layer for the `print_jobs` table.
"""

from models.print_job import PrintJob
from repositories.base import RecordRepository


class PrintJobRepository(RecordRepository):
    table = "print_jobs"
    columns = (
        "name", "filament_used", "filament_cost", "labor_hours",
        "hourly_rate", "electricity_cost", "total_cost", "date",
    )
    order_by = (("date", "DESC"), ("created_at", "DESC"))

    @staticmethod
    def _from_row(row) -> PrintJob:
        return PrintJob(
            id=str(row["id"]),
            name=row["name"],
            filament_used=float(row["filament_used"]),
            filament_cost=float(row["filament_cost"]),
            labor_hours=float(row["labor_hours"]),
            hourly_rate=float(row["hourly_rate"]),
            electricity_cost=float(row["electricity_cost"]),
            total_cost=float(row["total_cost"]),
            date=row["date"],
        )
