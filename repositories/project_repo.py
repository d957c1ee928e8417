"""
repositories/project_repo.py
----------------------------
Data access layer for the `projects` table.
"""

from models.project import Project
from repositories.base import RecordRepository


class ProjectRepository(RecordRepository):
    table = "projects"
    columns = (
        "name", "description", "total_cost", "total_income",
        "hours_spent", "status", "start_date",
    )
    updatable = frozenset(columns)
    order_by = (("start_date", "DESC"),)

    @staticmethod
    def _from_row(row) -> Project:
        return Project(
            id=str(row["id"]),
            name=row["name"],
            description=row["description"] or "",
            total_cost=float(row["total_cost"]),
            total_income=float(row["total_income"]),
            hours_spent=float(row["hours_spent"]),
            status=row["status"],
            start_date=row["start_date"],
        )
