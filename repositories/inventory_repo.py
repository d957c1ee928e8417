"""
repositories/inventory_repo.py
------------------------------
Data access layer for the `components` table (inventory).
"""

from models.inventory import Component
from repositories.base import RecordRepository


class ComponentRepository(RecordRepository):
    table = "components"
    columns = ("name", "quantity", "unit_price", "min_stock", "category")
    updatable = frozenset(columns)
    order_by = (("name", "ASC"),)

    @staticmethod
    def _from_row(row) -> Component:
        return Component(
            id=str(row["id"]),
            name=row["name"],
            quantity=int(row["quantity"]),
            unit_price=float(row["unit_price"]),
            min_stock=int(row["min_stock"]),
            category=row["category"] or "",
        )
