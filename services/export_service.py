"""
services/export_service.py
---------------------------
Generates the downloadable inventory listing (CSV).
"""

import io
from typing import Iterable

import pandas as pd

from models.inventory import Component
from utils.logger import get_logger

logger = get_logger(__name__)

INVENTORY_FILENAME = "inventory.csv"
INVENTORY_COLUMNS = [
    "Name", "Category", "Quantity", "Unit Price", "Total Value", "Min Stock", "Status",
]


class ExportService:
    """Builds export files from in-memory collections."""

    def export_inventory_csv(self, components: Iterable[Component]) -> io.BytesIO:
        """
        Export the inventory as CSV.

        Money columns carry exactly two decimals; ``Status`` is ``Low Stock``
        when the quantity is below the item's minimum stock, else ``OK``.

        Returns:
            A BytesIO buffer positioned at the start of the CSV data.
        """
        data = [
            {
                "Name": c.name,
                "Category": c.category,
                "Quantity": c.quantity,
                "Unit Price": f"{c.unit_price:.2f}",
                "Total Value": f"{c.stock_value:.2f}",
                "Min Stock": c.min_stock,
                "Status": c.stock_status,
            }
            for c in components
        ]

        df = pd.DataFrame(data, columns=INVENTORY_COLUMNS)
        buffer = io.BytesIO()
        df.to_csv(buffer, index=False, encoding="utf-8", lineterminator="\n")
        buffer.seek(0)
        logger.info(f"Exported {len(data)} inventory rows as CSV")
        return buffer
