"""
models/inventory.py
-------------------
Domain model for inventory components (parts kept in stock).
"""

import math
from dataclasses import dataclass
from typing import Optional

from utils.errors import ValidationError

LOW_STOCK = "Low Stock"
IN_STOCK = "OK"


@dataclass(frozen=True)
class Component:
    """
    An inventory item.

    Attributes:
        name: Display name, e.g. 'Arduino Uno R3'.
        quantity: Units on hand.
        unit_price: Purchase price per unit.
        min_stock: Reorder threshold; below it the item is low on stock.
        category: Free-text grouping, e.g. 'Sensors'.
        id: Opaque store id.
    """
    name: str
    quantity: int
    unit_price: float
    min_stock: int = 5
    category: str = "General"
    id: Optional[str] = None

    @property
    def stock_value(self) -> float:
        return self.quantity * self.unit_price

    @property
    def is_low_stock(self) -> bool:
        return self.quantity < self.min_stock

    @property
    def stock_status(self) -> str:
        return LOW_STOCK if self.is_low_stock else IN_STOCK

    def validate(self) -> None:
        if not self.name.strip():
            raise ValidationError("Please fill in all required fields")
        if not self.quantity >= 0:
            raise ValidationError("Quantity cannot be negative")
        if not math.isfinite(self.unit_price) or self.unit_price < 0:
            raise ValidationError("Unit price cannot be negative")
        if not self.min_stock >= 0:
            raise ValidationError("Minimum stock cannot be negative")
