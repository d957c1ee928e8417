"""
utils/formatting.py
-------------------
Number formatting helpers for bot replies.
"""

from config import CURRENCY_SYMBOL


def format_currency(amount: float, decimals: int = 0) -> str:
    """Format an amount with the currency symbol and thousands separators, e.g. ``৳12,500``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.{decimals}f}"


def format_signed(amount: float) -> str:
    """Like ``format_currency`` but always shows the sign (``+৳500`` / ``-৳200``)."""
    return ("+" if amount >= 0 else "") + format_currency(amount)
