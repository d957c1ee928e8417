"""
utils/errors.py
---------------
Exception hierarchy shared by services and handlers.

Every exception carries a message that can be shown to the user as-is.
Handlers catch ``FinanceError`` and reply with ``str(error)``; nothing is
retried automatically.
"""

from typing import Iterable


class FinanceError(Exception):
    """Base class for recoverable, user-facing failures."""


class ValidationError(FinanceError):
    """Input rejected before any call to the store."""


class StoreError(FinanceError):
    """
    A record-store call failed.

    Attributes:
        action: What was attempted, e.g. ``"add transaction"``.
    """

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Failed to {action}")


class RecordNotFoundError(FinanceError):
    """An update targeted an id the store does not hold for this account."""

    def __init__(self, label: str, record_id: str):
        self.record_id = record_id
        super().__init__(f"No {label} with id {record_id}")


class RecordShapeError(FinanceError):
    """A row returned by the store does not match the entity schema."""

    def __init__(self, table: str, missing: Iterable[str]):
        self.table = table
        self.missing = sorted(missing)
        super().__init__(
            f"Unexpected row shape from '{table}': missing {', '.join(self.missing)}"
        )


class PredictionError(FinanceError):
    """The prediction model call failed."""

    default_message = "Failed to generate predictions"

    def __init__(self, message: str | None = None, status: int | None = None):
        self.status = status
        super().__init__(message or self.default_message)


class RateLimitError(PredictionError):
    """Upstream answered HTTP 429."""

    default_message = "Rate limits exceeded, please try again later."


class QuotaExceededError(PredictionError):
    """Upstream answered HTTP 402."""

    default_message = "Payment required, please add funds."
