"""
handlers/common.py
------------------
Objects shared by every handler module: the per-account state registry
and the decorator that turns domain errors into chat replies.
"""

import asyncio
from functools import wraps
from typing import Any, Callable

from telegram import Update
from telegram.ext import ContextTypes

from services.finance_state import FinanceState, StateRegistry
from utils.errors import FinanceError
from utils.logger import get_logger

logger = get_logger(__name__)

# One loaded FinanceState per Telegram user, created on first use
registry = StateRegistry()


async def current_state(update: Update) -> FinanceState:
    """The account of the user who sent ``update``, loaded off the event loop."""
    return await asyncio.to_thread(registry.get, update.effective_user.id)


async def run_blocking(func: Callable, *args, **kwargs) -> Any:
    """Run a store-backed or CPU-bound call in a worker thread."""
    return await asyncio.to_thread(func, *args, **kwargs)


def reports_errors(func: Callable):
    """
    Decorator that replies with the message of any FinanceError.

    Usage:
        @reports_errors
        async def my_handler(update, context):
            ...

    Validation problems, store failures and prediction errors all carry a
    user-facing message, so the handler body only deals with the happy path.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        if not update.effective_user:
            return
        try:
            return await func(update, context, *args, **kwargs)
        except FinanceError as e:
            logger.info(f"{func.__name__} for user {update.effective_user.id} failed: {e}")
            await update.message.reply_text(f"⚠️ {e}")

    return wrapper
