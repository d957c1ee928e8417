"""
handlers/chart_handler.py
--------------------------
Handles chart generation commands.
Delegates to ChartService and sends images to the user.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors, run_blocking
from services.chart_service import ChartService
from services.report_service import yearly_breakdown
from utils.command_args import as_int, parse_fields
from utils.logger import get_logger

logger = get_logger(__name__)
chart_service = ChartService()


@reports_errors
async def chart_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /chart command - cash-flow donut plus monthly income/expense bars.

    Usage:
        /chart            → current year
        /chart year=2025
    """
    fields = parse_fields(context.args or [])
    year = as_int(fields, "year", date.today().year)
    state = await current_state(update)

    await update.message.reply_text("📊 Generating charts...")

    pie = await run_blocking(chart_service.cashflow_pie, state.summary())
    if pie is None:
        await update.message.reply_text("📭 No transactions recorded yet.")
        return
    await update.message.reply_photo(photo=pie, caption="📊 Income vs expenses, all time")

    bars = await run_blocking(chart_service.monthly_bar, yearly_breakdown(state.transactions, year), year)
    if bars:
        await update.message.reply_photo(photo=bars, caption=f"📈 Monthly cash flow - {year}")
    else:
        await update.message.reply_text(f"📭 No transactions in {year}.")
