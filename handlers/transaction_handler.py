"""
handlers/transaction_handler.py
-------------------------------
Handles the ledger: dashboard summary, monthly view, adding and
deleting income/expense entries.
Delegates to FinanceState and the report functions.
"""

import calendar
from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from config import RECENT_TRANSACTIONS_LIMIT
from handlers.common import current_state, reports_errors, run_blocking
from models.transaction import CATEGORIES, EXPENSE, INCOME, Transaction
from services.report_service import marketing_roi, month_stats, month_transactions
from utils.command_args import as_date, as_float, as_int, as_str, parse_fields
from utils.formatting import format_currency, format_signed
from utils.logger import get_logger

logger = get_logger(__name__)

_ADD_USAGE = (
    "Usage: /add_{kind} category=<category> amount=<amount> "
    "[date=YYYY-MM-DD] [description=\"...\"]\n"
    "Categories: " + ", ".join(CATEGORIES)
)


@reports_errors
async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /summary command - show the dashboard figures."""
    state = await current_state(update)
    s = state.summary()

    await update.message.reply_text(
        "📊 Dashboard\n\n"
        f"💰 Total income: {format_currency(s.total_income)}\n"
        f"💸 Total expenses: {format_currency(s.total_expense)}\n"
        f"📈 Net profit: {format_signed(s.profit)}\n\n"
        f"📅 This month: {format_currency(s.monthly_income)} in, "
        f"{format_currency(s.monthly_expense)} out ({format_signed(s.monthly_profit)})\n\n"
        f"🏠 Rent: {format_currency(s.rent_total)}\n"
        f"👥 Salaries: {format_currency(s.salary_total)}\n"
        f"📣 Marketing: {format_currency(s.marketing_total)} "
        f"(ROI {marketing_roi(state.transactions)}%)\n"
        f"💡 Utilities: {format_currency(s.utilities_total)}\n"
        f"🔁 Transfers: {format_currency(s.transfer_total)}\n\n"
        f"📦 Stock value: {format_currency(s.stock_value)}\n"
        f"🖨 3D printing revenue: {format_currency(s.print_jobs_revenue)}\n"
        f"🎓 Course revenue: {format_currency(s.courses_revenue)}\n"
        f"🏫 School revenue: {format_currency(s.school_revenue)}\n"
        f"🛠 Project profit: {format_signed(s.projects_profit)}"
    )


@reports_errors
async def month_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /month command - income, expenses and top categories of a month.

    Usage:
        /month                  → current month
        /month year=2025 month=3
    """
    today = date.today()
    fields = parse_fields(context.args or [])
    year = as_int(fields, "year", today.year)
    month = as_int(fields, "month", today.month)
    if not 1 <= month <= 12:
        await update.message.reply_text("⚠️ month must be between 1 and 12.")
        return

    state = await current_state(update)
    stats = month_stats(state.transactions, year, month)
    by_category: dict[str, float] = {}
    for tx in month_transactions(state.transactions, year, month):
        if tx.is_expense():
            by_category[tx.category] = by_category.get(tx.category, 0.0) + tx.amount

    lines = [
        f"📅 {calendar.month_name[month]} {year}\n",
        f"💰 Income: {format_currency(stats.income)}",
        f"💸 Expenses: {format_currency(stats.expense)}",
        f"📈 Net: {format_signed(stats.net)}",
        f"🧾 Entries: {stats.count}",
    ]
    if by_category:
        lines.append("\nTop expense categories:")
        for category, amount in sorted(by_category.items(), key=lambda kv: kv[1], reverse=True)[:5]:
            lines.append(f"  • {category}: {format_currency(amount)}")

    await update.message.reply_text("\n".join(lines))


async def _add_transaction(update: Update, context: ContextTypes.DEFAULT_TYPE, tx_type: str) -> None:
    kind = "income" if tx_type == INCOME else "expense"
    if not context.args:
        await update.message.reply_text(_ADD_USAGE.format(kind=kind))
        return

    fields = parse_fields(context.args)
    transaction = Transaction(
        type=tx_type,
        category=as_str(fields, "category"),
        amount=as_float(fields, "amount"),
        date=as_date(fields, "date", date.today()),
        description=as_str(fields, "description", ""),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_transaction, transaction)
    logger.info(f"User {update.effective_user.id} added {kind} {stored.id}")

    icon = "💰" if tx_type == INCOME else "💸"
    await update.message.reply_text(
        f"✅ {kind.capitalize()} recorded\n"
        f"{icon} {format_currency(stored.amount, 2)} | {stored.category} | {stored.date}\n"
        f"🆔 {stored.id}"
    )


@reports_errors
async def add_income_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add_income command - record an income entry."""
    await _add_transaction(update, context, INCOME)


@reports_errors
async def add_expense_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /add_expense command - record an expense entry."""
    await _add_transaction(update, context, EXPENSE)


@reports_errors
async def transactions_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /transactions command - list the newest entries."""
    state = await current_state(update)
    if not state.transactions:
        await update.message.reply_text("📭 No transactions yet.")
        return

    lines = ["🧾 Latest transactions\n"]
    for tx in state.transactions[:RECENT_TRANSACTIONS_LIMIT]:
        icon = "💰" if tx.is_income() else "💸"
        line = f"{icon} {tx.date} | {tx.category} | {format_currency(tx.amount, 2)}"
        if tx.description:
            line += f" | {tx.description}"
        lines.append(line)
        lines.append(f"   🆔 {tx.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /delete command - delete a transaction.
    Usage: /delete id=<transaction id>
    """
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text("⚠️ Usage: /delete id=<transaction id>")
        return

    state = await current_state(update)
    if await run_blocking(state.delete_transaction, fields["id"]):
        await update.message.reply_text("🗑️ Transaction deleted.")
    else:
        await update.message.reply_text("⚠️ No transaction with that id.")
