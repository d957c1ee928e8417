"""
handlers/loan_handler.py
------------------------
Handles loan commands and the EMI calculator.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors, run_blocking
from models.loan import Loan
from services.loan_service import calculate_emi, loan_portfolio
from utils.command_args import as_date, as_float, as_int, as_str, parse_fields
from utils.errors import ValidationError
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
async def loans_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /loans command - list loans and the portfolio totals."""
    state = await current_state(update)
    if not state.loans:
        await update.message.reply_text("📭 No loans recorded. Use /add_loan.")
        return

    portfolio = loan_portfolio(state.loans)
    lines = [
        "🏦 Loans\n",
        f"Outstanding: {format_currency(portfolio.total_outstanding)} | "
        f"Borrowed: {format_currency(portfolio.total_principal)}",
        f"Monthly EMI: {format_currency(portfolio.monthly_emi)} across {portfolio.active_count} active loans\n",
    ]
    for loan in state.loans:
        icon = "🟢" if loan.is_active else "✅"
        lender = f" from {loan.lender}" if loan.lender else ""
        lines.append(
            f"{icon} {loan.name}{lender}: {format_currency(loan.principal_amount)} at "
            f"{loan.interest_rate:g}% | EMI {format_currency(loan.emi_amount)} | "
            f"{loan.paid_emi_count}/{loan.total_emi_count} paid ({loan.progress:.0%})"
        )
        lines.append(f"   🆔 {loan.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_loan_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_loan command. The EMI is calculated when not given.
    Usage: /add_loan name="Equipment Loan" principal=500000 rate=12 months=24 [emi=] [lender=] [start_date=]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_loan name=\"...\" principal=<amount> rate=<annual %> months=<n> "
            "[emi=<auto>] [lender=\"...\"] [notes=\"...\"] [start_date=YYYY-MM-DD]"
        )
        return

    fields = parse_fields(context.args)
    principal = as_float(fields, "principal")
    rate = as_float(fields, "rate", 0.0)
    months = as_int(fields, "months")
    if months < 1:
        raise ValidationError("A loan needs at least one installment")
    emi = as_float(fields, "emi", calculate_emi(principal, rate, months))

    loan = Loan(
        name=as_str(fields, "name"),
        principal_amount=principal,
        interest_rate=rate,
        total_emi_count=months,
        emi_amount=emi,
        start_date=as_date(fields, "start_date", date.today()),
        lender=as_str(fields, "lender", ""),
        notes=as_str(fields, "notes", ""),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_loan, loan)
    await update.message.reply_text(
        f"✅ Loan added: {stored.name}\n"
        f"EMI {format_currency(stored.emi_amount)} × {stored.total_emi_count} months\n"
        f"🆔 {stored.id}"
    )


@reports_errors
async def pay_emi_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /pay_emi id=<loan id> - record one installment."""
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text("⚠️ Usage: /pay_emi id=<loan id>")
        return

    state = await current_state(update)
    loan = await run_blocking(state.pay_emi, fields["id"])
    if loan.is_active:
        await update.message.reply_text(
            f"✅ EMI recorded for {loan.name}: {loan.paid_emi_count}/{loan.total_emi_count} paid, "
            f"{format_currency(loan.outstanding)} outstanding"
        )
    else:
        await update.message.reply_text(f"🎉 {loan.name} is fully repaid!")


@reports_errors
async def delete_loan_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_loan id=<id>."""
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text("⚠️ Usage: /delete_loan id=<id>")
        return

    state = await current_state(update)
    if await run_blocking(state.delete_loan, fields["id"]):
        await update.message.reply_text("🗑️ Loan deleted.")
    else:
        await update.message.reply_text("⚠️ No loan with that id.")


@reports_errors
async def emi_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /emi command - EMI calculator.
    Usage: /emi principal=100000 rate=12 months=12
    """
    if not context.args:
        await update.message.reply_text("Usage: /emi principal=<amount> rate=<annual %> months=<n>")
        return

    fields = parse_fields(context.args)
    principal = as_float(fields, "principal")
    rate = as_float(fields, "rate")
    months = as_int(fields, "months")
    if principal <= 0 or rate < 0 or months < 1:
        raise ValidationError("Principal and months must be positive and the rate non-negative")

    emi = calculate_emi(principal, rate, months)
    total = emi * months
    await update.message.reply_text(
        "🧮 EMI calculator\n\n"
        f"Monthly EMI: {format_currency(emi, 2)}\n"
        f"Total payment: {format_currency(total, 2)}\n"
        f"Total interest: {format_currency(total - principal, 2)}"
    )
