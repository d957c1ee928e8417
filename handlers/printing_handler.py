"""
handlers/printing_handler.py
----------------------------
Handles 3D-print job commands. Adding a job prices it and books the
total as a 3d-printing expense.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors, run_blocking
from models.print_job import DEFAULT_FILAMENT_COST_PER_GRAM, DEFAULT_HOURLY_RATE, price_print_job
from services.report_service import print_report
from utils.command_args import as_date, as_float, as_str, parse_fields
from utils.formatting import format_currency, format_signed
from utils.logger import get_logger

logger = get_logger(__name__)


@reports_errors
async def print_jobs_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /print_jobs command - list jobs with costs and printing profit."""
    state = await current_state(update)
    if not state.print_jobs:
        await update.message.reply_text("📭 No print jobs yet. Use /add_print_job.")
        return

    report = print_report(state.print_jobs, state.transactions)
    lines = [
        "🖨 3D print jobs\n",
        f"Revenue: {format_currency(report.revenue)} | Cost: {format_currency(report.total_cost, 2)} | "
        f"Profit: {format_signed(report.profit)}",
        f"Labour hours: {report.total_hours:g}\n",
    ]
    for job in state.print_jobs:
        lines.append(
            f"• {job.date} {job.name}: {job.filament_used:g} g, {job.labor_hours:g} h "
            f"→ {format_currency(job.total_cost, 2)}"
        )
        lines.append(f"   🆔 {job.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_print_job_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_print_job command.
    Usage: /add_print_job name="Gear housing" filament=120 hours=2 [cost_per_gram=0.03]
           [hourly_rate=25] [electricity=0] [date=YYYY-MM-DD]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_print_job name=\"...\" filament=<grams> hours=<labour hours> "
            f"[cost_per_gram={DEFAULT_FILAMENT_COST_PER_GRAM}] [hourly_rate={DEFAULT_HOURLY_RATE:g}] "
            "[electricity=0] [date=YYYY-MM-DD]"
        )
        return

    fields = parse_fields(context.args)
    job = price_print_job(
        name=as_str(fields, "name"),
        filament_used=as_float(fields, "filament"),
        labor_hours=as_float(fields, "hours"),
        cost_per_gram=as_float(fields, "cost_per_gram", DEFAULT_FILAMENT_COST_PER_GRAM),
        hourly_rate=as_float(fields, "hourly_rate", DEFAULT_HOURLY_RATE),
        electricity_cost=as_float(fields, "electricity", 0.0),
        job_date=as_date(fields, "date", date.today()),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_print_job, job)
    await update.message.reply_text(
        f"✅ Print job added: {stored.name}\n"
        f"Filament {format_currency(stored.filament_cost, 2)} + labour "
        f"{format_currency(stored.labor_hours * stored.hourly_rate, 2)} + electricity "
        f"{format_currency(stored.electricity_cost, 2)} = {format_currency(stored.total_cost, 2)}\n"
        f"💸 Booked as a 3d-printing expense.\n🆔 {stored.id}"
    )


@reports_errors
async def delete_print_job_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_print_job id=<id>. The booked expense stays in the ledger."""
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text("⚠️ Usage: /delete_print_job id=<id>")
        return

    state = await current_state(update)
    if await run_blocking(state.delete_print_job, fields["id"]):
        await update.message.reply_text("🗑️ Print job deleted.")
    else:
        await update.message.reply_text("⚠️ No print job with that id.")
