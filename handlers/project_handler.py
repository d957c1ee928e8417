"""
handlers/project_handler.py
---------------------------
Handles client project commands.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors, run_blocking
from models.project import PROJECT_STATUSES, Project
from services.report_service import project_report
from utils.command_args import as_date, as_float, as_str, parse_fields
from utils.errors import ValidationError
from utils.formatting import format_currency, format_signed
from utils.logger import get_logger

logger = get_logger(__name__)

_FLOAT_FIELDS = ("total_cost", "total_income", "hours_spent")
_TEXT_FIELDS = ("name", "description", "status")


def project_changes(fields: dict[str, str]) -> dict:
    """Typed update fields for /update_project (everything except ``id``)."""
    changes = {}
    for key in fields:
        if key == "id":
            continue
        if key in _FLOAT_FIELDS:
            changes[key] = as_float(fields, key)
        elif key in _TEXT_FIELDS:
            changes[key] = as_str(fields, key, "")
        elif key == "start_date":
            changes[key] = as_date(fields, key)
        else:
            raise ValidationError(f"Unknown project field '{key}'")
    return changes


@reports_errors
async def projects_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /projects command - list projects with their profit."""
    state = await current_state(update)
    if not state.projects:
        await update.message.reply_text("📭 No projects yet. Use /add_project.")
        return

    report = project_report(state.projects)
    lines = [
        "🛠 Projects\n",
        f"Active: {report.active_count} | Hours: {report.total_hours:g} | "
        f"Profit: {format_signed(report.total_profit)}\n",
    ]
    for p in state.projects:
        lines.append(
            f"• {p.name} [{p.status}] since {p.start_date}: "
            f"{format_currency(p.total_income)} in, {format_currency(p.total_cost)} out "
            f"({format_signed(p.profit)})"
        )
        lines.append(f"   🆔 {p.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_project_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_project command.
    Usage: /add_project name="School robotics kit" [total_cost=] [total_income=] [hours_spent=] [status=active]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_project name=\"...\" [description=] [total_cost=0] [total_income=0] "
            f"[hours_spent=0] [status={'|'.join(PROJECT_STATUSES)}] [start_date=YYYY-MM-DD]"
        )
        return

    fields = parse_fields(context.args)
    project = Project(
        name=as_str(fields, "name"),
        description=as_str(fields, "description", ""),
        total_cost=as_float(fields, "total_cost", 0.0),
        total_income=as_float(fields, "total_income", 0.0),
        hours_spent=as_float(fields, "hours_spent", 0.0),
        status=as_str(fields, "status", "active"),
        start_date=as_date(fields, "start_date", date.today()),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_project, project)
    await update.message.reply_text(f"✅ Project added: {stored.name}\n🆔 {stored.id}")


@reports_errors
async def update_project_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /update_project command.
    Usage: /update_project id=<id> total_income=45000 status=completed
    """
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text(
            "⚠️ Usage: /update_project id=<id> [name=] [total_cost=] [total_income=] "
            "[hours_spent=] [status=] [description=]"
        )
        return

    state = await current_state(update)
    updated = await run_blocking(state.update_project, fields["id"], **project_changes(fields))
    await update.message.reply_text(
        f"✏️ Updated {updated.name} [{updated.status}]: profit {format_signed(updated.profit)}"
    )


@reports_errors
async def delete_project_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_project id=<id>."""
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text("⚠️ Usage: /delete_project id=<id>")
        return

    state = await current_state(update)
    if await run_blocking(state.delete_project, fields["id"]):
        await update.message.reply_text("🗑️ Project deleted.")
    else:
        await update.message.reply_text("⚠️ No project with that id.")
