"""
handlers/team_handler.py
------------------------
Handles people commands: employees, students, shareholders and
shareholder investments.
"""

from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from handlers.common import current_state, reports_errors, run_blocking
from models.team import PAYMENT_STATUSES, Employee, Shareholder, ShareholderInvestment, Student
from services.report_service import enrollment_report, payroll_report, shareholder_report
from utils.command_args import as_date, as_float, as_str, parse_fields
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)


async def _delete(update: Update, context: ContextTypes.DEFAULT_TYPE, kind: str, label: str) -> None:
    fields = parse_fields(context.args or [])
    if "id" not in fields:
        await update.message.reply_text(f"⚠️ Usage: /delete_{kind} id=<id>")
        return

    state = await current_state(update)
    if await run_blocking(getattr(state, f"delete_{kind}"), fields["id"]):
        await update.message.reply_text(f"🗑️ {label.capitalize()} deleted.")
    else:
        await update.message.reply_text(f"⚠️ No {label} with that id.")


# ── EMPLOYEES ─────────────────────────────────────────────

@reports_errors
async def employees_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /employees command - list the team and the payroll."""
    state = await current_state(update)
    if not state.employees:
        await update.message.reply_text("📭 No employees yet. Use /add_employee.")
        return

    report = payroll_report(state.employees, state.transactions)
    lines = [
        "👥 Employees\n",
        f"Headcount: {report.headcount} | Monthly payroll: {format_currency(report.monthly_payroll)}",
        f"Salaries booked: {format_currency(report.salary_paid)}\n",
    ]
    for e in state.employees:
        lines.append(f"• {e.name}, {e.position}: {format_currency(e.salary)}/month since {e.start_date}")
        lines.append(f"   🆔 {e.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_employee_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_employee command.
    Usage: /add_employee name="Rahim Uddin" position=Engineer salary=35000 [start_date=YYYY-MM-DD]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_employee name=\"...\" position=\"...\" salary=<monthly> [start_date=YYYY-MM-DD]"
        )
        return

    fields = parse_fields(context.args)
    employee = Employee(
        name=as_str(fields, "name"),
        position=as_str(fields, "position"),
        salary=as_float(fields, "salary"),
        start_date=as_date(fields, "start_date", date.today()),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_employee, employee)
    await update.message.reply_text(f"✅ Employee added: {stored.name}\n🆔 {stored.id}")


@reports_errors
async def delete_employee_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_employee id=<id>."""
    await _delete(update, context, "employee", "employee")


# ── STUDENTS ──────────────────────────────────────────────

@reports_errors
async def students_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /students command - list enrolled students and their payments."""
    state = await current_state(update)
    if not state.students:
        await update.message.reply_text("📭 No students yet. Use /add_student.")
        return

    report = enrollment_report(state.students, state.transactions)
    lines = [
        "🎓 Students\n",
        f"Paid: {report.paid_count} | Unpaid: {report.unpaid_count} | "
        f"Course revenue: {format_currency(report.course_revenue)}\n",
    ]
    for s in state.students:
        icon = "✅" if s.has_paid else "⏳"
        batch = f" ({s.batch_id})" if s.batch_id else ""
        lines.append(f"{icon} {s.name}: {s.course}{batch} [{s.payment_status}]")
        lines.append(f"   🆔 {s.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_student_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_student command.
    Usage: /add_student name="Nadia" course="Arduino Basics" [email=] [batch_id=] [payment_status=pending]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_student name=\"...\" course=\"...\" [email=] [batch_id=] "
            f"[payment_status={'|'.join(PAYMENT_STATUSES)}] [enrollment_date=YYYY-MM-DD]"
        )
        return

    fields = parse_fields(context.args)
    student = Student(
        name=as_str(fields, "name"),
        course=as_str(fields, "course"),
        email=as_str(fields, "email", ""),
        batch_id=as_str(fields, "batch_id", ""),
        enrollment_date=as_date(fields, "enrollment_date", date.today()),
        payment_status=as_str(fields, "payment_status", "pending"),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_student, student)
    await update.message.reply_text(f"✅ Student added: {stored.name}\n🆔 {stored.id}")


@reports_errors
async def delete_student_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_student id=<id>."""
    await _delete(update, context, "student", "student")


# ── SHAREHOLDERS ──────────────────────────────────────────

@reports_errors
async def shareholders_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /shareholders command - list owners and their capital."""
    state = await current_state(update)
    if not state.shareholders:
        await update.message.reply_text("📭 No shareholders yet. Use /add_shareholder.")
        return

    report = shareholder_report(state.shareholders)
    lines = [
        "🏛 Shareholders\n",
        f"Invested: {format_currency(report.total_invested)} | "
        f"Ownership recorded: {report.total_ownership:g}%\n",
    ]
    for sh in state.shareholders:
        title = f", {sh.designation}" if sh.designation else ""
        lines.append(
            f"• {sh.name}{title}: {sh.ownership_percentage:g}% | "
            f"invested {format_currency(sh.total_invested)}"
        )
        lines.append(f"   🆔 {sh.id}")

    await update.message.reply_text("\n".join(lines))


@reports_errors
async def add_shareholder_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /add_shareholder command.
    Usage: /add_shareholder name="Karim" designation=CEO ownership=40 [email=] [phone=]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /add_shareholder name=\"...\" [designation=] ownership=<percent> [email=] [phone=]"
        )
        return

    fields = parse_fields(context.args)
    shareholder = Shareholder(
        name=as_str(fields, "name"),
        designation=as_str(fields, "designation", ""),
        ownership_percentage=as_float(fields, "ownership", 0.0),
        email=as_str(fields, "email", ""),
        phone=as_str(fields, "phone", ""),
    )
    state = await current_state(update)
    stored = await run_blocking(state.add_shareholder, shareholder)
    await update.message.reply_text(f"✅ Shareholder added: {stored.name}\n🆔 {stored.id}")


@reports_errors
async def invest_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /invest command - record a capital injection.
    Usage: /invest shareholder_id=<id> amount=100000 [date=YYYY-MM-DD] [description="..."]
    """
    if not context.args:
        await update.message.reply_text(
            "Usage: /invest shareholder_id=<id> amount=<amount> [date=YYYY-MM-DD] [description=\"...\"]"
        )
        return

    fields = parse_fields(context.args)
    investment = ShareholderInvestment(
        shareholder_id=as_str(fields, "shareholder_id"),
        amount=as_float(fields, "amount"),
        investment_date=as_date(fields, "date", date.today()),
        description=as_str(fields, "description", ""),
    )
    state = await current_state(update)
    shareholder = await run_blocking(state.record_investment, investment)
    await update.message.reply_text(
        f"✅ Investment of {format_currency(investment.amount)} recorded for {shareholder.name}\n"
        f"Total invested: {format_currency(shareholder.total_invested)}"
    )


@reports_errors
async def delete_shareholder_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /delete_shareholder id=<id>."""
    await _delete(update, context, "shareholder", "shareholder")
