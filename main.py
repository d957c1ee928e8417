"""
main.py
-------
Entry point for the BOT Ledger Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
"""

from telegram import BotCommand
from telegram.ext import Application, CommandHandler

from config import TELEGRAM_BOT_TOKEN
from db.connection import close_pool, init_pool
from db.init_db import create_tables
from handlers.chart_handler import chart_command
from handlers.inventory_handler import (
    add_component_command,
    delete_component_command,
    export_stock_command,
    stock_command,
    update_component_command,
)
from handlers.loan_handler import (
    add_loan_command,
    delete_loan_command,
    emi_command,
    loans_command,
    pay_emi_command,
)
from handlers.prediction_handler import predict_command
from handlers.printing_handler import (
    add_print_job_command,
    delete_print_job_command,
    print_jobs_command,
)
from handlers.project_handler import (
    add_project_command,
    delete_project_command,
    projects_command,
    update_project_command,
)
from handlers.start_handler import help_command, start_command
from handlers.team_handler import (
    add_employee_command,
    add_shareholder_command,
    add_student_command,
    delete_employee_command,
    delete_shareholder_command,
    delete_student_command,
    employees_command,
    invest_command,
    shareholders_command,
    students_command,
)
from handlers.transaction_handler import (
    add_expense_command,
    add_income_command,
    delete_command,
    month_command,
    summary_command,
    transactions_command,
)
from utils.logger import get_logger

logger = get_logger(__name__)

# command -> (handler, menu description)
COMMANDS = {
    "start": (start_command, "🚀 Start the bot"),
    "help": (help_command, "📖 Show help"),
    "summary": (summary_command, "📊 Dashboard summary"),
    "month": (month_command, "📅 Month summary"),
    "add_income": (add_income_command, "💰 Record income"),
    "add_expense": (add_expense_command, "💸 Record expense"),
    "transactions": (transactions_command, "🧾 Latest transactions"),
    "delete": (delete_command, "🗑️ Delete a transaction"),
    "stock": (stock_command, "📦 Inventory"),
    "add_component": (add_component_command, "➕ Add component"),
    "update_component": (update_component_command, "✏️ Update component"),
    "delete_component": (delete_component_command, "❌ Delete component"),
    "export_stock": (export_stock_command, "📄 Inventory CSV"),
    "projects": (projects_command, "🛠 Projects"),
    "add_project": (add_project_command, "➕ Add project"),
    "update_project": (update_project_command, "✏️ Update project"),
    "delete_project": (delete_project_command, "❌ Delete project"),
    "employees": (employees_command, "👥 Employees"),
    "add_employee": (add_employee_command, "➕ Add employee"),
    "delete_employee": (delete_employee_command, "❌ Delete employee"),
    "students": (students_command, "🎓 Students"),
    "add_student": (add_student_command, "➕ Add student"),
    "delete_student": (delete_student_command, "❌ Delete student"),
    "print_jobs": (print_jobs_command, "🖨 3D print jobs"),
    "add_print_job": (add_print_job_command, "➕ Add print job"),
    "delete_print_job": (delete_print_job_command, "❌ Delete print job"),
    "loans": (loans_command, "🏦 Loans"),
    "add_loan": (add_loan_command, "➕ Add loan"),
    "pay_emi": (pay_emi_command, "💳 Pay an EMI"),
    "delete_loan": (delete_loan_command, "❌ Delete loan"),
    "emi": (emi_command, "🧮 EMI calculator"),
    "shareholders": (shareholders_command, "🏛 Shareholders"),
    "add_shareholder": (add_shareholder_command, "➕ Add shareholder"),
    "invest": (invest_command, "💵 Record investment"),
    "delete_shareholder": (delete_shareholder_command, "❌ Delete shareholder"),
    "predict": (predict_command, "🔮 AI predictions"),
    "chart": (chart_command, "📈 Charts"),
}


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    commands = [BotCommand(name, description) for name, (_, description) in COMMANDS.items()]
    await application.bot.set_my_commands(commands)
    logger.info("Bot commands menu registered successfully.")


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = Application.builder().token(TELEGRAM_BOT_TOKEN).post_init(set_bot_commands).build()

    # ── 3. Register command handlers ──────────────────────
    for name, (handler, _) in COMMANDS.items():
        app.add_handler(CommandHandler(name, handler))

    # ── 4. Start polling ──────────────────────────────────
    logger.info("🚀 BOT Ledger is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])

    # ── 5. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("BOT Ledger stopped.")


if __name__ == "__main__":
    main()
